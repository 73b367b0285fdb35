import logging
import sys
from typing import Any, Dict

import structlog


def setup_logging(log_config: Dict[str, Any] = None, cache: bool = True) -> None:
    """Route structlog through stdlib logging on stdout.

    `log_config` is the logging section of Config: `level` (stdlib level
    name) and `format` (`json` or `console`).
    """
    log_config = log_config or {}
    level = str(log_config.get('level', 'INFO')).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown log level: {level}")

    fmt = log_config.get('format', 'json')
    if fmt == 'json':
        renderer = structlog.processors.JSONRenderer()
    elif fmt == 'console':
        renderer = structlog.dev.ConsoleRenderer()
    else:
        raise ValueError(f"Unknown log format: {fmt}")

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level),
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=cache,
    )
