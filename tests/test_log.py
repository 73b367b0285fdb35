"""Tests for structlog setup and the demo entrypoint."""

import asyncio
import json

import pytest
import structlog

import main
from fetchsim.log import setup_logging


def test_json_renderer_writes_one_object_per_line(capsys) -> None:
    setup_logging({"level": "INFO", "format": "json"}, cache=False)
    structlog.get_logger("fetchsim.test").info("fetch_succeeded", id=2)

    line = capsys.readouterr().out.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["event"] == "fetch_succeeded"
    assert record["id"] == 2
    assert record["level"] == "info"
    assert record["logger"] == "fetchsim.test"
    assert "timestamp" in record


def test_level_filter_drops_debug(capsys) -> None:
    setup_logging({"level": "warning"}, cache=False)
    logger = structlog.get_logger("fetchsim.test")
    logger.debug("hidden")
    logger.warning("shown")

    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "shown" in out


def test_console_format(capsys) -> None:
    setup_logging({"format": "console"}, cache=False)
    structlog.get_logger("fetchsim.test").info("callbacks_completed", id=3)
    assert "callbacks_completed" in capsys.readouterr().out


@pytest.mark.parametrize("log_config", [{"format": "xml"}, {"level": "LOUD"}])
def test_invalid_settings_raise(log_config) -> None:
    with pytest.raises(ValueError):
        setup_logging(log_config, cache=False)


def test_main_runs_every_scenario(monkeypatch, capsys) -> None:
    monkeypatch.setenv("FETCHER_DELAY", "0")
    monkeypatch.setattr(main, "setup_logging", lambda cfg: setup_logging(cfg, cache=False))

    asyncio.run(main.main())

    events = [json.loads(line)["event"] for line in capsys.readouterr().out.strip().splitlines()]
    assert events[0] == "demo_started"
    assert events[-1] == "demo_finished"
    assert events.count("callbacks_completed") == 2
    assert events.count("fetch_all_failed") == 2
    assert events.count("fetch_all_succeeded") == 1
    assert "fetch_first_settled" in events
