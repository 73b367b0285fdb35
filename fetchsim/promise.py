"""
Promise: an asyncio task with explicit Success/Failure outcomes and
chainable handlers (then / catch / finally_).

Every handler may be a plain callable or a coroutine function. Only
Exception subclasses count as failures; cancellation propagates untouched.
"""

import asyncio
import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Outcome of an operation that produced a value."""
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Outcome of an operation that raised."""
    error: Exception

    @property
    def ok(self) -> bool:
        return False


Outcome = Union[Success[T], Failure]


async def _call(handler: Callable, *args) -> Any:
    result = handler(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


def mark_observed(future: asyncio.Future) -> None:
    if not future.cancelled():
        future.exception()


class Promise(Generic[T]):
    def __init__(self, awaitable: Awaitable[T]):
        """Schedule `awaitable` on the running loop and track its settlement."""
        if isinstance(awaitable, Promise):
            self._future = awaitable.future
        else:
            self._future = asyncio.ensure_future(awaitable)

    @classmethod
    def resolve(cls, value: T) -> "Promise[T]":
        future = asyncio.get_running_loop().create_future()
        future.set_result(value)
        return cls(future)

    @classmethod
    def reject(cls, error: Exception) -> "Promise[Any]":
        future = asyncio.get_running_loop().create_future()
        future.set_exception(error)
        return cls(future)

    @property
    def future(self) -> asyncio.Future:
        return self._future

    def done(self) -> bool:
        return self._future.done()

    def outcome(self) -> Optional[Outcome]:
        """Return the settled outcome, or None while still pending."""
        if not self._future.done():
            return None
        error = self._future.exception()
        if error is not None:
            return Failure(error)
        return Success(self._future.result())

    def then(
        self,
        on_success: Optional[Callable[[T], Any]] = None,
        on_failure: Optional[Callable[[Exception], Any]] = None,
    ) -> "Promise[Any]":
        """Chain handlers; the returned promise settles with whatever they return or raise."""
        async def chained():
            try:
                value = await self._future
            except Exception as e:
                if on_failure is None:
                    raise
                return await _call(on_failure, e)
            if on_success is None:
                return value
            return await _call(on_success, value)

        # The failure moves to the chained promise
        self._future.add_done_callback(mark_observed)
        return Promise(chained())

    def catch(self, on_failure: Callable[[Exception], Any]) -> "Promise[Any]":
        return self.then(None, on_failure)

    def finally_(self, hook: Callable[[], Any]) -> "Promise[T]":
        """Run `hook` once after settlement, then pass the original outcome through."""
        async def chained():
            try:
                return await self._future
            finally:
                await _call(hook)

        self._future.add_done_callback(mark_observed)
        return Promise(chained())

    async def settle(self) -> Outcome:
        try:
            value = await self._future
        except Exception as e:
            return Failure(e)
        return Success(value)

    def __await__(self):
        return self._future.__await__()

    def __repr__(self) -> str:
        state = self.outcome()
        if state is None:
            return "<Promise pending>"
        return f"<Promise {state!r}>"
