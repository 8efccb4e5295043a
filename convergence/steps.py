"""Steps a convergence runs, in order, when it is awaited."""
from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable

from .errors import ConvergenceAssertionError
from .poller import converge_on
from .stats import ConvergeMode, Stats

_LOGGER = logging.getLogger(__name__)


def _accepts_previous(fn) -> bool:
    try:
        parameters = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        # builtins without introspectable signatures get the previous value
        return True
    return any(
        p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.VAR_POSITIONAL)
        for p in parameters
    )


def bind_previous(fn, previous):
    """Return a thunk calling ``fn`` with the previous value, or with nothing if it takes no arguments."""
    if _accepts_previous(fn):
        return lambda: fn(previous)
    return fn


@dataclass(frozen=True)
class Assertion:
    """Check polled until it passes within ``timeout`` milliseconds."""

    check: Callable[..., Any]
    timeout: int
    mode = ConvergeMode.ONCE

    async def run(self, previous, *, interval, sleep_func, clock) -> Stats:
        return await converge_on(
            bind_previous(self.check, previous),
            self.timeout,
            self.mode,
            interval=interval,
            sleep_func=sleep_func,
            clock=clock,
        )

    def next_value(self, previous, value):
        # a bare True only confirms the condition held
        if value is None or (value is True and previous is not None):
            return previous
        return value


@dataclass(frozen=True)
class Sustained(Assertion):
    """Check that must keep passing for the whole ``timeout``."""

    mode = ConvergeMode.ALWAYS


@dataclass(frozen=True)
class Effect:
    """Callback invoked exactly once with the previous value.

    It may return a plain value, an awaitable, or another convergence; the
    latter two are awaited and their result adopted. A nested convergence's
    own stats are discarded.
    """

    callback: Callable[..., Any]

    async def run(self, previous, *, interval, sleep_func, clock) -> Stats:
        # local import, convergence.py builds on this module
        from .convergence import is_convergence

        start = clock()
        try:
            result = bind_previous(self.callback, previous)()
        except StopIteration as ex:
            # cannot be raised through a coroutine, see PEP 479
            raise ConvergenceAssertionError(repr(ex)) from ex

        if is_convergence(result):
            _LOGGER.debug("Effect %r returned a convergence, running it", self.callback)
            result = (await result.run()).value
        elif inspect.isawaitable(result):
            result = await result

        return Stats(start=start, end=clock(), runs=1, value=result)

    def next_value(self, previous, value):
        return previous if value is None else value
