"""Immutable, chainable and awaitable convergences."""
from __future__ import annotations

import asyncio
import copy
import logging
from typing import Any, Callable

from .config import load_config, validate_interval, validate_timeout
from .const import (
    CONF_INTERVAL,
    CONF_TIMEOUT,
    CONVERGENCE_CAPABILITIES,
    DEFAULT_ALWAYS_TIMEOUT,
    DEFAULT_TIMEOUT,
    DEFAULT_WHEN_TIMEOUT,
    POLL_INTERVAL,
)
from .deferred import Deferred
from .stats import Stats, monotonic_ms
from .steps import Assertion, Effect, Sustained

_LOGGER = logging.getLogger(__name__)


def is_convergence(obj) -> bool:
    """Return True if ``obj`` can be composed like a convergence.

    Instances of :class:`Convergence` always qualify; other objects qualify
    when they expose callable ``when``, ``always``, ``do``, ``run`` and
    ``timeout`` members. Classes themselves never do.
    """
    if isinstance(obj, Convergence):
        return True
    if obj is None or isinstance(obj, type):
        return False
    return all(callable(getattr(obj, name, None)) for name in CONVERGENCE_CAPABILITIES)


class Convergence:
    """An ordered queue of checks and side effects, run when awaited.

    Chaining methods never modify the instance they are called on; they
    return a copy with one more step, of the same class. That keeps
    subclasses (and any attributes they add) intact while chaining.

    Timing knobs (for tests / tuning):
    - interval: milliseconds between two attempts of a check
    - sleep_func: injectable sleep coroutine taking seconds (defaults to asyncio.sleep)
    - clock: callable returning monotonic milliseconds
    """

    def __init__(
        self,
        timeout=DEFAULT_TIMEOUT,
        *,
        interval: float = POLL_INTERVAL,
        sleep_func=asyncio.sleep,
        clock=monotonic_ms,
    ):
        self._timeout = validate_timeout(timeout)
        self._steps: tuple = ()

        self._interval = validate_interval(interval)
        self._sleep = sleep_func
        self._clock = clock

    @classmethod
    def from_config(cls, config=None, **kwargs) -> Convergence:
        """Create a convergence from a configuration mapping."""
        config = load_config(config)
        return cls(config[CONF_TIMEOUT], interval=config[CONF_INTERVAL], **kwargs)

    is_convergence = staticmethod(is_convergence)

    def _evolve(self, *, timeout=None, steps=None) -> Convergence:
        clone = copy.copy(self)
        if timeout is not None:
            clone._timeout = timeout
        if steps is not None:
            clone._steps = tuple(steps)
        return clone

    @property
    def steps(self) -> tuple:
        return self._steps

    def __len__(self):
        return len(self._steps)

    def __repr__(self):
        return f"<{type(self).__name__} timeout={self._timeout} steps={len(self._steps)}>"

    def timeout(self, timeout=None):
        """Return the default timeout, or a copy using ``timeout`` as default."""
        if timeout is None:
            return self._timeout
        return self._evolve(timeout=validate_timeout(timeout))

    def when(self, assertion: Callable[..., Any]) -> Convergence:
        """Add a check that must pass at least once within the default timeout."""
        return self._evolve(steps=self._steps + (Assertion(assertion, self._timeout),))

    def once(self, assertion: Callable[..., Any]) -> Convergence:
        return self.when(assertion)

    def always(self, assertion: Callable[..., Any], timeout=None) -> Convergence:
        """Add a check that must keep passing for ``timeout`` (or the default)."""
        timeout = self._timeout if timeout is None else validate_timeout(timeout)
        return self._evolve(steps=self._steps + (Sustained(assertion, timeout),))

    def do(self, callback: Callable[..., Any]) -> Convergence:
        """Add a callback invoked once with the previous value."""
        return self._evolve(steps=self._steps + (Effect(callback),))

    def append(self, other) -> Convergence:
        """Add all steps of ``other``; its default timeout applies from then on."""
        if not is_convergence(other) or not hasattr(other, "steps"):
            raise TypeError(f"cannot append {other!r}, it is not a convergence")
        return self._evolve(
            timeout=other.timeout(),
            steps=self._steps + tuple(other.steps),
        )

    async def run(self) -> Stats:
        """Run every step in order and return the aggregated stats.

        The first failing step aborts the run and its error is raised as is.
        """
        _LOGGER.debug(
            "Running %d steps, default timeout %dms", len(self._steps), self._timeout
        )
        previous = None
        queue = []

        for index, step in enumerate(self._steps):
            try:
                stats = await step.run(
                    previous,
                    interval=self._interval,
                    sleep_func=self._sleep,
                    clock=self._clock,
                )
            except Exception as ex:
                _LOGGER.debug(
                    "Step %d (%s) failed: %s", index, type(step).__name__, repr(ex)
                )
                raise
            previous = step.next_value(previous, stats.value)
            queue.append(stats)

        if queue:
            start, end = queue[0].start, queue[-1].end
        else:
            start = end = self._clock()

        # polls that all share one mode report it at the top level
        modes = {stats.mode for stats in queue if stats.mode is not None}

        return Stats(
            start=start,
            end=end,
            runs=sum(stats.runs for stats in queue),
            mode=modes.pop() if len(modes) == 1 else None,
            timeout=self._timeout,
            value=previous,
            queue=queue,
        )

    def __await__(self):
        return self.run().__await__()


def when(assertion: Callable[..., Any], timeout=DEFAULT_WHEN_TIMEOUT, **kwargs) -> Deferred:
    """Converge when ``assertion`` passes within ``timeout`` milliseconds.

    The assertion runs every 10ms and passes when it does not raise or
    return ``False``. If it never passes, the last error it raised is
    re-raised once the timeout elapses.

    ::

        await when(lambda: total == 100)

        def check():
            assert total == 100
            assert add(total, 1) == 101

        await when(check, 500)

    Nothing runs until the result is awaited, and awaiting it again runs
    the assertion again. Keyword arguments are passed to
    :class:`Convergence`.
    """
    return Deferred(Convergence(timeout, **kwargs).when(assertion).run)


def always(assertion: Callable[..., Any], timeout=DEFAULT_ALWAYS_TIMEOUT, **kwargs) -> Deferred:
    """Converge when ``assertion`` keeps passing for ``timeout`` milliseconds.

    Raises the first error the assertion raises, without waiting for the
    rest of the timeout.
    """
    return Deferred(Convergence(timeout, **kwargs).always(assertion).run)
