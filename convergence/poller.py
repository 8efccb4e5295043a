import asyncio
import inspect
import logging

from .const import POLL_INTERVAL
from .errors import ConvergenceAssertionError, UnexpectedAsyncError
from .stats import ConvergeMode, Stats, monotonic_ms

_LOGGER = logging.getLogger(__name__)


def _discard_awaitable(result):
    # close coroutines so they never trigger a "was never awaited" warning
    if inspect.iscoroutine(result):
        result.close()
    elif isinstance(result, asyncio.Future):
        result.cancel()


async def converge_on(
    check,
    timeout,
    mode: ConvergeMode = ConvergeMode.ONCE,
    *,
    interval: float = POLL_INTERVAL,
    sleep_func=asyncio.sleep,
    clock=monotonic_ms,
) -> Stats:
    """Run ``check`` every ``interval`` milliseconds until it converges.

    An attempt passes when ``check`` neither raises nor returns ``False``.

    With ``ConvergeMode.ONCE`` this returns as soon as an attempt passes. If
    no attempt passes within ``timeout`` milliseconds the last error is
    raised (a ``ConvergenceAssertionError`` when the check returned
    ``False``).

    With ``ConvergeMode.ALWAYS`` every attempt must pass until ``timeout``
    has elapsed; the first failing attempt raises right away.

    The elapsed time is measured after each attempt, so a check always gets
    at least one attempt and its own execution time counts against the
    budget. A check returning an awaitable raises ``UnexpectedAsyncError``
    regardless of mode and remaining budget.
    """
    start = clock()
    runs = 0

    while True:
        runs += 1
        error = None
        results = None

        try:
            results = check()
        except StopIteration as ex:
            # cannot be raised through a coroutine, see PEP 479
            error = ConvergenceAssertionError(repr(ex))
            error.__cause__ = ex
        except Exception as ex:  # noqa: BLE001
            error = ex

        if error is None and inspect.isawaitable(results):
            _discard_awaitable(results)
            _LOGGER.debug("Check %r returned an awaitable, bailing out", check)
            raise UnexpectedAsyncError(results)

        if error is None and results is False:
            error = ConvergenceAssertionError()

        # measured after the attempt so the check's own run time is accounted for
        do_loop = clock() - start < timeout

        if error is None:
            if mode is ConvergeMode.ALWAYS and do_loop:
                await sleep_func(interval / 1000)
                continue

            end = clock()
            _LOGGER.debug(
                "Converged (%s) after %d runs in %.1fms", mode.name, runs, end - start
            )
            return Stats(
                start=start,
                end=end,
                runs=runs,
                mode=mode,
                timeout=timeout,
                value=results,
            )

        if mode is ConvergeMode.ONCE and do_loop:
            await sleep_func(interval / 1000)
            continue

        _LOGGER.debug(
            "Failed to converge (%s) after %d runs in %.1fms: %s",
            mode.name,
            runs,
            clock() - start,
            repr(error),
        )
        raise error
