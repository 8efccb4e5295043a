"""Errors raised while converging."""


class ConvergenceError(Exception):
    """Base class for errors raised by this library."""


class ConvergenceAssertionError(ConvergenceError, AssertionError):
    """A check returned ``False`` instead of raising."""

    def __init__(self, message="convergent assertion returned `False`"):
        super().__init__(message)


class UnexpectedAsyncError(ConvergenceError, TypeError):
    """A check returned an awaitable.

    Checks run many times, so one that starts asynchronous work could
    introduce side effects on every attempt.
    """

    def __init__(self, result=None):
        super().__init__(
            "convergent assertion encountered an async function or awaitable; "
            "since convergent assertions can run multiple times, you should "
            "avoid introducing side-effects inside of them"
        )
        self.result = result


class ConvergenceConfigError(ConvergenceError, ValueError):
    """Invalid timeout or configuration value."""
