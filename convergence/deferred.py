"""Lazy awaitable built from a thunk."""


class Deferred:
    """Awaitable that only starts its work when awaited or called.

    Every await (or call) invokes ``thunk`` again, so the same deferred can
    be awaited more than once, and passed as a callback to anything that
    expects a callable returning an awaitable.
    """

    def __init__(self, thunk):
        self._thunk = thunk

    def __call__(self):
        return self._thunk()

    def run(self):
        return self._thunk()

    def __await__(self):
        return self._thunk().__await__()

    def __repr__(self):
        return f"<Deferred {self._thunk!r}>"
