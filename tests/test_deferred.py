import pytest

from convergence.deferred import Deferred

pytestmark = pytest.mark.asyncio


async def test_deferred_is_lazy():
    calls = []

    async def work():
        calls.append(1)
        return len(calls)

    deferred = Deferred(work)
    assert calls == []

    assert await deferred == 1
    assert await deferred == 2
    assert await deferred() == 3
    assert await deferred.run() == 4


async def test_deferred_propagates_errors():
    async def work():
        raise LookupError("missing")

    with pytest.raises(LookupError, match="missing"):
        await Deferred(work)
