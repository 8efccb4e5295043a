import asyncio


class FakeClock:
    """Virtual millisecond clock with a matching sleep coroutine.

    Pass the instance as ``clock`` and ``clock.sleep`` as ``sleep_func`` so
    polls advance virtual time instead of waiting on the event loop.
    """

    def __init__(self, now=0.0):
        self.now = now
        self.sleeps = []

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms

    async def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds * 1000
        # still yield so other tasks get a turn
        await asyncio.sleep(0)

    def knobs(self):
        return {"clock": self, "sleep_func": self.sleep}
