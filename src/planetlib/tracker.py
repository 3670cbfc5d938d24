import asyncio


class CompletionTracker:
    """Settled/loading signal driven by the completion of joined work.

    Starts unsettled. ``track`` flips it back to settled only once the
    awaited operation has returned or raised.
    """

    def __init__(self):
        self._settled = asyncio.Event()

    @property
    def settled(self):
        return self._settled.is_set()

    @property
    def is_loading(self):
        return not self._settled.is_set()

    def begin(self):
        self._settled.clear()

    def finish(self):
        self._settled.set()

    async def wait(self):
        await self._settled.wait()

    async def track(self, awaitable):
        self.begin()
        try:
            return await awaitable
        finally:
            self.finish()
