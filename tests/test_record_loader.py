"""
Tests for the cancellable single-record loader.
"""

from __future__ import annotations

import asyncio

import pytest

from costdesk.backend.core.errors import RecordNotFoundError
from costdesk.backend.core.record_loader import LoadState, RecordLoader


async def _fetch(identifier: str) -> dict:
    await asyncio.sleep(0)
    return {"id": identifier}


class TestRecordLoader:
    def test_loads_exactly_once_and_never_reverts(self) -> None:
        states: list[LoadState] = []

        async def scenario():
            async with RecordLoader(_fetch) as loader:
                loader.subscribe(lambda snapshot: states.append(snapshot.state))
                loader.load("p1")
                first = await loader.wait()
                loader.load("p1")
                second = await loader.wait()
                return first, second

        first, second = asyncio.run(scenario())

        assert states == [LoadState.LOADING, LoadState.LOADED]
        assert first.record == {"id": "p1"}
        assert second is first

    def test_none_is_not_found(self) -> None:
        async def fetch(identifier: str):
            return None

        async def scenario():
            async with RecordLoader(fetch) as loader:
                loader.load("missing")
                return await loader.wait()

        snapshot = asyncio.run(scenario())
        assert snapshot.state is LoadState.NOT_FOUND
        assert snapshot.settled

    def test_not_found_error_is_not_found(self) -> None:
        async def fetch(identifier: str):
            raise RecordNotFoundError("projects", "id", identifier)

        async def scenario():
            async with RecordLoader(fetch) as loader:
                loader.load("missing")
                return await loader.wait()

        assert asyncio.run(scenario()).state is LoadState.NOT_FOUND

    def test_failure_is_error(self) -> None:
        async def fetch(identifier: str):
            raise RuntimeError("backend down")

        async def scenario():
            async with RecordLoader(fetch) as loader:
                loader.load("p1")
                return await loader.wait()

        snapshot = asyncio.run(scenario())
        assert snapshot.state is LoadState.ERROR
        assert isinstance(snapshot.error, RuntimeError)

    def test_new_identifier_cancels_stale_fetch(self) -> None:
        async def scenario():
            gate = asyncio.Event()

            async def fetch(identifier: str) -> dict:
                if identifier == "slow":
                    await gate.wait()
                return {"id": identifier}

            async with RecordLoader(fetch) as loader:
                stale = loader.load("slow")
                loader.load("fast")
                snapshot = await loader.wait()
                gate.set()
                await asyncio.wait({stale})
                return stale, snapshot, loader.snapshot

        stale, snapshot, final = asyncio.run(scenario())
        assert stale.cancelled()
        assert snapshot.record == {"id": "fast"}
        assert final.record == {"id": "fast"}

    def test_dispose_cancels_in_flight_fetch(self) -> None:
        states: list[LoadState] = []

        async def scenario():
            gate = asyncio.Event()

            async def fetch(identifier: str) -> dict:
                await gate.wait()
                return {"id": identifier}

            loader = RecordLoader(fetch)
            loader.subscribe(lambda snapshot: states.append(snapshot.state))
            task = loader.load("p1")
            loader.dispose()
            await asyncio.wait({task})
            return task, loader

        task, loader = asyncio.run(scenario())
        assert task.cancelled()
        assert states == [LoadState.LOADING]

        with pytest.raises(RuntimeError):
            asyncio.run(_load_after_dispose(loader))

    def test_wait_timeout_returns_loading_snapshot(self) -> None:
        async def scenario():
            gate = asyncio.Event()

            async def fetch(identifier: str) -> dict:
                await gate.wait()
                return {"id": identifier}

            async with RecordLoader(fetch) as loader:
                loader.load("p1")
                early = await loader.wait(timeout=0.01)
                gate.set()
                settled = await loader.wait()
                return early, settled

        early, settled = asyncio.run(scenario())
        assert early.state is LoadState.LOADING
        assert not early.settled
        assert settled.record == {"id": "p1"}

    def test_leaving_context_cancels_fetch_after_timeout(self) -> None:
        async def scenario():
            async def fetch(identifier: str) -> dict:
                await asyncio.sleep(10)
                return {"id": identifier}

            async with RecordLoader(fetch) as loader:
                task = loader.load("p1")
                snapshot = await loader.wait(timeout=0.01)
            await asyncio.wait({task})
            return task, snapshot

        task, snapshot = asyncio.run(scenario())
        assert snapshot.state is LoadState.LOADING
        assert task.cancelled()

    def test_unsubscribe(self) -> None:
        states: list[LoadState] = []

        async def scenario():
            async with RecordLoader(_fetch) as loader:
                unsubscribe = loader.subscribe(lambda snapshot: states.append(snapshot.state))
                unsubscribe()
                loader.load("p1")
                await loader.wait()

        asyncio.run(scenario())
        assert states == []


async def _load_after_dispose(loader: RecordLoader) -> None:
    loader.load("p2")
