"""
Tests for the bounded concurrent mapper.
"""

import asyncio

import pytest

from rift_recap.utils.concurrency import bounded_map


class RecordingSleep:
    def __init__(self):
        self.calls = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class TestBoundedMap:
    """Test cases for bounded_map."""

    @pytest.mark.asyncio
    async def test_results_follow_input_order(self):
        async def worker(item: int) -> int:
            # Later items finish first
            await asyncio.sleep((5 - item) * 0.001)
            return item * 10

        results = await bounded_map([1, 2, 3, 4], worker, batch_size=4, batch_delay=0)

        assert [r.item for r in results] == [1, 2, 3, 4]
        assert [r.value for r in results] == [10, 20, 30, 40]

    @pytest.mark.asyncio
    async def test_failures_are_isolated(self):
        async def worker(item: str) -> str:
            if item == "bad":
                raise RuntimeError("boom")
            return item.upper()

        results = await bounded_map(["a", "bad", "c"], worker, batch_size=2, batch_delay=0)

        assert [r.ok for r in results] == [True, False, True]
        assert isinstance(results[1].error, RuntimeError)
        assert results[2].value == "C"

    @pytest.mark.asyncio
    async def test_pacing_only_between_batches(self):
        sleep = RecordingSleep()

        async def worker(item: int) -> int:
            return item

        await bounded_map(list(range(25)), worker, batch_size=10, batch_delay=0.1, sleep=sleep)

        assert sleep.calls == [0.1, 0.1]

    @pytest.mark.asyncio
    async def test_single_batch_never_sleeps(self):
        sleep = RecordingSleep()

        async def worker(item: int) -> int:
            return item

        await bounded_map([1, 2, 3], worker, batch_size=10, batch_delay=0.1, sleep=sleep)

        assert sleep.calls == []

    @pytest.mark.asyncio
    async def test_in_flight_workers_bounded_by_batch_size(self):
        in_flight = 0
        peak = 0

        async def worker(item: int) -> int:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.001)
            in_flight -= 1
            return item

        await bounded_map(list(range(7)), worker, batch_size=3, batch_delay=0)

        assert peak == 3

    @pytest.mark.asyncio
    async def test_empty_input(self):
        async def worker(item):
            return item

        assert await bounded_map([], worker) == []

    @pytest.mark.asyncio
    async def test_rejects_non_positive_batch_size(self):
        async def worker(item):
            return item

        with pytest.raises(ValueError):
            await bounded_map([1], worker, batch_size=0)
