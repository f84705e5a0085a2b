import asyncio
import unittest

from preview.debounce import Debouncer

DELAY = 0.05


class TestDebouncer(unittest.IsolatedAsyncioTestCase):
    async def test_burst_runs_once(self) -> None:
        calls = []
        debouncer = Debouncer(DELAY, lambda: calls.append(1))

        for _ in range(10):
            debouncer.trigger()
        self.assertTrue(debouncer.pending)

        await asyncio.sleep(DELAY * 4)
        self.assertEqual(len(calls), 1)
        self.assertFalse(debouncer.pending)

    async def test_trigger_rearms_the_window(self) -> None:
        calls = []
        debouncer = Debouncer(0.2, lambda: calls.append(1))

        debouncer.trigger()
        await asyncio.sleep(0.12)
        debouncer.trigger()
        await asyncio.sleep(0.12)
        self.assertEqual(calls, [])

        await asyncio.sleep(0.2)
        self.assertEqual(len(calls), 1)

    async def test_separate_bursts_run_separately(self) -> None:
        calls = []
        debouncer = Debouncer(DELAY, lambda: calls.append(1))

        debouncer.trigger()
        await asyncio.sleep(DELAY * 4)
        debouncer.trigger()
        await asyncio.sleep(DELAY * 4)
        self.assertEqual(len(calls), 2)

    async def test_cancel_drops_pending_call(self) -> None:
        calls = []
        debouncer = Debouncer(DELAY, lambda: calls.append(1))

        debouncer.trigger()
        debouncer.cancel()
        await asyncio.sleep(DELAY * 4)
        self.assertEqual(calls, [])

