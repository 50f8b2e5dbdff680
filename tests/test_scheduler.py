import asyncio
import unittest

from warword.engine.scheduler import Debouncer, PeriodicTask


class PeriodicTaskTests(unittest.IsolatedAsyncioTestCase):
    async def test_start_is_idempotent_and_stop_halts_ticks(self) -> None:
        ticks = []
        task = PeriodicTask(0.01, lambda: ticks.append(1), name="probe")

        self.assertTrue(task.start())
        self.assertFalse(task.start())
        self.assertTrue(task.running)
        await asyncio.sleep(0.06)
        self.assertGreaterEqual(len(ticks), 1)

        self.assertTrue(task.stop())
        self.assertFalse(task.running)
        await asyncio.sleep(0)
        seen = len(ticks)
        await asyncio.sleep(0.05)
        self.assertEqual(len(ticks), seen)
        self.assertFalse(task.stop())

    async def test_context_manager_always_stops(self) -> None:
        task = PeriodicTask(0.01, lambda: None)
        with self.assertRaises(RuntimeError):
            with task:
                self.assertTrue(task.running)
                raise RuntimeError("boom")
        self.assertFalse(task.running)

    async def test_can_restart_after_stop(self) -> None:
        task = PeriodicTask(0.01, lambda: None)
        task.start()
        task.stop()
        self.assertTrue(task.start())
        task.stop()

    async def test_failing_callback_is_logged_and_stops_the_loop(self) -> None:
        calls = []

        def explode() -> None:
            calls.append(1)
            raise ValueError("bad frame")

        task = PeriodicTask(0.01, explode, name="flaky")
        task.start()
        inner = task._task
        with self.assertLogs("warword.engine.scheduler", level="ERROR") as captured:
            await asyncio.sleep(0.05)
        self.assertEqual(calls, [1])
        self.assertFalse(task.running)
        self.assertIn("flaky", captured.output[0])
        assert inner is not None
        self.assertTrue(inner.done())
        self.assertIsNone(inner.exception())
        self.assertTrue(task.start())
        task.stop()

    def test_rejects_non_positive_interval(self) -> None:
        with self.assertRaises(ValueError):
            PeriodicTask(0, lambda: None)


class DebouncerTests(unittest.IsolatedAsyncioTestCase):
    async def test_trigger_resets_instead_of_stacking(self) -> None:
        calls = []
        debouncer = Debouncer(0.1, lambda: calls.append(1))
        for _ in range(4):
            debouncer.trigger()
            await asyncio.sleep(0.01)
        self.assertEqual(calls, [])
        await asyncio.sleep(0.25)
        self.assertEqual(calls, [1])
        self.assertFalse(debouncer.pending)

    async def test_cancel_prevents_callback(self) -> None:
        calls = []
        debouncer = Debouncer(0.02, lambda: calls.append(1))
        debouncer.trigger()
        self.assertTrue(debouncer.pending)
        debouncer.cancel()
        await asyncio.sleep(0.05)
        self.assertEqual(calls, [])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
