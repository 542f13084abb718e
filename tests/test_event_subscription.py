import threading
import unittest
from unittest.mock import MagicMock

from services.event_subscription import EventSubscription


class _BlockSource:
    """Devuelve los bloques en orden y repite el último."""

    def __init__(self, *blocks: int) -> None:
        self.blocks = list(blocks)

    def block_number(self) -> int:
        if len(self.blocks) > 1:
            return self.blocks.pop(0)
        return self.blocks[0]


class EventSubscriptionTests(unittest.TestCase):
    def test_poll_once_reads_new_block_range(self) -> None:
        event = MagicMock()
        event.get_logs.return_value = [{"n": 1}, {"n": 2}]
        sub = EventSubscription(_BlockSource(100, 100, 103), event, name="test")
        seen = []
        sub._handler = seen.append

        self.assertEqual(sub.poll_once(), 0)  # fija el cursor en 101
        self.assertEqual(sub.poll_once(), 0)  # sin bloques nuevos
        self.assertEqual(sub.poll_once(), 2)

        event.get_logs.assert_called_once_with(from_block=101, to_block=103)
        self.assertEqual(seen, [{"n": 1}, {"n": 2}])

    def test_thread_delivers_events_until_cancelled(self) -> None:
        event = MagicMock()
        event.get_logs.side_effect = lambda from_block, to_block: [{"n": 1}] if from_block == 11 else []
        sub = EventSubscription(_BlockSource(10, 11, 12, 13, 14, 15), event, name="test", poll_interval=0.01)
        got = threading.Event()

        sub.start(lambda log: got.set())
        self.assertTrue(got.wait(2))
        sub.cancel()
        sub.join(2)

        self.assertTrue(sub.cancelled)
        self.assertFalse(sub.running)
        self.assertIsNone(sub.error)
        self.assertEqual(event.get_logs.call_args_list[0].kwargs, {"from_block": 11, "to_block": 11})

    def test_cancel_inside_handler_stops_delivery(self) -> None:
        event = MagicMock()
        event.get_logs.return_value = [{"n": 1}, {"n": 2}, {"n": 3}]
        sub = EventSubscription(_BlockSource(1, 2), event, name="test")
        seen = []

        def handler(log):
            seen.append(log)
            sub.cancel()

        sub._handler = handler
        sub.poll_once()
        self.assertEqual(sub.poll_once(), 1)
        self.assertEqual(seen, [{"n": 1}])

    def test_connectivity_error_stops_subscription(self) -> None:
        event = MagicMock()
        event.get_logs.side_effect = ConnectionError("node unreachable")
        failed = threading.Event()
        errors = []

        def on_error(sub, err):
            errors.append(err)
            failed.set()

        sub = EventSubscription(_BlockSource(5, 6), event, name="test", poll_interval=0.01, on_error=on_error)
        sub.start(lambda log: None)

        self.assertTrue(failed.wait(2))
        sub.join(2)
        self.assertIsInstance(sub.error, ConnectionError)
        self.assertIs(errors[0], sub.error)
        self.assertTrue(sub.cancelled)


if __name__ == "__main__":
    unittest.main()
