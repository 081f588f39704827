import threading
import unittest


class _Display:
    def __init__(self, pane_id: str):
        self.pane_id = pane_id


class TestPaneRegistry(unittest.TestCase):
    def test_insert_get_remove(self) -> None:
        from tmuxdisplay.registry import PaneRegistry

        registry = PaneRegistry()
        display = _Display("%1")
        registry.insert(display)

        self.assertIn("%1", registry)
        self.assertIs(registry.get("%1"), display)
        self.assertEqual(len(registry), 1)

        self.assertIs(registry.remove("%1"), display)
        self.assertIsNone(registry.remove("%1"))
        self.assertEqual(len(registry), 0)

    def test_duplicate_insert_rejected(self) -> None:
        from tmuxdisplay.registry import PaneRegistry

        registry = PaneRegistry()
        registry.insert(_Display("%1"))
        with self.assertRaises(KeyError):
            registry.insert(_Display("%1"))
        self.assertEqual(len(registry), 1)

    def test_snapshot_is_a_copy(self) -> None:
        from tmuxdisplay.registry import PaneRegistry

        registry = PaneRegistry()
        for pane_id in ("%1", "%2", "%3"):
            registry.insert(_Display(pane_id))

        snapshot = registry.snapshot()
        registry.remove("%2")
        self.assertEqual(sorted(d.pane_id for d in snapshot), ["%1", "%2", "%3"])
        self.assertEqual(sorted(registry.pane_ids()), ["%1", "%3"])

    def test_concurrent_remove_returns_entry_once(self) -> None:
        from tmuxdisplay.registry import PaneRegistry

        registry = PaneRegistry()
        registry.insert(_Display("%1"))

        results = []
        barrier = threading.Barrier(8)

        def remove():
            barrier.wait()
            results.append(registry.remove("%1"))

        threads = [threading.Thread(target=remove) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(sum(r is not None for r in results), 1)


if __name__ == "__main__":
    unittest.main()
