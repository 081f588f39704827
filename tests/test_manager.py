import tempfile
import unittest
from pathlib import Path
from unittest import mock

from tests.fakes import FakeTmux, wait_for


class TestDisplayManager(unittest.TestCase):
    def setUp(self) -> None:
        from tmuxdisplay.config import ConfigManager
        from tmuxdisplay.manager import DisplayManager

        self._tmp = tempfile.TemporaryDirectory()
        self.tmpdir = Path(self._tmp.name)
        self.tmux = FakeTmux(self.tmpdir)
        self._patch = self.tmux.patch()
        self._patch.__enter__()

        config = ConfigManager(data={"default": {"channel_dir": str(self.tmpdir), "join_timeout": 0.5}})
        self.manager = DisplayManager(config)

    def tearDown(self) -> None:
        self.manager.close_all()
        self._patch.__exit__(None, None, None)
        self.tmux.cleanup()
        self._tmp.cleanup()

    def test_create_pane_registers_and_watches(self) -> None:
        from tmuxdisplay.types import PaneConfig

        display = self.manager.create_pane(PaneConfig(size=3, horizontal=False))

        config, command = self.tmux.split_calls[0]
        self.assertEqual(config.size, 3)
        self.assertFalse(config.horizontal)
        self.assertEqual(command[-1], str(display.sync_channel_path))
        self.assertEqual(self.manager.registry.pane_ids(), [display.pane_id])
        self.assertTrue(display.watcher.is_alive())

    def test_create_pane_overrides(self) -> None:
        display = self.manager.create_pane(horizontal=True, size=40)
        config, _ = self.tmux.split_calls[0]
        self.assertTrue(config.horizontal)
        self.assertEqual(config.size, 40)
        self.assertIn(display.pane_id, self.manager.registry)

    def test_create_pane_uses_configured_defaults(self) -> None:
        from tmuxdisplay.config import ConfigManager
        from tmuxdisplay.manager import DisplayManager

        config = ConfigManager(
            data={"default": {"channel_dir": str(self.tmpdir), "horizontal": True, "size": 12, "focus": True}}
        )
        with DisplayManager(config) as manager:
            manager.create_pane()
            pane_config, _ = self.tmux.split_calls[0]
            self.assertTrue(pane_config.horizontal)
            self.assertEqual(pane_config.size, 12)
            self.assertTrue(pane_config.focus)
        self.assertEqual(len(manager.registry), 0)

    def test_split_from_existing_display(self) -> None:
        first = self.manager.create_pane()
        self.manager.create_pane(size=3, target=first)
        config, _ = self.tmux.split_calls[1]
        self.assertEqual(config.target_id, first.pane_id)

    def test_launch_error_registers_nothing(self) -> None:
        from tmuxdisplay.tmux.exceptions import LaunchError

        error = LaunchError("Failed to split window (exit 1)", "no space for new pane")
        with mock.patch("tmuxdisplay.launcher.split_window", side_effect=error):
            with self.assertRaises(LaunchError):
                self.manager.create_pane()

        self.assertEqual(len(self.manager.registry), 0)
        self.assertEqual(list(self.tmpdir.glob("*.fifo")), [])

    def test_render_default_reuses_pane(self) -> None:
        from tmuxdisplay.display import RESET

        first = self.manager.render_default("x")
        stream = first.output_stream
        second = self.manager.render_default("x")

        self.assertIs(first, second)
        self.assertIs(second.output_stream, stream)
        self.assertEqual(len(self.tmux.split_calls), 1)
        self.assertEqual(self.manager.registry.pane_ids(), [first.pane_id])

        stream.flush()
        self.assertEqual(self.tmux.tty_content(first.pane_id).count(RESET), 2)

    def test_pane_death_removes_entry(self) -> None:
        display = self.manager.get_default_display()
        self.tmux.die(display.pane_id)

        self.assertTrue(wait_for(lambda: display.pane_id not in self.manager.registry))
        self.assertTrue(wait_for(lambda: not display.watcher.is_alive()))
        self.assertTrue(display.closed)
        self.assertIsNone(self.manager.default_display)
        self.assertFalse(display.sync_channel_path.exists())

    def test_default_display_replaced_after_death(self) -> None:
        first = self.manager.get_default_display()
        self.tmux.die(first.pane_id)
        self.assertTrue(wait_for(lambda: first.pane_id not in self.manager.registry))

        second = self.manager.get_default_display()
        self.assertIsNot(first, second)
        self.assertNotEqual(first.pane_id, second.pane_id)
        self.assertEqual(self.manager.registry.pane_ids(), [second.pane_id])

    def test_sweep_reaps_panes_the_watcher_missed(self) -> None:
        first = self.manager.get_default_display()
        other = self.manager.create_pane()
        self.tmux.vanish(first.pane_id)

        with self.assertLogs("tmuxdisplay", level="INFO"):
            second = self.manager.get_default_display()

        self.assertTrue(first.closed)
        self.assertIsNot(second, first)
        self.assertTrue(second.is_alive())
        self.assertEqual(sorted(self.manager.registry.pane_ids()), sorted([other.pane_id, second.pane_id]))
        self.assertNotIn(first.pane_id, self.tmux.killed)

    def test_close_all(self) -> None:
        default = self.manager.get_default_display()
        panes = [self.manager.create_pane() for _ in range(3)]
        self.tmux.die(panes[0].pane_id)
        self.assertTrue(wait_for(lambda: panes[0].pane_id not in self.manager.registry))

        self.manager.close_all()

        self.assertEqual(len(self.manager.registry), 0)
        self.assertIsNone(self.manager.default_display)
        for display in [default] + panes:
            self.assertTrue(display.closed)
            self.assertTrue(wait_for(lambda: not display.watcher.is_alive()))
        self.assertEqual(list(self.tmpdir.glob("*.fifo")), [])
        self.assertEqual(self.manager.close_all(), 0)

    def test_close_twice_removes_one_entry(self) -> None:
        display = self.manager.create_pane()
        other = self.manager.create_pane()

        with mock.patch.object(self.manager.registry, "remove", wraps=self.manager.registry.remove) as remove:
            self.assertTrue(display.close())
            self.assertFalse(display.close())

        remove.assert_called_once_with(display.pane_id)
        self.assertEqual(self.manager.registry.pane_ids(), [other.pane_id])


class TestModuleApi(unittest.TestCase):
    def setUp(self) -> None:
        from tmuxdisplay import manager

        self._saved = manager._display_manager
        manager._display_manager = None

    def tearDown(self) -> None:
        from tmuxdisplay import manager

        manager._display_manager = self._saved

    def test_process_manager_registers_exit_hook_once(self) -> None:
        from tmuxdisplay import manager

        with mock.patch("tmuxdisplay.manager.atexit.register") as register:
            first = manager.get_display_manager()
            second = manager.get_display_manager()

        self.assertIs(first, second)
        register.assert_called_once_with(first.close_all)

    def test_close_all_without_manager(self) -> None:
        import tmuxdisplay

        self.assertEqual(tmuxdisplay.close_all(), 0)

    def test_module_functions_delegate(self) -> None:
        import tmuxdisplay
        from tmuxdisplay import manager

        fake = mock.Mock()
        manager._display_manager = fake

        tmuxdisplay.render_default("x")
        tmuxdisplay.get_default_display()
        tmuxdisplay.create_pane(size=3)
        tmuxdisplay.close_all()

        fake.render_default.assert_called_once_with("x")
        fake.get_default_display.assert_called_once_with()
        fake.create_pane.assert_called_once_with(None, size=3)
        fake.close_all.assert_called_once_with()


if __name__ == "__main__":
    unittest.main()
