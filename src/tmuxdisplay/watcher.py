"""Per-pane watcher thread.

Blocks on the pane's synchronization channel and tears the pane down once
the channel reports end-of-stream.

PUBLIC API:
  - WatcherState: Lifecycle states of a watcher
  - PaneWatcher: Watcher thread for one pane
"""

import logging
import threading
from collections.abc import Callable
from enum import Enum

from .channel import SyncChannel
from .types import PaneID

logger = logging.getLogger(__name__)


class WatcherState(Enum):
    WAITING = "waiting"
    CLOSING = "closing"
    DONE = "done"


class PaneWatcher:
    """Watcher thread for one pane.

    Owns the channel's read end once started and closes it on exit. The
    teardown callback runs exactly once from the thread, after end-of-stream
    or a read error; its failures are logged because nobody is waiting on
    the thread to report them.

    Attributes:
        pane_id: Pane being watched.
        state: Current WatcherState.
    """

    def __init__(self, pane_id: PaneID, channel: SyncChannel, on_closed: Callable[[], None]):
        self.pane_id = pane_id
        self.channel = channel
        self.state = WatcherState.WAITING
        self._on_closed = on_closed
        self._thread = threading.Thread(target=self._run, name=f"tmuxdisplay-watch-{pane_id}", daemon=True)

    def start(self) -> None:
        self._thread.start()

    def is_alive(self) -> bool:
        return self._thread.is_alive()

    @property
    def started(self) -> bool:
        return self._thread.ident is not None

    @property
    def in_watcher_thread(self) -> bool:
        """Whether the caller is running on this watcher's thread."""
        return threading.current_thread() is self._thread

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the thread to finish.

        Returns:
            True if the thread has finished (or never started)
        """
        if not self.started:
            return True
        if self.in_watcher_thread:
            return False
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def _run(self) -> None:
        try:
            self.channel.wait_closed()
            logger.debug(f"Channel for pane {self.pane_id} closed")
        except OSError as e:
            logger.debug(f"Channel read for pane {self.pane_id} failed: {e}")
        finally:
            self.channel.close_reader()

        self.state = WatcherState.CLOSING
        try:
            self._on_closed()
        except Exception:
            logger.exception(f"Teardown of pane {self.pane_id} failed")
        finally:
            self.state = WatcherState.DONE

    def __repr__(self) -> str:
        return f"PaneWatcher({self.pane_id!r}, state={self.state.value})"


__all__ = ["WatcherState", "PaneWatcher"]
