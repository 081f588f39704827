"""The display handle - one tmux pane this process writes into.

PUBLIC API:
  - TmuxDisplay: Owned resources of one display pane
"""

import logging
import os
import threading
from collections.abc import Callable
from contextlib import contextmanager
from typing import Any, Optional, TextIO

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from .channel import SyncChannel
from .tmux.exceptions import TmuxError, TeardownError
from .tmux.pane import kill_pane, pane_status
from .types import PaneID
from .watcher import PaneWatcher

logger = logging.getLogger(__name__)

# Full terminal reset; wipes whatever the previous render left behind
RESET = "\033c"


class TmuxDisplay:
    """One tmux pane used as an external display.

    Owns the output stream bound to the pane's tty and the pane's
    synchronization channel. The channel's read end belongs to the watcher
    once it is started. Teardown runs exactly once, from close(), from the
    watcher noticing the pane died, or from a liveness sweep.

    Attributes:
        pane_id: tmux pane ID, e.g. "%42".
        pane_pid: PID of the holder process running in the pane.
        pane_tty: Path of the pane's terminal device.
        output_stream: Text stream writing to pane_tty.
        watcher: PaneWatcher for this pane.
    """

    def __init__(
        self,
        pane_id: PaneID,
        pane_pid: int,
        pane_tty: str,
        output_stream: TextIO,
        channel: SyncChannel,
        on_teardown: Optional[Callable[["TmuxDisplay"], None]] = None,
        join_timeout: float = 1.0,
    ):
        self.pane_id = pane_id
        self.pane_pid = pane_pid
        self.pane_tty = pane_tty
        self.output_stream = output_stream
        self.join_timeout = join_timeout
        self._channel = channel
        self._on_teardown = on_teardown
        self._console: Optional[Console] = None
        self._lock = threading.Lock()
        self._closed = False
        self.watcher = PaneWatcher(pane_id, channel, self._teardown_from_watcher)

    @property
    def sync_channel(self) -> SyncChannel:
        return self._channel

    @property
    def sync_channel_path(self):
        return self._channel.path

    @property
    def closed(self) -> bool:
        return self._closed

    def start_watching(self) -> None:
        """Start the watcher thread. Called once, after registration."""
        self.watcher.start()

    def _terminal_size(self) -> tuple[int, int]:
        try:
            size = os.get_terminal_size(self.output_stream.fileno())
        except (OSError, ValueError):
            return 80, 24
        return size.columns, size.lines

    @property
    def console(self) -> Console:
        """Get a rich Console drawing into the pane, sized to the pane.

        Raises:
            ValueError: If the display is closed
        """
        if self._closed:
            raise ValueError(f"Display {self.pane_id} is closed")
        if self._console is None:
            self._console = Console(file=self.output_stream, force_terminal=True)
        # Panes get resized; rich only measures the std streams on its own
        self._console.size = self._terminal_size()
        return self._console

    def write_text(self, x: Any) -> None:
        """Replace the pane's content with x.

        Strings are written verbatim (no rich markup); anything else is
        rendered by rich. A separator is left in the scrollback before the
        terminal reset.

        Raises:
            ValueError: If the display is closed
            OSError: If the pane's tty cannot be written
        """
        console = self.console
        console.print()
        console.print()
        console.rule(style="blue")
        console.print(" ")
        self.output_stream.write(RESET)
        if isinstance(x, str):
            console.print(x, markup=False, highlight=False, emoji=False)
        else:
            console.print(x)
        self.output_stream.flush()

    def logging_handler(self, level: int = logging.NOTSET) -> logging.Handler:
        """Get a logging handler that writes records into the pane."""
        return RichHandler(console=self.console, level=level, show_path=False)

    def is_alive(self) -> bool:
        """Ask tmux whether the pane still exists and is not dead."""
        if self._closed:
            return False
        exists, dead = pane_status(self.pane_id)
        return exists and not dead

    def close(self, join_timeout: Optional[float] = None) -> bool:
        """Kill the pane and release everything this display owns.

        Safe to call repeatedly and concurrently with the watcher.

        Returns:
            True if this call performed the teardown
        """
        return self._teardown(kill=True, join_timeout=join_timeout)

    def release(self, join_timeout: Optional[float] = None) -> bool:
        """Tear down without killing the pane, for panes that are already gone."""
        return self._teardown(kill=False, join_timeout=join_timeout)

    def _teardown_from_watcher(self) -> None:
        if self._closed:
            return
        # The holder is gone; only a remain-on-exit pane is left to kill
        exists, _ = pane_status(self.pane_id)
        self._teardown(kill=exists)

    def _teardown(self, kill: bool, join_timeout: Optional[float] = None) -> bool:
        with self._lock:
            if self._closed:
                return False
            self._closed = True

        logger.debug(f"Tearing down pane {self.pane_id} (kill={kill})")

        if kill:
            with self._teardown_step("kill pane"):
                kill_pane(self.pane_id)

        with self._teardown_step("close output stream"):
            self.output_stream.close()

        # Unblocks the watcher if the holder never connected
        with self._teardown_step("release channel writer"):
            self._channel.release_writer()

        if not self.watcher.started:
            with self._teardown_step("close channel reader"):
                self._channel.close_reader()

        with self._teardown_step("unlink channel"):
            self._channel.unlink()

        if self._on_teardown:
            self._on_teardown(self)

        timeout = self.join_timeout if join_timeout is None else join_timeout
        if not self.watcher.in_watcher_thread and not self.watcher.join(timeout):
            logger.warning(f"Watcher for pane {self.pane_id} still running after {timeout}s")

        return True

    @contextmanager
    def _teardown_step(self, step: str):
        """Log and continue when a cleanup step fails."""
        try:
            yield
        except (OSError, TmuxError) as e:
            err = e if isinstance(e, TeardownError) else TeardownError(f"{step} failed for pane {self.pane_id}: {e}")
            logger.warning(str(err))

    def __enter__(self) -> "TmuxDisplay":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __rich__(self) -> Text:
        text = Text(f"TmuxDisplay: pane {self.pane_id} ")
        if self.is_alive():
            text.append("(open)", style="green")
        else:
            text.append("(closed)", style="red")
        return text

    def __repr__(self) -> str:
        status = "closed" if self._closed else "open"
        return f"<TmuxDisplay pane={self.pane_id} pid={self.pane_pid} {status}>"


__all__ = ["TmuxDisplay"]
