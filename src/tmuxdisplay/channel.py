"""Named FIFO used to detect pane death.

No application data flows through the channel. The pane runs a holder
process that opens the write end, announces itself with a single handshake
byte and then sleeps. When the pane goes away the holder exits, the last
write end closes, and a blocking read on our side returns end-of-stream.

Until the holder connects, a bootstrap write end held by this process keeps
reads blocking instead of returning end-of-stream immediately.

PUBLIC API:
  - create_channel: Create a uniquely named FIFO node
  - open_read: Open the read end without waiting for a writer
  - open_write: Open a write end
  - SyncChannel: Path, read end and bootstrap write end of one channel
"""

import logging
import os
import secrets
import threading
from pathlib import Path
from typing import List, Optional

from .tmux.exceptions import ChannelError

logger = logging.getLogger(__name__)

# Holder script; $0 is the channel path so it never needs shell quoting
HOLDER_SCRIPT = 'exec >"$0"; printf .; exec sleep 2147483647'


def create_channel(directory: Optional[Path] = None) -> Path:
    """Create a uniquely named FIFO node.

    Args:
        directory: Where to create the node. Defaults to the configured channel_dir.

    Returns:
        Path of the new FIFO

    Raises:
        ChannelError: If the node exists already or cannot be created
    """
    if directory is None:
        from .config import get_config_manager

        directory = get_config_manager().channel_dir

    path = Path(directory) / f"tmuxdisplay-{os.getpid()}-{secrets.token_hex(6)}.fifo"
    try:
        os.mkfifo(path, 0o600)
    except FileExistsError:
        raise ChannelError(f"Channel path collision: {path}")
    except OSError as e:
        raise ChannelError(f"Failed to create channel {path}: {e}")
    return path


def open_read(path: Path) -> int:
    """Open the read end without waiting for a writer, then make reads blocking."""
    try:
        fd = os.open(path, os.O_RDONLY | os.O_NONBLOCK)
    except OSError as e:
        raise ChannelError(f"Failed to open read end of {path}: {e}")
    os.set_blocking(fd, True)
    return fd


def open_write(path: Path) -> int:
    """Open a write end. Requires an open read end.

    Raises:
        ChannelError: If no reader exists or the path is gone
    """
    try:
        return os.open(path, os.O_WRONLY | os.O_NONBLOCK)
    except OSError as e:
        raise ChannelError(f"Failed to open write end of {path}: {e}")


class SyncChannel:
    """One synchronization channel.

    The read end is handed to the pane watcher, which is the only reader and
    closes it when it is done. The bootstrap write end is released either by
    the handshake or by teardown, whichever happens first.
    """

    def __init__(self, path: Path, read_fd: int, write_fd: Optional[int]):
        self.path = path
        self._read_fd: Optional[int] = read_fd
        self._write_fd = write_fd
        self._lock = threading.Lock()

    @classmethod
    def create(cls, directory: Optional[Path] = None) -> "SyncChannel":
        """Create the FIFO and open both ends.

        Raises:
            ChannelError: If creation or opening fails; nothing is left behind
        """
        path = create_channel(directory)
        try:
            read_fd = open_read(path)
        except ChannelError:
            path.unlink(missing_ok=True)
            raise

        try:
            write_fd = open_write(path)
        except ChannelError:
            os.close(read_fd)
            path.unlink(missing_ok=True)
            raise

        return cls(path, read_fd, write_fd)

    def holder_command(self) -> List[str]:
        """Argv of the holder process run inside the pane."""
        return ["sh", "-c", HOLDER_SCRIPT, str(self.path)]

    @property
    def reader(self) -> Optional[int]:
        """File descriptor of the read end, None once closed."""
        return self._read_fd

    @property
    def connected(self) -> bool:
        """Whether the bootstrap writer has been released."""
        return self._write_fd is None

    def wait_closed(self) -> None:
        """Block until every write end has closed.

        Raises:
            OSError: If reading fails
        """
        fd = self._read_fd
        if fd is None:
            return

        while True:
            chunk = os.read(fd, 64)
            if not chunk:
                return
            # Handshake from the holder
            if self.release_writer():
                logger.debug(f"Holder connected to {self.path}")

    def release_writer(self) -> bool:
        """Close the bootstrap write end. Returns False if it was already closed."""
        with self._lock:
            fd, self._write_fd = self._write_fd, None
        if fd is None:
            return False
        os.close(fd)
        return True

    def close_reader(self) -> None:
        """Close the read end. Only the reading thread may call this."""
        with self._lock:
            fd, self._read_fd = self._read_fd, None
        if fd is not None:
            os.close(fd)

    def close(self) -> None:
        """Close both ends held by this process."""
        self.release_writer()
        self.close_reader()

    def unlink(self) -> None:
        """Remove the FIFO node; a missing node is fine."""
        self.path.unlink(missing_ok=True)

    def __repr__(self) -> str:
        return f"SyncChannel({str(self.path)!r})"
