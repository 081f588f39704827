"""Pane creation - channel first, then split-window, then the pane's tty.

PUBLIC API:
  - launch_pane: Create a display pane and its TmuxDisplay
"""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Optional

from .channel import SyncChannel
from .display import TmuxDisplay
from .tmux.exceptions import LaunchError, PaneNotFoundError
from .tmux.pane import kill_pane, split_window
from .types import PaneConfig

logger = logging.getLogger(__name__)


def launch_pane(
    config: PaneConfig,
    on_teardown: Optional[Callable[[TmuxDisplay], None]] = None,
    channel_dir: Optional[Path] = None,
    join_timeout: float = 1.0,
) -> TmuxDisplay:
    """Create a display pane.

    The channel is created before split-window so the pane's holder process
    can connect to it. The returned display is neither registered nor
    watched yet.

    Args:
        config: Placement of the new pane
        on_teardown: Called once with the display when it is torn down
        channel_dir: Directory for the channel node
        join_timeout: Bounded wait for the watcher on close

    Returns:
        TmuxDisplay owning the pane's tty stream and channel

    Raises:
        ChannelError: If the channel cannot be created
        LaunchError: If the pane cannot be created or its tty opened
    """
    channel = SyncChannel.create(channel_dir)

    try:
        split = split_window(config, channel.holder_command())
    except LaunchError:
        channel.close()
        channel.unlink()
        raise

    try:
        output_stream = open(split.pane_tty, "w", encoding="utf-8")
    except OSError as e:
        try:
            kill_pane(split.pane_id)
        except PaneNotFoundError as kill_error:
            logger.warning(str(kill_error))
        channel.close()
        channel.unlink()
        raise LaunchError(f"Failed to open tty {split.pane_tty} of pane {split.pane_id}", str(e)) from e

    logger.info(f"Created display pane {split.pane_id} (pid {split.pane_pid}, tty {split.pane_tty})")

    return TmuxDisplay(
        pane_id=split.pane_id,
        pane_pid=split.pane_pid,
        pane_tty=split.pane_tty,
        output_stream=output_stream,
        channel=channel,
        on_teardown=on_teardown,
        join_timeout=join_timeout,
    )


__all__ = ["launch_pane"]
