"""Tmux-specific exceptions.

PUBLIC API:
  - TmuxError: Base exception for all tmux operations
  - LaunchError: Pane creation failed
  - ChannelError: Synchronization channel could not be created or opened
  - TeardownError: Best-effort cleanup step failed
  - PaneNotFoundError: Pane not found exception
"""


class TmuxError(Exception):
    """Base exception for all tmux operations."""

    pass


class LaunchError(TmuxError):
    """Raised when split-window fails or prints something unparsable.

    Attributes:
        output: Captured stderr/stdout of the failed command
    """

    def __init__(self, message: str, output: str = ""):
        super().__init__(message)
        self.output = output

    def __str__(self) -> str:
        message = super().__str__()
        if self.output.strip():
            return f"{message}: {self.output.strip()}"
        return message


class ChannelError(TmuxError):
    """Raised when a synchronization channel cannot be created or opened."""

    pass


class TeardownError(TmuxError):
    """Raised by a cleanup step. Logged by teardown, never propagated to callers."""

    pass


class PaneNotFoundError(TmuxError):
    """Raised when a tmux pane cannot be found."""

    pass
