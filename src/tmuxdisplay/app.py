"""tmuxdisplay ReplKit2 application.

Interactive front end for driving display panes from a REPL. The REPL
process owns the panes, so they stay up for as long as the session runs.
"""

from dataclasses import dataclass, field

from replkit2 import App

from .manager import DisplayManager, get_display_manager
from .tmux.exceptions import TmuxError


@dataclass
class DisplayState:
    """Application state - the process-wide display manager."""

    manager: DisplayManager = field(default_factory=get_display_manager)


app = App(
    "tmuxdisplay",
    DisplayState,
    uri_scheme="tmuxdisplay",
    fastmcp={
        "description": "Render text into tmux side panes",
        "tags": {"terminal", "tmux", "display"},
    },
)


def pane_rows(manager: DisplayManager) -> list[dict]:
    """Build table rows for the managed panes."""
    default = manager.default_display
    rows = []
    for display in manager.panes():
        status = "open" if display.is_alive() else "gone"
        if display is default:
            status += " (default)"
        rows.append({"Pane": display.pane_id, "PID": display.pane_pid, "TTY": display.pane_tty, "Status": status})
    rows.sort(key=lambda row: row["Pane"])
    return rows


@app.command(
    display="text",
    fastmcp={"type": "tool", "description": "Render text into the default display pane"},
)
def show(state, text: str) -> str:
    """Render text into the default display pane."""
    try:
        display = state.manager.render_default(text)
    except TmuxError as e:
        return f"Error: {e}"
    return f"Rendered into {display.pane_id}"


@app.command(
    display="text",
    fastmcp={"type": "tool", "description": "Create a new display pane"},
)
def split(state, horizontal: bool = False, size: int | None = None, target: str | None = None) -> str:
    """Create a new display pane next to target (or the current pane)."""
    overrides: dict = {"horizontal": horizontal}
    if size is not None:
        overrides["size"] = size
    if target:
        overrides["target"] = target

    try:
        display = state.manager.create_pane(**overrides)
    except (TmuxError, ValueError) as e:
        return f"Error: {e}"
    return f"Created {display.pane_id} ({display.pane_tty})"


@app.command(
    display="table",
    headers=["Pane", "PID", "TTY", "Status"],
    fastmcp={"type": "resource", "description": "List managed display panes"},
)
def ls(state):
    """List display panes managed by this process."""
    return pane_rows(state.manager)


@app.command(
    display="text",
    fastmcp={"type": "tool", "description": "Close one display pane or all of them"},
)
def close(state, pane_id: str | None = None) -> str:
    """Close a display pane, or every pane when no ID is given."""
    if pane_id is None:
        count = state.manager.close_all()
        return f"Closed {count} pane(s)"

    display = state.manager.registry.get(pane_id)
    if display is None:
        return f"Error: no display pane {pane_id}"
    display.close()
    return f"Closed {pane_id}"
