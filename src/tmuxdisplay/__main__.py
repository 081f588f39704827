"""Run the tmuxdisplay REPL or MCP server.

Requires the optional "repl" dependencies.
"""

import sys
import logging

from .app import app

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
)


def main():
    """Run tmuxdisplay as REPL or MCP server based on command line arguments.

    With --mcp runs as MCP server, otherwise as interactive REPL.
    """
    if "--mcp" in sys.argv:
        app.mcp.run()
    else:
        app.run(title="tmuxdisplay - tmux side-pane displays")


if __name__ == "__main__":
    main()
