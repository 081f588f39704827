#!/usr/bin/env python3
"""Side-pane display demo for tmuxdisplay.

Run from inside tmux. Demonstrates:
- Rendering text into the default display pane
- Splitting a small custom pane off an existing display
- Logging into a pane
- Redrawing a rich table in place
"""

import logging
import random
import time

from rich.table import Table

import tmuxdisplay


def default_display():
    """Show a message in the default display pane."""
    tmuxdisplay.render_default("This is the default tmux display")
    time.sleep(0.8)


def custom_display():
    """Split a 3-line pane off the default display and log into it."""
    default = tmuxdisplay.get_default_display()
    small = tmuxdisplay.create_pane(size=3, target=default)
    small.write_text("This is a custom tmux display")
    time.sleep(0.8)

    logger = logging.getLogger("demo")
    logger.setLevel(logging.INFO)
    logger.propagate = False
    logger.addHandler(small.logging_handler())
    return logger


def live_table(logger: logging.Logger):
    """Redraw a table in the default display while reporting progress."""
    totals = {"alpha": 0.0, "beta": 0.0, "gamma": 0.0}
    for step in range(1, 31):
        for name in totals:
            totals[name] += random.gauss(0, 1)

        table = Table("Series", "Value", title=f"Step {step}/30")
        for name, value in totals.items():
            table.add_row(name, f"{value:+.2f}")
        tmuxdisplay.render_default(table)

        if step % 10 == 0:
            logger.info(f"{step}/30 steps done")
        time.sleep(0.05)


def main():
    """Run the demo, then close every pane."""
    try:
        default_display()
        logger = custom_display()
        live_table(logger)
        input("Press Enter to close the displays...")
    finally:
        tmuxdisplay.close_all()


if __name__ == "__main__":
    main()
