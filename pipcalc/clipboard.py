"""Clipboard copy — best effort, never affects calculation state.

Tries each platform clipboard command in turn and reports the outcome as a
``Notification`` for the front end to display.
"""

import logging
import shutil
import subprocess
from dataclasses import dataclass

logger = logging.getLogger("pipcalc")

# Tried in order; the first one installed and exiting cleanly wins.
CLIPBOARD_COMMANDS: list[list[str]] = [
    ["pbcopy"],
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
    ["clip"],
]


class ClipboardError(RuntimeError):
    """No clipboard command could take the text."""


@dataclass(frozen=True)
class Notification:
    """A transient message for the user."""

    title: str
    description: str
    variant: str = "default"  # "default" or "destructive"


def format_price(value: float) -> str:
    """Clipboard text for a price: five decimal places."""
    return f"{value:.5f}"


def write_text(text: str, commands: list[list[str]] | None = None) -> list[str]:
    """Write *text* to the system clipboard.

    Returns the command that succeeded.

    Raises:
        ClipboardError: If no command is available or all of them fail.
    """
    if commands is None:
        commands = CLIPBOARD_COMMANDS
    failures = []
    for cmd in commands:
        if shutil.which(cmd[0]) is None:
            continue
        try:
            subprocess.run(
                cmd,
                input=text,
                text=True,
                check=True,
                timeout=2,
                capture_output=True,
            )
            return cmd
        except (OSError, subprocess.SubprocessError) as exc:
            logger.debug("Clipboard command %s failed: %s", cmd[0], exc)
            failures.append(cmd[0])
    if failures:
        raise ClipboardError(f"Clipboard command(s) failed: {', '.join(failures)}")
    raise ClipboardError("No clipboard command available")


def copy_value(value: float, label: str) -> Notification:
    """Copy *value* formatted as a price and describe the outcome."""
    try:
        write_text(format_price(value))
    except ClipboardError as exc:
        logger.warning("Copy of %s failed: %s", label, exc)
        return Notification(
            title="Copy failed",
            description="Unable to copy to clipboard",
            variant="destructive",
        )
    return Notification(title="Copied!", description=f"{label} copied to clipboard")
