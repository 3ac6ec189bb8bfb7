from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys

from .errors import ClipboardError

logger = logging.getLogger(__name__)


def clipboard_commands() -> list[list[str]]:
    if sys.platform == "darwin":
        return [["pbcopy"]]
    if os.name == "nt":
        return [["clip"]]
    return [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ]


def copy_text(text: str) -> None:
    """Put ``text`` on the system clipboard using the first tool that works."""
    tried: list[str] = []
    for command in clipboard_commands():
        if shutil.which(command[0]) is None:
            continue
        tried.append(command[0])
        try:
            proc = subprocess.run(command, input=text, text=True, check=False)
        except OSError as exc:
            logger.warning("Clipboard command %s failed: %s", command[0], exc)
            continue
        if proc.returncode == 0:
            logger.debug("Copied %r with %s", text, command[0])
            return
    if not tried:
        raise ClipboardError("No clipboard tool available")
    raise ClipboardError(f"Clipboard copy failed ({', '.join(tried)})")
