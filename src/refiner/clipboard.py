"""Cross-platform clipboard text copy.

Supports macOS, Linux, and Windows with zero Python package dependencies.
Uses OS-native tools: pbcopy (macOS), wl-copy/xclip/xsel (Linux), clip (Windows).
"""

from __future__ import annotations

import logging
import subprocess
import sys

logger = logging.getLogger("refiner")

_LINUX_COMMANDS = (
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
)


# ── Public API ────────────────────────────────────────────────


def copy_text_to_clipboard(text: str) -> None:
    """Copy text to the system clipboard.

    macOS:   pbcopy
    Linux:   wl-copy (Wayland), falls back to xclip then xsel
    Windows: clip.exe (UTF-16 input)

    Raises FileNotFoundError when no clipboard tool is installed and
    subprocess.CalledProcessError when the tool fails.
    """
    if sys.platform == "darwin":
        _run(["pbcopy"], text.encode("utf-8"))
    elif sys.platform == "win32":
        _run(["clip"], text.encode("utf-16-le"))
    else:
        _copy_linux(text)


# ── Platform helpers ──────────────────────────────────────────


def _run(command: list[str], data: bytes) -> None:
    subprocess.run(command, input=data, check=True, capture_output=True)


def _copy_linux(text: str) -> None:
    """Try each Linux clipboard tool in turn until one is found."""
    data = text.encode("utf-8")
    for command in _LINUX_COMMANDS:
        try:
            _run(command, data)
            return
        except FileNotFoundError:
            logger.debug("%s not available", command[0])
    raise FileNotFoundError(
        "No clipboard tool found. Install wl-clipboard, xclip or xsel."
    )
