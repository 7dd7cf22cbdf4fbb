"""Locate a candidate JSON object inside free-form model output.

Strategies, first hit wins:
  1. A fenced block tagged ``json`` (```json ... ```)
  2. Any fenced block whose content looks like an object ({ ... })
  3. The first balanced { ... } region, scanning with string-literal awareness
"""

from __future__ import annotations

import re

_JSON_FENCE_RE = re.compile(r"```json\b\s*(.*?)\s*```", re.IGNORECASE | re.DOTALL)
_ANY_FENCE_RE = re.compile(r"```\s*(.*?)\s*```", re.DOTALL)

_QUOTE_CHARS = ('"', "'")


def extract(text: str) -> str | None:
    """Return the most plausible JSON object substring of ``text``, or None."""
    text = text.strip()

    match = _JSON_FENCE_RE.search(text)
    if match and match.group(1).strip():
        return match.group(1).strip()

    for match in _ANY_FENCE_RE.finditer(text):
        candidate = match.group(1).strip()
        if candidate.startswith("{") and candidate.endswith("}"):
            return candidate

    start = text.find("{")
    if start == -1:
        return None

    end = find_closing_brace(text, start)
    if end is None:
        return None
    return text[start : end + 1].strip()


def find_closing_brace(text: str, start: int) -> int | None:
    """Index of the brace that balances the ``{`` at ``start``.

    Braces inside string literals are ignored. A literal opens on ``"`` or
    ``'`` and only closes on the same unescaped quote character. Returns None
    when the text ends before the object is balanced.
    """
    depth = 0
    quote: str | None = None
    escaped = False

    for i in range(start, len(text)):
        ch = text[i]
        if quote is not None:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = None
            continue

        if ch in _QUOTE_CHARS:
            quote = ch
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
    return None
