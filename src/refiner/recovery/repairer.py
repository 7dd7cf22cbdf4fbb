"""Best-effort structural repair of almost-JSON produced by LLMs.

Targets the failure modes models actually produce:
  - dropped commas between sibling members or array items
  - trailing commas before a closer
  - truncated output (open string, open arrays/objects)

This is not a lenient JSON grammar. Unquoted keys, comments and similar
corruption are left alone and will still fail to parse.
"""

from __future__ import annotations

_QUOTE_CHARS = ('"', "'")

# A new member that follows one of these without a comma is a dropped comma.
_MEMBER_END_CHARS = ('"', "}", "]")

_CLOSERS = {"{": "}", "[": "]"}
_OPENERS = {closer: opener for opener, closer in _CLOSERS.items()}


def repair(candidate: str) -> str:
    """Rebuild ``candidate`` with missing commas and closers restored.

    Always returns a string; whether it parses is for the caller to find out.
    """
    out: list[str] = []
    stack: list[str] = []
    quote: str | None = None
    escaped = False
    last_sig = -1  # index in ``out`` of the last non-whitespace char outside a string

    for ch in candidate.strip():
        if quote is not None:
            out.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = None
                last_sig = len(out) - 1
            continue

        if ch.isspace():
            out.append(ch)
            continue

        if ch in _QUOTE_CHARS:
            if ch == '"' and last_sig >= 0 and out[last_sig] in _MEMBER_END_CHARS:
                out.insert(last_sig + 1, ",")
            quote = ch
        elif ch in _CLOSERS:
            stack.append(ch)
        elif ch in _OPENERS:
            if last_sig >= 0 and out[last_sig] == ",":
                del out[last_sig]
            opener = _OPENERS[ch]
            # Close inner containers the model forgot before this one
            if opener in stack:
                while stack[-1] != opener:
                    out.append(_CLOSERS[stack.pop()])
                stack.pop()

        out.append(ch)
        last_sig = len(out) - 1

    if quote is not None:
        # Truncated inside a literal: a dangling backslash would escape the closer
        if escaped:
            out.pop()
        out.append(quote)
        last_sig = len(out) - 1

    if stack:
        if last_sig >= 0 and out[last_sig] == ",":
            del out[last_sig]
        out.extend(_CLOSERS[opener] for opener in reversed(stack))

    return "".join(out)
