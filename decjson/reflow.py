# reflow.py — re-indent minified JSON text without parsing it into a tree
from __future__ import annotations

from typing import Any, List

from .constants import MAX_INDENT
from .marker import is_number

__all__ = ["reflow", "normalize_indent"]

_OPENERS = {"{": "}", "[": "]"}
_CLOSERS = {"}": "{", "]": "["}


def normalize_indent(space: Any) -> str:
    """
    Turn a `space` argument into an indent unit.

    number (not bool)    -> that many spaces, capped at MAX_INDENT (<= 0 -> "")
    str                  -> the string itself, first MAX_INDENT chars
    anything else        -> "" (ignored, no pretty printing)
    """
    if is_number(space):
        if space != space:  # NaN
            return ""
        count = min(space, MAX_INDENT)
        return " " * int(count) if count >= 1 else ""
    if isinstance(space, str):
        return space[:MAX_INDENT]
    return ""


def reflow(text: str, indent: str) -> str:
    """
    Pretty-print minified JSON produced by encode_value().

    Single left-to-right scan tracking only "inside a string literal" and the
    nesting depth. String contents (escapes included) are copied verbatim;
    empty {} and [] stay on one line. An empty indent returns text unchanged.

    The input must be encoder output: whitespace outside strings, or any other
    non-minified layout, is not normalized.
    """
    if not indent:
        return text

    out: List[str] = []
    depth = 0
    in_string = False
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]

        if in_string:
            out.append(ch)
            if ch == "\\":
                i += 1
                if i < n:
                    out.append(text[i])
            elif ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
            out.append(ch)
        elif ch in _OPENERS:
            out.append(ch)
            if text[i + 1:i + 2] != _OPENERS[ch]:
                depth += 1
                out.append("\n")
                out.append(indent * depth)
        elif ch in _CLOSERS:
            if i == 0 or text[i - 1] != _CLOSERS[ch]:
                depth -= 1
                out.append("\n")
                out.append(indent * depth)
            out.append(ch)
        elif ch == ",":
            out.append(",\n")
            out.append(indent * depth)
        elif ch == ":":
            out.append(": ")
        else:
            out.append(ch)
        i += 1

    return "".join(out)
