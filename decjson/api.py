"""
decjson.api — public entry points composing the encoder and the reflow pass.

stringify() mirrors the familiar stringify(value, replacer, space) signature:
it returns None (not the text "null") when the value has no JSON form.
dumps()/dump()/write_json() follow the stdlib json convention instead and
raise TypeError for such values.
"""

from __future__ import annotations

from typing import IO, Any, Optional

from .constants import TEXT_ENCODING_DEFAULT
from .encoder import encode_value
from .reflow import normalize_indent, reflow
from .utils.iohelpers import write_text_atomic

__all__ = ["stringify", "dumps", "dump", "write_json"]


def stringify(value: Any, replacer: Any = None, space: Any = None) -> Optional[str]:
    """
    Serialize value to JSON text, optionally pretty-printed.

      stringify({"x": 5})                 -> '{"x":5}'
      stringify({"x": wrap(5)})           -> '{"x":5.0}'
      stringify({"a": 1, "b": 2}, None, 2) -> '{\\n  "a": 1,\\n  "b": 2\\n}'

    `replacer` is accepted for call-site compatibility and never used.
    `space`: number of spaces (capped at 10) or an indent string (first 10
    chars). Falsy or empty -> minified output.
    """
    serialized = encode_value(value)
    if serialized is None:
        return None

    indent = normalize_indent(space)
    if not indent:
        return serialized

    return reflow(serialized, indent)


def dumps(value: Any, *, indent: Any = None) -> str:
    """Like stringify(), but raise TypeError when value is not serializable."""
    text = stringify(value, None, indent)
    if text is None:
        raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
    return text


def dump(value: Any, fp: IO[str], *, indent: Any = None) -> None:
    """Write dumps(value) to a text stream."""
    fp.write(dumps(value, indent=indent))


def write_json(
    path: str,
    value: Any,
    *,
    indent: Any = None,
    newline: bool = True,
    encoding: str = TEXT_ENCODING_DEFAULT,
) -> None:
    """
    Atomically write dumps(value) to path (temp file + fsync + rename).
    The text is fully built before the file is touched, so an encoding error
    leaves any existing file intact.
    """
    text = dumps(value, indent=indent)
    if newline:
        text += "\n"
    write_text_atomic(path, text, encoding=encoding)
