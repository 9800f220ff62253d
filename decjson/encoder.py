# encoder.py — value -> minified JSON text with decimal-marker support
#
# Rules:
# - Minimal separators ("," and ":"), no whitespace
# - Mapping keys keep insertion order (no sorting)
# - NaN/Infinity/-Infinity encode as null (not an error)
# - Plain instances encode as their public __dict__ entries
# - Values with no JSON form (functions, classes, UNDEFINED, unknown objects)
#   yield None: dropped from mappings, null inside sequences, None at the root
# - Numbers follow the stdlib json rendering (int repr, float shortest repr);
#   marked integral numbers always carry a decimal point
# - Only '"', '\\' and control chars are escaped; non-ASCII passes through

from __future__ import annotations

import dataclasses
import datetime as _dt
import functools
import inspect
import logging
import math
import re
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

import numpy as np

from .constants import CHECK_CIRCULAR_DEFAULT, DECIMAL_SUFFIX, ESCAPE_MAP, NULL_TOKEN
from .marker import MarkedNumber, is_marked, is_number

__all__ = [
    "UNDEFINED",
    "encode_value",
    "escape_string",
    "format_number",
    "format_marked",
]

logger = logging.getLogger(__name__)


class _Undefined:
    """Sentinel for an absent value (encodes to nothing)."""

    _instance: Optional["_Undefined"] = None

    def __new__(cls) -> "_Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()

_ESCAPE_RE = re.compile(r'["\\\x00-\x1f]')


def _escape_char(m: "re.Match[str]") -> str:
    ch = m.group(0)
    return ESCAPE_MAP.get(ch) or "\\u{0:04x}".format(ord(ch))


def escape_string(s: str) -> str:
    """Escape '"', '\\' and 0x00-0x1F for a JSON string body (no quotes added)."""
    return _ESCAPE_RE.sub(_escape_char, s)


def _quote(s: str) -> str:
    return '"' + escape_string(s) + '"'


def format_number(n: Any) -> str:
    """
    Plain number text: int repr for integers, shortest round-trip repr for
    floats, "null" for NaN/±inf. Same output as json.dumps for finite values.
    """
    if isinstance(n, np.generic):
        n = n.item()
    if isinstance(n, int):
        return int.__repr__(n)
    f = float(n)
    if not math.isfinite(f):
        return NULL_TOKEN
    return float.__repr__(f)


def format_marked(m: MarkedNumber) -> str:
    """Marked number text: like format_number() but integral values end in '.0'."""
    text = format_number(m.value)
    if text == NULL_TOKEN:
        return text
    # float repr may already carry '.' or an exponent ("5.0", "1e+16")
    if m.is_integer() and not any(c in text for c in ".eE"):
        text += DECIMAL_SUFFIX
    return text


def _format_datetime(d: _dt.datetime) -> str:
    if d.utcoffset() is not None:
        d = d.astimezone(_dt.timezone.utc)
    return "%04d-%02d-%02dT%02d:%02d:%02d.%03dZ" % (
        d.year, d.month, d.day, d.hour, d.minute, d.second, d.microsecond // 1000,
    )


def _is_omitted(value: Any) -> bool:
    return (
        value is UNDEFINED
        or inspect.isroutine(value)
        or inspect.isclass(value)
        or isinstance(value, functools.partial)
    )


def _custom_conversion(value: Any) -> Optional[Any]:
    """Return the bound __json__/to_json method, if value has a callable one."""
    for name in ("__json__", "to_json"):
        fn = getattr(value, name, None)
        if callable(fn):
            return fn
    return None


def _key_text(key: Any) -> str:
    # same key coercions as json.dumps; anything else is invalid input
    if isinstance(key, str):
        return key
    if key is True:
        return "true"
    if key is False:
        return "false"
    if key is None:
        return NULL_TOKEN
    if is_marked(key):
        return format_marked(key)
    if is_number(key):
        return format_number(key)
    raise TypeError(f"keys must be str, int, float, bool or None, not {type(key).__name__}")


def _mapping_items(value: Any) -> Optional[List[tuple]]:
    if isinstance(value, Mapping):
        return list(value.items())
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return [(f.name, getattr(value, f.name)) for f in dataclasses.fields(value)]
    # plain instances: public attributes in assignment order
    if hasattr(value, "__dict__") and not inspect.ismodule(value):
        return [(k, v) for k, v in vars(value).items() if not k.startswith("_")]
    return None


def encode_value(value: Any, *, check_circular: bool = CHECK_CIRCULAR_DEFAULT) -> Optional[str]:
    """
    Encode value as minified JSON text.

    Returns None when value has no JSON representation (the omit-signal);
    a str result is always valid JSON text, so None is never confused with
    the text "null".

    Raises TypeError for unsupported mapping key types and ValueError on a
    circular reference (unless check_circular=False, in which case a cycle
    ends in RecursionError).
    """
    markers: Optional[Dict[int, Any]] = {} if check_circular else None

    def _enter(container: Any) -> None:
        if markers is None:
            return
        marker_id = id(container)
        if marker_id in markers:
            raise ValueError("Circular reference detected")
        markers[marker_id] = container

    def _leave(container: Any) -> None:
        if markers is not None:
            del markers[id(container)]

    def _encode(v: Any) -> Optional[str]:
        if _is_omitted(v):
            return None
        if v is None:
            return NULL_TOKEN
        if isinstance(v, (bool, np.bool_)):
            return "true" if v else "false"
        if isinstance(v, str):
            return _quote(v)
        # before the generic object checks: the wrapper is an object
        if is_marked(v):
            return format_marked(v)
        if isinstance(v, MarkedNumber):
            return format_number(v.value)
        if is_number(v):
            return format_number(v)
        if isinstance(v, _dt.datetime):
            return _quote(_format_datetime(v))
        if isinstance(v, _dt.date):
            return _quote(v.isoformat())

        convert = _custom_conversion(v)
        if convert is not None:
            _enter(v)
            try:
                return _encode(convert())
            finally:
                _leave(v)

        if isinstance(v, np.ndarray):
            return _encode(v.tolist())

        if isinstance(v, (list, tuple)):
            _enter(v)
            try:
                items = []
                for i, item in enumerate(v):
                    text = _encode(item)
                    if text is None:
                        logger.debug("sequence element %d has no JSON form; using null", i)
                        text = NULL_TOKEN
                    items.append(text)
            finally:
                _leave(v)
            return "[" + ",".join(items) + "]"

        pairs = _mapping_items(v)
        if pairs is not None:
            _enter(v)
            try:
                out = []
                for key, item in pairs:
                    key_text = _key_text(key)
                    text = _encode(item)
                    if text is None:
                        logger.debug("dropping key %r: value has no JSON form", key_text)
                        continue
                    out.append(_quote(key_text) + ":" + text)
            finally:
                _leave(v)
            return "{" + ",".join(out) + "}"

        return None

    return _encode(value)
