"""
decjson.globalpatch — opt-in process-wide override of json.dumps.

Goals:
- Let existing code that calls json.dumps(obj) / json.dumps(obj, indent=N)
  pick up decimal markers without being rewritten.
- Keep it explicit: nothing is patched at import time; register and
  unregister (or the global_stringify() context manager) bracket the override.

Notes:
- Only lookups through the json module attribute see the override. Names
  bound earlier with `from json import dumps` keep the native function.
- Calls with any keyword other than `indent` go straight to the native
  json.dumps, so sort_keys/default/cls/... keep their stdlib meaning.
- Values with no JSON form fall back to the native function, which raises
  its usual TypeError.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional

from .api import stringify

__all__ = [
    "register_global_stringify",
    "unregister_global_stringify",
    "is_global_stringify_registered",
    "global_stringify",
]

logger = logging.getLogger(__name__)

_NATIVE: Optional[Callable[..., str]] = None


def _make_override(native: Callable[..., str]) -> Callable[..., str]:
    def dumps(obj: Any, *, indent: Any = None, **kw: Any) -> str:
        if kw:
            return native(obj, indent=indent, **kw)
        text = stringify(obj, None, indent)
        if text is None:
            return native(obj, indent=indent)
        return text

    dumps.__doc__ = native.__doc__
    dumps.__wrapped__ = native  # type: ignore[attr-defined]
    return dumps


def is_global_stringify_registered() -> bool:
    return _NATIVE is not None


def register_global_stringify() -> None:
    """Replace json.dumps with the decimal-aware stringify. Idempotent."""
    global _NATIVE
    if _NATIVE is not None:
        return
    _NATIVE = json.dumps
    json.dumps = _make_override(_NATIVE)
    logger.info("json.dumps overridden by decjson.stringify")


def unregister_global_stringify() -> None:
    """Restore the native json.dumps. Idempotent."""
    global _NATIVE
    if _NATIVE is None:
        return
    json.dumps = _NATIVE
    _NATIVE = None
    logger.info("json.dumps restored")


@contextmanager
def global_stringify() -> Iterator[None]:
    """Override json.dumps for the duration of the block."""
    already = is_global_stringify_registered()
    register_global_stringify()
    try:
        yield
    finally:
        if not already:
            unregister_global_stringify()
