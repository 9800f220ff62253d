"""
decjson.constants — output-contract constants and ENV-overridable defaults.

Kept intentionally simple: module-level constants plus tiny ENV override
helpers, read once at import time. Values that are part of the output
contract (indent cap, escape table) are NOT overridable.
"""

from __future__ import annotations
import os
from typing import Dict

# -------------------- ENV helpers ---------------------------------------------

def _env_int(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is None:
        return default
    try:
        return int(v)
    except ValueError:
        return default

def _env_str(name: str, default: str) -> str:
    v = os.getenv(name)
    return v if v not in (None, "") else default

# -------------------- output contract (fixed) ----------------------------------

MAX_INDENT: int = 10  # cap for both numeric and string indent units

# Short escapes; other control chars (0x00-0x1F) use \u00XX
ESCAPE_MAP: Dict[str, str] = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

NULL_TOKEN: str = "null"
DECIMAL_SUFFIX: str = ".0"

# -------------------- tunables (ENV-overridable) -------------------------------

CHECK_CIRCULAR_DEFAULT: bool = _env_int("DECJSON_CHECK_CIRCULAR", 1) != 0
TEXT_ENCODING_DEFAULT: str = _env_str("DECJSON_ENCODING", "utf-8")
CLI_INDENT_DEFAULT: int = _env_int("DECJSON_CLI_INDENT", 2)

__all__ = [
    # contract
    "MAX_INDENT", "ESCAPE_MAP", "NULL_TOKEN", "DECIMAL_SUFFIX",
    # tunables
    "CHECK_CIRCULAR_DEFAULT", "TEXT_ENCODING_DEFAULT", "CLI_INDENT_DEFAULT",
]
