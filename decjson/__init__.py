__all__ = [
    "stringify", "dumps", "dump", "write_json",
    "encode_value", "escape_string", "UNDEFINED",
    "reflow", "normalize_indent",
    "MarkedNumber", "wrap", "is_marked", "mark_fields", "marked_copy", "mark_fields_recursive",
    "register_global_stringify", "unregister_global_stringify", "global_stringify",
]

from .api import dump, dumps, stringify, write_json
from .encoder import UNDEFINED, encode_value, escape_string
from .globalpatch import global_stringify, register_global_stringify, unregister_global_stringify
from .marker import MarkedNumber, is_marked, mark_fields, mark_fields_recursive, marked_copy, wrap
from .reflow import normalize_indent, reflow
