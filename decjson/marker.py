"""
decjson.marker — per-instance "render as decimal" tagging for numbers.

A MarkedNumber carries a numeric value plus a decimal flag. The encoder
renders a marked integral value with a trailing ".0" (5 -> "5.0"); plain
numbers never acquire the flag implicitly.

Public API:
- wrap(n) -> MarkedNumber          raises TypeError for non-numbers
- is_marked(v) -> bool             never raises
- mark_fields(obj, *keys) -> obj   in place, returns the same object
- marked_copy(obj, *keys) -> copy  shallow copy, original untouched
- mark_fields_recursive(obj, *keys) -> obj
"""

from __future__ import annotations

import copy
import math
from collections.abc import Mapping, MutableMapping
from typing import Any, Optional, Union

import numpy as np

__all__ = [
    "MarkedNumber",
    "wrap",
    "is_marked",
    "is_number",
    "mark_fields",
    "marked_copy",
    "mark_fields_recursive",
]

Number = Union[int, float]


def is_number(v: Any) -> bool:
    """True for int/float and numpy integer/floating scalars; bool is not a number."""
    if isinstance(v, (bool, np.bool_)):
        return False
    return isinstance(v, (int, float, np.integer, np.floating))


def _plain(v: Any) -> Number:
    if isinstance(v, MarkedNumber):
        return v.value
    return v


class MarkedNumber:
    """
    A number tagged to serialize with a decimal point.

    Reads back as a plain number: float()/int()/abs(), arithmetic with plain
    numbers (results are plain numbers), ordering and equality.
    Immutable after construction.
    """

    __slots__ = ("value", "decimal")

    def __init__(self, value: Number, decimal: bool = True) -> None:
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "decimal", decimal)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"MarkedNumber is immutable (cannot set {name!r})")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"MarkedNumber is immutable (cannot delete {name!r})")

    def __reduce__(self) -> tuple:
        return (MarkedNumber, (self.value, self.decimal))

    def __repr__(self) -> str:
        return f"MarkedNumber({self.value!r})"

    # numeric read-back
    def __float__(self) -> float:
        return float(self.value)

    def __int__(self) -> int:
        return int(self.value)

    def __abs__(self) -> Number:
        return abs(self.value)

    def __neg__(self) -> Number:
        return -self.value

    def __pos__(self) -> Number:
        return +self.value

    def __round__(self, ndigits: Optional[int] = None) -> Number:
        if ndigits is None:
            return round(self.value)
        return round(self.value, ndigits)

    def __trunc__(self) -> int:
        return math.trunc(self.value)

    def __floor__(self) -> int:
        return math.floor(self.value)

    def __ceil__(self) -> int:
        return math.ceil(self.value)

    def is_integer(self) -> bool:
        if isinstance(self.value, int):
            return True
        return math.isfinite(self.value) and float(self.value).is_integer()

    # arithmetic
    def __add__(self, other: Any) -> Number:
        return self.value + _plain(other)

    def __radd__(self, other: Any) -> Number:
        return _plain(other) + self.value

    def __sub__(self, other: Any) -> Number:
        return self.value - _plain(other)

    def __rsub__(self, other: Any) -> Number:
        return _plain(other) - self.value

    def __mul__(self, other: Any) -> Number:
        return self.value * _plain(other)

    def __rmul__(self, other: Any) -> Number:
        return _plain(other) * self.value

    def __truediv__(self, other: Any) -> float:
        return self.value / _plain(other)

    def __rtruediv__(self, other: Any) -> float:
        return _plain(other) / self.value

    def __floordiv__(self, other: Any) -> Number:
        return self.value // _plain(other)

    def __rfloordiv__(self, other: Any) -> Number:
        return _plain(other) // self.value

    def __mod__(self, other: Any) -> Number:
        return self.value % _plain(other)

    def __rmod__(self, other: Any) -> Number:
        return _plain(other) % self.value

    def __divmod__(self, other: Any) -> tuple:
        return divmod(self.value, _plain(other))

    def __rdivmod__(self, other: Any) -> tuple:
        return divmod(_plain(other), self.value)

    def __pow__(self, other: Any) -> Number:
        return self.value ** _plain(other)

    def __rpow__(self, other: Any) -> Number:
        return _plain(other) ** self.value

    # comparisons
    def __eq__(self, other: Any) -> bool:
        if isinstance(other, MarkedNumber) or is_number(other):
            return self.value == _plain(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    def __lt__(self, other: Any) -> bool:
        return self.value < _plain(other)

    def __le__(self, other: Any) -> bool:
        return self.value <= _plain(other)

    def __gt__(self, other: Any) -> bool:
        return self.value > _plain(other)

    def __ge__(self, other: Any) -> bool:
        return self.value >= _plain(other)


def wrap(n: Any) -> MarkedNumber:
    """
    Wrap a number so it serializes as a double.

    wrap(5)   -> "5.0" when serialized
    wrap(5.5) -> "5.5" when serialized

    NaN and ±inf are accepted (they still encode as null).
    """
    if not is_number(n):
        raise TypeError(f"wrap() expects a number, got {type(n).__name__}")
    if isinstance(n, np.generic):
        n = n.item()
    return MarkedNumber(n)


def is_marked(v: Any) -> bool:
    """True iff v was produced by wrap() and still carries the decimal flag."""
    return isinstance(v, MarkedNumber) and v.decimal is True


def mark_fields(obj: Any, *keys: str) -> Any:
    """
    Replace plain-number fields of obj with wrapped ones. MUTATES obj.

    Mutable mappings use item access; other objects (dataclasses, plain
    instances) use attribute access. Missing keys and non-number values are
    skipped. Returns obj for chaining.

      data = {"price": 100, "quantity": 5, "name": "Widget"}
      mark_fields(data, "price", "quantity")
      stringify(data)  # {"price":100.0,"quantity":5.0,"name":"Widget"}
    """
    if isinstance(obj, MutableMapping):
        for key in keys:
            if key in obj and is_number(obj[key]):
                obj[key] = wrap(obj[key])
        return obj
    for key in keys:
        value = getattr(obj, key, None)
        if is_number(value):
            setattr(obj, key, wrap(value))
    return obj


def marked_copy(obj: Any, *keys: str) -> Any:
    """Copying variant of mark_fields(): marks a shallow copy, obj is untouched."""
    if isinstance(obj, Mapping):
        dup: Any = dict(obj)
    else:
        dup = copy.copy(obj)
    return mark_fields(dup, *keys)


def mark_fields_recursive(obj: Any, *keys: str) -> Any:
    """
    Apply mark_fields() to every mutable mapping nested anywhere in obj
    (walking through mappings, lists and tuples). In place; returns obj.
    """
    stack = [obj]
    seen = set()
    while stack:
        x = stack.pop()
        if id(x) in seen:
            continue
        if isinstance(x, MutableMapping):
            seen.add(id(x))
            mark_fields(x, *keys)
            stack.extend(x.values())
        elif isinstance(x, (list, tuple)):
            seen.add(id(x))
            stack.extend(x)
    return obj
