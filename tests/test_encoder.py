"""Unit tests for decjson.encoder."""

import datetime as dt
import functools
import json
import math
from dataclasses import dataclass

import numpy as np
import pytest

from decjson.encoder import UNDEFINED, encode_value, escape_string, format_number
from decjson.marker import mark_fields, wrap


@dataclass
class Item:
    sku: str
    price: float
    qty: int


class Money:
    def __init__(self, amount):
        self.amount = amount

    def __json__(self):
        return {"amount": wrap(self.amount), "currency": "EUR"}


class Legacy:
    def to_json(self):
        return [1, 2]


class Vanishing:
    def __json__(self):
        return lambda: None


class SelfReferencing:
    def __json__(self):
        return self


class Order:
    def __init__(self, price=100, name="Widget"):
        self.price = price
        self.name = name
        self._cache = {"hidden": True}


class TestPrimitives:
    """Tests for scalar values."""

    def test_basic_object(self):
        assert encode_value({"name": "John", "age": 30}) == '{"name":"John","age":30}'

    def test_array(self):
        assert encode_value([1, 2, 3]) == "[1,2,3]"

    def test_null(self):
        assert encode_value(None) == "null"

    def test_booleans(self):
        assert encode_value(True) == "true"
        assert encode_value(False) == "false"
        assert encode_value(np.bool_(True)) == "true"

    def test_numbers(self):
        assert encode_value(42) == "42"
        assert encode_value(3.14) == "3.14"
        assert encode_value(-0.5) == "-0.5"

    def test_plain_float_matches_stdlib(self):
        for f in [5.0, 0.1, 1e16, 1e-7, 123456789.125, -2.5e-300, 1.7976931348623157e308]:
            assert encode_value(f) == json.dumps(f)

    def test_big_int(self):
        assert encode_value(10**30) == str(10**30)

    @pytest.mark.parametrize("n", [math.inf, -math.inf, math.nan])
    def test_non_finite_is_null(self, n):
        assert encode_value(n) == "null"

    def test_numpy_scalars(self):
        assert encode_value(np.int32(7)) == "7"
        assert encode_value(np.float64(0.25)) == "0.25"
        assert encode_value(np.float32(0.5)) == "0.5"


class TestStrings:
    """Tests for string escaping."""

    def test_newline_and_quote(self):
        assert encode_value("hello\nworld") == '"hello\\nworld"'
        assert encode_value('quote"test') == '"quote\\"test"'

    def test_backslash(self):
        assert encode_value("a\\b") == '"a\\\\b"'

    def test_short_escapes(self):
        assert escape_string("\b\f\n\r\t") == "\\b\\f\\n\\r\\t"

    def test_other_control_chars_use_unicode_escape(self):
        assert escape_string("\x00\x01\x1f") == "\\u0000\\u0001\\u001f"

    def test_non_ascii_passes_through(self):
        assert encode_value("héllo ✓ 日本") == '"héllo ✓ 日本"'

    def test_del_is_not_escaped(self):
        assert escape_string("\x7f") == "\x7f"


class TestMarkedNumbers:
    """Tests for decimal-marked numbers."""

    def test_integer_gets_decimal(self):
        assert encode_value(wrap(5)) == "5.0"
        assert encode_value({"value": wrap(5)}) == '{"value":5.0}'

    def test_fractional_unchanged(self):
        assert encode_value(wrap(5.5)) == "5.5"

    def test_integral_float(self):
        assert encode_value(wrap(5.0)) == "5.0"
        assert encode_value(wrap(-3.0)) == "-3.0"

    def test_large_int(self):
        assert encode_value(wrap(10**20)) == "100000000000000000000.0"

    def test_exponent_form_kept_valid(self):
        assert encode_value(wrap(1e16)) == "1e+16"
        assert json.loads(encode_value(wrap(1e300))) == 1e300

    @pytest.mark.parametrize("n", [math.inf, -math.inf, math.nan])
    def test_non_finite_is_null(self, n):
        assert encode_value(wrap(n)) == "null"

    def test_mark_fields_scenario(self):
        data = mark_fields({"a": 1, "b": "x"}, "a", "b")
        assert encode_value(data) == '{"a":1.0,"b":"x"}'

    def test_mark_fields_order(self):
        data = {"price": 100, "quantity": 5, "name": "Widget"}
        mark_fields(data, "price", "quantity")
        assert encode_value(data) == '{"price":100.0,"quantity":5.0,"name":"Widget"}'


class TestOmission:
    """Values with no JSON form."""

    def test_undefined_at_root(self):
        assert encode_value(UNDEFINED) is None

    def test_function_at_root(self):
        assert encode_value(lambda: 1) is None
        assert encode_value(len) is None
        assert encode_value(functools.partial(int, "3")) is None

    def test_class_at_root(self):
        assert encode_value(Item) is None

    def test_unknown_object_at_root(self):
        assert encode_value(object()) is None
        assert encode_value({1, 2}) is None

    def test_dropped_from_mapping(self):
        assert encode_value({"fn": lambda: None}) == "{}"
        assert encode_value({"a": 1, "u": UNDEFINED, "b": 2}) == '{"a":1,"b":2}'

    def test_null_in_sequence(self):
        assert encode_value([lambda: None, 1, UNDEFINED]) == "[null,1,null]"

    def test_none_is_not_omitted(self):
        assert encode_value({"a": None}) == '{"a":null}'


class TestDates:
    """Date-like values."""

    def test_utc_datetime(self):
        d = dt.datetime(2024, 1, 1, tzinfo=dt.timezone.utc)
        assert encode_value(d) == '"2024-01-01T00:00:00.000Z"'

    def test_offset_is_converted_to_utc(self):
        d = dt.datetime(2024, 1, 1, 2, 30, tzinfo=dt.timezone(dt.timedelta(hours=2)))
        assert encode_value(d) == '"2024-01-01T00:30:00.000Z"'

    def test_naive_taken_as_utc_and_millis_truncated(self):
        d = dt.datetime(2024, 5, 6, 7, 8, 9, 123999)
        assert encode_value(d) == '"2024-05-06T07:08:09.123Z"'

    def test_date(self):
        assert encode_value({"on": dt.date(2024, 2, 29)}) == '{"on":"2024-02-29"}'


class TestCustomConversion:
    """__json__ / to_json hooks."""

    def test_dunder_json(self):
        assert encode_value(Money(12)) == '{"amount":12.0,"currency":"EUR"}'

    def test_to_json(self):
        assert encode_value({"l": Legacy()}) == '{"l":[1,2]}'

    def test_conversion_without_json_form(self):
        assert encode_value(Vanishing()) is None
        assert encode_value({"v": Vanishing(), "k": 1}) == '{"k":1}'

    def test_conversion_returning_self_is_circular(self):
        with pytest.raises(ValueError, match="Circular reference"):
            encode_value(SelfReferencing())


class TestPlainInstances:
    """Ordinary objects encode as their public attributes."""

    def test_root_instance(self):
        assert encode_value(Order()) == '{"price":100,"name":"Widget"}'

    def test_nested_instance(self):
        value = {"order": Order(5, "Bolt"), "items": [Order(1, "Nut")]}
        assert encode_value(value) == (
            '{"order":{"price":5,"name":"Bolt"},"items":[{"price":1,"name":"Nut"}]}'
        )

    def test_marked_attributes_are_serialized(self):
        order = mark_fields(Order(), "price")
        assert encode_value(order) == '{"price":100.0,"name":"Widget"}'

    def test_attribute_without_json_form_is_dropped(self):
        order = Order()
        order.callback = lambda: None
        assert encode_value(order) == '{"price":100,"name":"Widget"}'

    def test_self_reference_is_circular(self):
        order = Order()
        order.parent = order
        with pytest.raises(ValueError, match="Circular reference"):
            encode_value(order)


class TestComposites:
    """Sequences and mappings."""

    def test_empty(self):
        assert encode_value({}) == "{}"
        assert encode_value([]) == "[]"
        assert encode_value(()) == "[]"

    def test_tuple(self):
        assert encode_value((1, "a")) == '[1,"a"]'

    def test_insertion_order_kept(self):
        assert encode_value({"b": 1, "a": 2}) == '{"b":1,"a":2}'

    def test_escaped_keys(self):
        assert encode_value({'k"\n': 1}) == '{"k\\"\\n":1}'

    def test_dataclass(self):
        assert encode_value(Item("x1", 9.5, 2)) == '{"sku":"x1","price":9.5,"qty":2}'

    def test_ndarray(self):
        arr = np.array([[1, 2], [3, 4]])
        assert encode_value({"m": arr}) == '{"m":[[1,2],[3,4]]}'

    def test_non_string_keys(self):
        assert encode_value({1: "a", 2.5: "b", None: "c"}) == '{"1":"a","2.5":"b","null":"c"}'
        assert encode_value({False: 0}) == '{"false":0}'

    def test_unsupported_key_raises(self):
        with pytest.raises(TypeError, match="keys must be"):
            encode_value({(1, 2): "x"})

    def test_deep_nesting(self):
        v = [{"a": [{"b": {"c": [wrap(1), None, True]}}]}]
        assert encode_value(v) == '[{"a":[{"b":{"c":[1.0,null,true]}}]}]'


class TestCycles:
    """Circular reference handling."""

    def test_self_referencing_list(self):
        a = []
        a.append(a)
        with pytest.raises(ValueError, match="Circular reference"):
            encode_value(a)

    def test_self_referencing_dict(self):
        d = {}
        d["me"] = d
        with pytest.raises(ValueError, match="Circular reference"):
            encode_value({"outer": d})

    def test_shared_reference_is_not_a_cycle(self):
        x = [1]
        assert encode_value([x, {"again": x}]) == '[[1],{"again":[1]}]'

    def test_unchecked_cycle_hits_recursion_limit(self):
        a = []
        a.append(a)
        with pytest.raises(RecursionError):
            encode_value(a, check_circular=False)


class TestRoundTrip:
    """Encoded numbers parse back to the same value."""

    @pytest.mark.parametrize("n", [0, -1, 2**53 + 1, 0.1, 1 / 3, 1e-320, 6.02214076e23, -0.0])
    def test_plain_numbers(self, n):
        assert json.loads(encode_value(n)) == n

    @pytest.mark.parametrize("n", [0, 7, 2.5, 1e16, -123456789])
    def test_marked_numbers(self, n):
        assert json.loads(encode_value(wrap(n))) == n

    def test_format_number_matches_stdlib_for_ints(self):
        assert format_number(-42) == json.dumps(-42)
