"""Shared pytest fixtures for decjson tests."""

import json

import pytest

from decjson.globalpatch import unregister_global_stringify


@pytest.fixture
def order():
    """A flat record with numeric, text and nested fields."""
    return {"price": 100, "quantity": 5, "name": "Widget", "tags": ["a", "b"]}


@pytest.fixture
def nested_record():
    """Record with nested mappings and sequences, including empty ones."""
    return {
        "id": 7,
        "meta": {"created": "2024-01-01", "flags": [], "extra": {}},
        "points": [{"x": 1, "y": 2.5}, {"x": 3, "y": 4}],
        "note": 'line1\nline2 "quoted" {not: json}, [x]',
    }


@pytest.fixture
def native_dumps():
    """Capture json.dumps and make sure it is restored after the test."""
    native = json.dumps
    yield native
    unregister_global_stringify()
    json.dumps = native
