"""
test_jsoncompare.py — Structural JSON equality (strict and lenient).

Common examples:
  pytest -q tests/test_jsoncompare.py
"""
import pytest

from shared.jsoncompare import CompareMode, assert_json_equal, compare, json_equal


def test_object_key_order_ignored():
    assert json_equal({"a": 1, "b": {"c": [1, 2]}}, {"b": {"c": [1, 2]}, "a": 1})


def test_array_order_matters():
    diffs = compare([1, 2], [2, 1])
    assert [d.path for d in diffs] == ["$[0]", "$[1]"]


def test_array_length_differences():
    assert [(d.path, d.kind) for d in compare([1, 2, 3], [1])] == [("$[1]", "missing"), ("$[2]", "missing")]
    assert [(d.path, d.kind) for d in compare([1], [1, 5])] == [("$[1]", "unexpected")]


def test_missing_and_unexpected_keys():
    diffs = compare({"metrics": {"href": "/m"}, "about": {"href": "/a"}},
                    {"about": {"href": "/a"}, "debug": {"href": "/d"}})
    assert [(d.path, d.kind) for d in diffs] == [("$.metrics", "missing"), ("$.debug", "unexpected")]


def test_nested_change_path_and_values():
    (d,) = compare({"audit-records": {"href": "/x"}}, {"audit-records": {"href": "/y"}})
    assert d.path == '$["audit-records"].href'
    assert d.keys == ("audit-records", "href")
    assert (d.kind, d.expected, d.actual) == ("changed", "/x", "/y")
    assert d.describe() == '$["audit-records"].href: expected "/x", actual "/y"'


@pytest.mark.parametrize("expected,actual", [
    (True, 1),
    (0, False),
    ("1", 1),
    (None, False),
    ({"a": 1}, [1]),
    ({}, None),
])
def test_type_sensitive(expected, actual):
    assert not json_equal(expected, actual)


def test_int_float_same_value_equal():
    assert json_equal({"n": 1}, {"n": 1.0})


def test_lenient_tolerates_extra_keys_only():
    assert json_equal({"a": {"x": 1}}, {"a": {"x": 1, "y": 2}, "b": 3}, CompareMode.LENIENT)
    assert not json_equal({"a": 1, "b": 2}, {"a": 1}, CompareMode.LENIENT)
    assert not json_equal([1, 2], [2, 1], CompareMode.LENIENT)


def test_mode_accepts_plain_string():
    assert json_equal({}, {"x": 1}, "lenient")


def test_assert_json_equal_message():
    with pytest.raises(AssertionError) as exc:
        assert_json_equal({"a": 1}, {"a": 2, "b": 3})
    msg = str(exc.value)
    assert "2 difference(s)" in msg
    assert "$.a: expected 1, actual 2" in msg
    assert "$.b: unexpected in actual (3)" in msg
