# shared/jsoncompare.py
"""
Deep structural equality over two JSON trees.

Objects are compared by key set and value, ignoring key order. Arrays are
compared element by element, so order and length matter. Booleans never
equal numbers (``True == 1`` is a Python accident, not a JSON one), while an
int and a float with the same value are equal.

STRICT mode: no missing and no extra keys at any level.
LENIENT mode: ``actual`` may carry object keys ``expected`` does not declare.

    >>> [d.path for d in compare({"a": 1}, {"a": 1, "b": 2})]
    ['$.b']
    >>> compare({"a": 1}, {"a": 1, "b": 2}, CompareMode.LENIENT)
    []
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Tuple, Union

_IDENT = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_MISSING = object()


class CompareMode(str, Enum):
    STRICT = "strict"
    LENIENT = "lenient"


@dataclass(frozen=True)
class Difference:
    keys: Tuple[Union[str, int], ...]
    kind: str  # missing | unexpected | changed
    expected: Any = None
    actual: Any = None

    @property
    def path(self) -> str:
        return render_path(self.keys)

    def describe(self) -> str:
        if self.kind == "missing":
            return f"{self.path}: missing from actual (expected {_show(self.expected)})"
        if self.kind == "unexpected":
            return f"{self.path}: unexpected in actual ({_show(self.actual)})"
        return f"{self.path}: expected {_show(self.expected)}, actual {_show(self.actual)}"


def _show(value: Any) -> str:
    return json.dumps(value, sort_keys=True, ensure_ascii=False)


def render_path(keys: Tuple[Union[str, int], ...]) -> str:
    out = "$"
    for key in keys:
        if isinstance(key, int):
            out += f"[{key}]"
        elif _IDENT.match(key):
            out += f".{key}"
        else:
            out += f"[{json.dumps(key, ensure_ascii=False)}]"
    return out


def _scalar_equal(expected: Any, actual: Any) -> bool:
    if isinstance(expected, bool) or isinstance(actual, bool):
        return isinstance(expected, bool) and isinstance(actual, bool) and expected == actual
    if isinstance(expected, (int, float)) and isinstance(actual, (int, float)):
        return expected == actual
    return type(expected) is type(actual) and expected == actual


def _walk(expected: Any, actual: Any, keys: Tuple[Union[str, int], ...], mode: CompareMode, out: List[Difference]) -> None:
    if isinstance(expected, dict) and isinstance(actual, dict):
        for key, exp_val in expected.items():
            act_val = actual.get(key, _MISSING)
            if act_val is _MISSING:
                out.append(Difference(keys + (key,), "missing", expected=exp_val))
            else:
                _walk(exp_val, act_val, keys + (key,), mode, out)
        if mode is CompareMode.STRICT:
            for key, act_val in actual.items():
                if key not in expected:
                    out.append(Difference(keys + (key,), "unexpected", actual=act_val))
        return

    if isinstance(expected, list) and isinstance(actual, list):
        for i, exp_val in enumerate(expected):
            if i >= len(actual):
                out.append(Difference(keys + (i,), "missing", expected=exp_val))
            else:
                _walk(exp_val, actual[i], keys + (i,), mode, out)
        for i in range(len(expected), len(actual)):
            out.append(Difference(keys + (i,), "unexpected", actual=actual[i]))
        return

    if isinstance(expected, (dict, list)) or isinstance(actual, (dict, list)):
        out.append(Difference(keys, "changed", expected=expected, actual=actual))
        return

    if not _scalar_equal(expected, actual):
        out.append(Difference(keys, "changed", expected=expected, actual=actual))


def compare(expected: Any, actual: Any, mode: CompareMode = CompareMode.STRICT) -> List[Difference]:
    """Every difference between two parsed JSON values, in document order."""
    out: List[Difference] = []
    _walk(expected, actual, (), CompareMode(mode), out)
    return out


def json_equal(expected: Any, actual: Any, mode: CompareMode = CompareMode.STRICT) -> bool:
    return not compare(expected, actual, mode)


def format_differences(differences: List[Difference]) -> str:
    return "\n".join(f"  - {d.describe()}" for d in differences)


def assert_json_equal(expected: Any, actual: Any, mode: CompareMode = CompareMode.STRICT) -> None:
    """pytest-friendly: raises AssertionError carrying the full diff."""
    differences = compare(expected, actual, mode)
    if differences:
        raise AssertionError(
            f"JSON documents differ ({len(differences)} difference(s)):\n"
            + format_differences(differences)
        )
