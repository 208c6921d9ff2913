# PROV: MOTIONDIFF.MAPS.01
# WHY: Compare two key-labelled field mappings and append one entry per differing field.

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any

from .report import DiffReport

DOUBLE_ERROR_MARGIN = 0.0001


def _fmt_float(value: float) -> str:
    # Positional notation for 1e-6 <= |x| < 1e21, short exponent form ("1e-7") outside.
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0 or 1e-6 <= abs(value) < 1e21:
        text = format(Decimal(repr(value)), "f")
        return text if "." in text else text + ".0"
    mantissa, _, exponent = repr(value).partition("e")
    return f"{mantissa}e{int(exponent):+d}"


def _fmt_value(value: object) -> str:
    # Values render the way the platform prints the decoded channel message.
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float):
        return _fmt_float(value)
    if isinstance(value, Mapping):
        return "{" + ", ".join(f"{_fmt_value(k)}: {_fmt_value(v)}" for k, v in value.items()) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_fmt_value(v) for v in value) + "]"
    return str(value)


def _fmt_keys(keys: Iterable[str]) -> str:
    return "(" + ", ".join(str(k) for k in keys) + ")"


def doubles_approximately_match(a: object, b: object, tolerance: float = DOUBLE_ERROR_MARGIN) -> bool:
    return isinstance(a, float) and isinstance(b, float) and abs(a - b) < tolerance


def _values_equal(a: object, b: object) -> bool:
    # 1 == True in Python; the platform treats booleans and numbers as distinct.
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    return a == b


def keys_match(expected: Mapping[str, Any], actual: Mapping[str, Any], *, ordered: bool = True) -> bool:
    if ordered:
        return list(expected.keys()) == list(actual.keys())
    return set(expected.keys()) == set(actual.keys())


def diff_maps(
    expected: Mapping[str, Any],
    actual: Mapping[str, Any],
    report: DiffReport,
    *,
    exclude_keys: Iterable[str] = (),
    message_prefix: str = "",
    tolerance: float = DOUBLE_ERROR_MARGIN,
    ordered_keys: bool = True,
) -> None:
    if not keys_match(expected, actual, ordered=ordered_keys):
        report.write(
            f"{message_prefix}keys (expected: {_fmt_keys(expected.keys())} "
            f"actual: {_fmt_keys(actual.keys())} "
        )
        return

    excluded = frozenset(exclude_keys)
    for key in expected.keys():
        if key in excluded:
            continue
        expected_value = expected[key]
        actual_value = actual[key]
        if doubles_approximately_match(expected_value, actual_value, tolerance):
            continue
        if not _values_equal(expected_value, actual_value):
            report.write(
                f"{message_prefix}{key} (expected: {_fmt_value(expected_value)} "
                f"actual: {_fmt_value(actual_value)}) "
            )
