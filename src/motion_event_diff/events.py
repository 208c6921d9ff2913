"""motion_event_diff.events

PROV: MOTIONDIFF.EVENTS.01
WHY: Compare an original motion event against a synthesized one and describe every
difference that is not a known, tolerated discrepancy.

The comparison runs in four phases that each append to the same report:
top-level fields, the action (kind + pointer index), pointer properties and
pointer coordinates. `pointerProperties[i]` and `pointerCoords[i]` must describe
the same pointer in both events; this is not checked here.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .actions import (
    get_action_masked,
    get_action_name,
    get_pointer_idx,
    is_pointer_action,
    is_single_pointer_action,
)
from .config import DEFAULT_CONFIG, DiffConfig
from .contract import POINTER_COORDS, POINTER_PROPERTIES, require_action, require_pointer_list
from .errors import ERROR, MalformedEventError, make_error
from .maps import diff_maps
from .report import DiffReport

ORIGINAL = "original"
SYNTHESIZED = "synthesized"


def diff_motion_events(
    original_event: Mapping[str, Any],
    synthesized_event: Mapping[str, Any],
    config: DiffConfig | None = None,
) -> str:
    """Return the mismatch report for two events; an empty string means equal.

    Raises MalformedEventError when either event lacks the fields the
    comparison needs. No partial report is returned in that case.
    """
    return str(build_diff_report(original_event, synthesized_event, config))


def build_diff_report(
    original_event: Mapping[str, Any],
    synthesized_event: Mapping[str, Any],
    config: DiffConfig | None = None,
) -> DiffReport:
    cfg = config or DEFAULT_CONFIG
    for label, event in ((ORIGINAL, original_event), (SYNTHESIZED, synthesized_event)):
        require_action(event, label=label)
        require_pointer_list(event, POINTER_PROPERTIES, label=label)
        require_pointer_list(event, POINTER_COORDS, label=label)

    report = DiffReport()
    diff_maps(
        original_event,
        synthesized_event,
        report,
        exclude_keys=cfg.excluded_keys,
        tolerance=cfg.tolerance,
        ordered_keys=cfg.key_order_sensitive,
    )
    diff_actions(report, original_event, synthesized_event)
    diff_pointer_properties(report, original_event, synthesized_event, cfg)
    diff_pointer_coords_list(report, original_event, synthesized_event, cfg)
    return report


def diff_actions(
    report: DiffReport,
    original_event: Mapping[str, Any],
    synthesized_event: Mapping[str, Any],
) -> None:
    original_action = require_action(original_event, label=ORIGINAL)
    synthesized_action = require_action(synthesized_event, label=SYNTHESIZED)
    original_masked = get_action_masked(original_action)
    synthesized_masked = get_action_masked(synthesized_action)
    original_name = get_action_name(original_masked, original_action)
    synthesized_name = get_action_name(synthesized_masked, synthesized_action)

    if synthesized_masked != original_masked:
        report.write(f"action (expected: {original_name} actual: {synthesized_name}) ")
        return

    if is_pointer_action(original_masked):
        original_pointer = get_pointer_idx(original_action)
        synthesized_pointer = get_pointer_idx(synthesized_action)
        if original_pointer != synthesized_pointer:
            # No closing paren: this entry text is matched verbatim downstream.
            report.write(
                f"pointerIdx (expected: {original_pointer} actual: {synthesized_pointer} "
                f"action: {original_name} "
            )


def diff_pointer_properties(
    report: DiffReport,
    original_event: Mapping[str, Any],
    synthesized_event: Mapping[str, Any],
    config: DiffConfig | None = None,
) -> None:
    cfg = config or DEFAULT_CONFIG
    expected_list = require_pointer_list(original_event, POINTER_PROPERTIES, label=ORIGINAL)
    actual_list = require_pointer_list(synthesized_event, POINTER_PROPERTIES, label=SYNTHESIZED)

    if len(expected_list) != len(actual_list):
        report.write(
            f"{POINTER_PROPERTIES} (actual length: {len(actual_list)}, "
            f"expected length: {len(expected_list)} "
        )
        return

    for i, (expected, actual) in enumerate(zip(expected_list, actual_list)):
        diff_maps(
            expected,
            actual,
            report,
            message_prefix=f"[pointerProperty {i}] ",
            tolerance=cfg.tolerance,
            ordered_keys=cfg.key_order_sensitive,
        )


def diff_pointer_coords_list(
    report: DiffReport,
    original_event: Mapping[str, Any],
    synthesized_event: Mapping[str, Any],
    config: DiffConfig | None = None,
) -> None:
    cfg = config or DEFAULT_CONFIG
    expected_list = require_pointer_list(original_event, POINTER_COORDS, label=ORIGINAL)
    actual_list = require_pointer_list(synthesized_event, POINTER_COORDS, label=SYNTHESIZED)

    if len(expected_list) != len(actual_list):
        report.write(
            f"{POINTER_COORDS} (actual length: {len(actual_list)}, "
            f"expected length: {len(expected_list)} "
        )
        return

    original_action = require_action(original_event, label=ORIGINAL)
    if cfg.single_pointer_coords_only and is_single_pointer_action(original_action):
        # POINTER_DOWN / POINTER_UP: the embedder drops the data for every pointer
        # except the one going down or up, so only that pointer is comparable.
        idx = get_pointer_idx(original_action)
        if idx >= len(expected_list):
            raise MalformedEventError(
                make_error(
                    ERROR.POINTER_INDEX_OUT_OF_RANGE,
                    f"{ORIGINAL}.action pointer index {idx} is out of range "
                    f"for {len(expected_list)} pointers",
                    path=ORIGINAL,
                    field="action",
                    index=idx,
                )
            )
        diff_pointer_coords(expected_list[idx], actual_list[idx], idx, report, cfg)
        return

    for i, (expected, actual) in enumerate(zip(expected_list, actual_list)):
        diff_pointer_coords(expected, actual, i, report, cfg)


def diff_pointer_coords(
    expected: Mapping[str, Any],
    actual: Mapping[str, Any],
    pointer_idx: int,
    report: DiffReport,
    config: DiffConfig | None = None,
) -> None:
    cfg = config or DEFAULT_CONFIG
    diff_maps(
        expected,
        actual,
        report,
        message_prefix=f"[pointerCoord {pointer_idx}] ",
        tolerance=cfg.tolerance,
        ordered_keys=cfg.key_order_sensitive,
    )
