# PROV: MOTIONDIFF.CONTRACT.01
# WHY: Capture the shape of a captured/synthesized Android motion event in code for
# validation and for the comparator's precondition checks.

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, NotRequired, TypedDict

from .actions import get_pointer_idx, is_single_pointer_action
from .errors import ERROR, MalformedEventError, make_error

POINTER_PROPERTIES = "pointerProperties"
POINTER_COORDS = "pointerCoords"
ACTION = "action"


class PointerPropertiesV1(TypedDict):
    id: int
    toolType: int


class PointerCoordsV1(TypedDict):
    orientation: float
    pressure: float
    size: float
    toolMajor: float
    toolMinor: float
    touchMajor: float
    touchMinor: float
    x: float
    y: float


class MotionEventV1(TypedDict):
    action: int
    pointerProperties: list[PointerPropertiesV1]
    pointerCoords: list[PointerCoordsV1]
    downTime: NotRequired[int]
    eventTime: NotRequired[int]
    pointerCount: NotRequired[int]
    metaState: NotRequired[int]
    buttonState: NotRequired[int]
    xPrecision: NotRequired[float]
    yPrecision: NotRequired[float]
    deviceId: NotRequired[int]
    edgeFlags: NotRequired[int]
    source: NotRequired[int]
    flags: NotRequired[int]


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_pointer_list(value: object) -> bool:
    return isinstance(value, (list, tuple))


def _fmt_value(value: object) -> str:
    # Keep error messages deterministic and compact.
    return repr(value)


def validate_motion_event(obj: object, *, label: str = "event") -> list[str]:
    errors: list[str] = []
    if not isinstance(obj, Mapping):
        return [f"{label} must be a JSON object"]

    if ACTION not in obj:
        errors.append(f"{label}.{ACTION} is required")
    elif not _is_int(obj.get(ACTION)):
        errors.append(f"{label}.{ACTION} must be an integer (got {_fmt_value(obj.get(ACTION))})")

    for key in (POINTER_PROPERTIES, POINTER_COORDS):
        if key not in obj:
            errors.append(f"{label}.{key} is required")
            continue
        val = obj.get(key)
        if not _is_pointer_list(val):
            errors.append(f"{label}.{key} must be a list of objects")
            continue
        for idx, item in enumerate(val):
            if not isinstance(item, Mapping):
                errors.append(f"{label}.{key}[{idx}] must be an object")

    props = obj.get(POINTER_PROPERTIES)
    coords = obj.get(POINTER_COORDS)
    if _is_pointer_list(props) and _is_pointer_list(coords) and len(props) != len(coords):
        errors.append(
            f"{label}.{POINTER_PROPERTIES} and {label}.{POINTER_COORDS} must describe the same "
            f"pointers (got {len(props)} and {len(coords)})"
        )

    if "pointerCount" in obj and _is_pointer_list(props):
        count = obj.get("pointerCount")
        if not _is_int(count) or count != len(props):
            errors.append(
                f"{label}.pointerCount must equal the number of pointers "
                f"(got {_fmt_value(count)}, expected {len(props)})"
            )

    action = obj.get(ACTION)
    if _is_int(action) and _is_pointer_list(coords):
        if is_single_pointer_action(action) and get_pointer_idx(action) >= len(coords):
            errors.append(
                f"{label}.{ACTION} pointer index {get_pointer_idx(action)} is out of range "
                f"for {len(coords)} pointers"
            )

    return errors


def require_action(event: object, *, label: str) -> int:
    if not isinstance(event, Mapping):
        raise MalformedEventError(
            make_error(ERROR.EVENT_NOT_OBJECT, f"{label} must be a JSON object", path=label)
        )
    if ACTION not in event:
        raise MalformedEventError(
            make_error(ERROR.EVENT_FIELD_MISSING, f"{label}.{ACTION} is required", path=label, field=ACTION)
        )
    action = event[ACTION]
    if not _is_int(action):
        raise MalformedEventError(
            make_error(
                ERROR.EVENT_FIELD_INVALID,
                f"{label}.{ACTION} must be an integer (got {_fmt_value(action)})",
                path=label,
                field=ACTION,
                value=action,
            )
        )
    return action


def require_pointer_list(event: object, key: str, *, label: str) -> Sequence[Mapping[str, Any]]:
    if not isinstance(event, Mapping):
        raise MalformedEventError(
            make_error(ERROR.EVENT_NOT_OBJECT, f"{label} must be a JSON object", path=label)
        )
    if key not in event:
        raise MalformedEventError(
            make_error(ERROR.EVENT_FIELD_MISSING, f"{label}.{key} is required", path=label, field=key)
        )
    val = event[key]
    if not _is_pointer_list(val):
        raise MalformedEventError(
            make_error(
                ERROR.EVENT_FIELD_INVALID,
                f"{label}.{key} must be a list of objects",
                path=label,
                field=key,
            )
        )
    for idx, item in enumerate(val):
        if not isinstance(item, Mapping):
            raise MalformedEventError(
                make_error(
                    ERROR.EVENT_FIELD_INVALID,
                    f"{label}.{key}[{idx}] must be an object",
                    path=label,
                    field=key,
                    index=idx,
                )
            )
    return val
