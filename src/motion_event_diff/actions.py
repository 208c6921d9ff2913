# PROV: MOTIONDIFF.ACTIONS.01
# WHY: Decode packed Android MotionEvent action codes (kind + pointer index) and name them.

from __future__ import annotations

from dataclasses import dataclass

ACTION_DOWN = 0
ACTION_UP = 1
ACTION_POINTER_DOWN = 5
ACTION_POINTER_UP = 6

# Action kinds for which a pointer index is encoded in the unmasked action code.
POINTER_ACTIONS: frozenset[int] = frozenset(
    {ACTION_DOWN, ACTION_UP, ACTION_POINTER_DOWN, ACTION_POINTER_UP}
)

SINGLE_POINTER_ACTIONS: frozenset[int] = frozenset({ACTION_POINTER_DOWN, ACTION_POINTER_UP})

ACTION_NAMES: tuple[str, ...] = (
    "DOWN",
    "UP",
    "MOVE",
    "CANCEL",
    "OUTSIDE",
    "POINTER_DOWN",
    "POINTER_UP",
    "HOVER_MOVE",
    "SCROLL",
    "HOVER_ENTER",
    "HOVER_EXIT",
    "BUTTON_PRESS",
    "BUTTON_RELEASE",
)

_ACTION_MASK = 0xFF
_POINTER_INDEX_SHIFT = 8


def get_action_masked(action: int) -> int:
    return action & _ACTION_MASK


def get_pointer_idx(action: int) -> int:
    # Only meaningful when the masked action is in POINTER_ACTIONS.
    return (action >> _POINTER_INDEX_SHIFT) & _ACTION_MASK


def is_pointer_action(action_masked: int) -> bool:
    return action_masked in POINTER_ACTIONS


def is_single_pointer_action(action: int) -> bool:
    """True for POINTER_DOWN / POINTER_UP.

    For these kinds only the pointer the action applies to carries reliable
    coordinate data.
    """
    return get_action_masked(action) in SINGLE_POINTER_ACTIONS


def get_action_name(action_masked: int, action: int) -> str:
    if action_masked < len(ACTION_NAMES):
        return f"{ACTION_NAMES[action_masked]}({action})"
    return f"ACTION_{action_masked}"


@dataclass(frozen=True)
class ActionCode:
    action: int
    masked: int
    pointer_idx: int | None
    name: str


def decode_action(action: int) -> ActionCode:
    masked = get_action_masked(action)
    return ActionCode(
        action=action,
        masked=masked,
        pointer_idx=get_pointer_idx(action) if is_pointer_action(masked) else None,
        name=get_action_name(masked, action),
    )
