"""motion_event_diff.errors

PROV: MOTIONDIFF.ERRORS.01
WHY: Provide stable, machine-readable error codes and a small JSON-safe error shape
for inputs that are not comparable motion events.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypedDict


class ValidationError(TypedDict, total=False):
    code: str
    message: str
    path: str
    index: int
    field: str
    value: Any


@dataclass(frozen=True)
class ErrorCodes:
    # Event shape
    EVENT_NOT_OBJECT: str = "E_EVENT_NOT_OBJECT"
    EVENT_FIELD_MISSING: str = "E_EVENT_FIELD_MISSING"
    EVENT_FIELD_INVALID: str = "E_EVENT_FIELD_INVALID"
    POINTER_INDEX_OUT_OF_RANGE: str = "E_POINTER_INDEX_OUT_OF_RANGE"

    # Input files (CLI)
    INPUT_INVALID: str = "E_INPUT_INVALID"

    # Configuration
    CONFIG_INVALID: str = "E_CONFIG_INVALID"


ERROR = ErrorCodes()


def make_error(code: str, message: str, **context: Any) -> ValidationError:
    err: ValidationError = {"code": code, "message": message}
    for k, v in context.items():
        if v is None:
            continue
        err[k] = v
    return err


class MalformedEventError(ValueError):
    """Raised when an event is not in the shape the comparator requires.

    This is a contract violation by the caller, never a diff outcome: the
    comparison is aborted and no partial report is returned.
    """

    def __init__(self, error: ValidationError) -> None:
        super().__init__(error["message"])
        self.error = error

    @property
    def code(self) -> str:
        return self.error["code"]


class ConfigError(ValueError):
    def __init__(self, error: ValidationError) -> None:
        super().__init__(error["message"])
        self.error = error
