"""Field paths and field-level validation errors.

Validators never raise for bad input. Each problem becomes a :class:`FieldError`
tied to the :class:`FieldPath` of the offending value, and validators return
those errors as an ordered list so a caller sees every problem in one pass.

Example:
    from fedconf.validation.field import FieldPath, invalid, required

    spec = FieldPath.root("spec")
    errs = [
        required(spec.child("targetType", "version")),
        invalid(spec.child("federatedType", "group"), "example", "should be a domain with at least one dot"),
    ]
    for err in errs:
        print(err)
    # spec.targetType.version: Required value
    # spec.federatedType.group: Invalid value: "example": should be a domain with at least one dot
"""

import json
from collections import defaultdict
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Any

from fedconf.utils.duration import format_duration


class ErrorType(str, Enum):
    """Kinds of field validation errors."""

    REQUIRED = "Required"
    INVALID = "Invalid"
    NOT_SUPPORTED = "NotSupported"
    DUPLICATE = "Duplicate"

    @property
    def description(self) -> str:
        return _ERROR_TYPE_DESCRIPTIONS[self]


_ERROR_TYPE_DESCRIPTIONS = {
    ErrorType.REQUIRED: "Required value",
    ErrorType.INVALID: "Invalid value",
    ErrorType.NOT_SUPPORTED: "Unsupported value",
    ErrorType.DUPLICATE: "Duplicate value",
}


@dataclass(frozen=True)
class FieldPath:
    """Ordered path to a field: names are ``str`` segments, list positions are ``int``.

    Rendered as ``spec.featureGates[1].name``.
    """

    segments: tuple[str | int, ...] = ()

    @classmethod
    def root(cls, name: str, *more: str) -> "FieldPath":
        return cls((name, *more))

    def child(self, name: str, *more: str) -> "FieldPath":
        """Return a path extended by one or more field names."""
        return FieldPath((*self.segments, name, *more))

    def index(self, position: int) -> "FieldPath":
        """Return a path pointing at a list element."""
        return FieldPath((*self.segments, position))

    def __str__(self) -> str:
        parts: list[str] = []
        for segment in self.segments:
            if isinstance(segment, int):
                parts.append(f"[{segment}]")
            elif parts:
                parts.append(f".{segment}")
            else:
                parts.append(segment)
        return "".join(parts) or "<root>"


@dataclass(frozen=True)
class FieldError:
    """A single violation found while validating an object.

    Attributes:
        type: What kind of problem was found
        path: Path to the offending field
        bad_value: The value that was rejected (None for missing values)
        detail: Explanation for the author of the object
        supported: Accepted values, populated for NotSupported errors
    """

    type: ErrorType
    path: FieldPath
    bad_value: Any = None
    detail: str = ""
    supported: tuple[str, ...] = ()

    @property
    def field(self) -> str:
        return str(self.path)

    def error_body(self) -> str:
        """Render the message without the field path."""
        body = self.type.description
        if self.type in (ErrorType.INVALID, ErrorType.NOT_SUPPORTED, ErrorType.DUPLICATE):
            body = f"{body}: {_render_value(self.bad_value)}"
        if self.detail:
            body = f"{body}: {self.detail}"
        return body

    def __str__(self) -> str:
        return f"{self.field}: {self.error_body()}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        data: dict[str, Any] = {
            "type": self.type.value,
            "field": self.field,
            "bad_value": _plain_value(self.bad_value),
            "detail": self.detail,
            "message": str(self),
        }
        if self.supported:
            data["supported"] = list(self.supported)
        return data


ErrorList = list[FieldError]


def required(path: FieldPath, detail: str = "") -> FieldError:
    return FieldError(ErrorType.REQUIRED, path, None, detail)


def invalid(path: FieldPath, value: Any, detail: str) -> FieldError:
    return FieldError(ErrorType.INVALID, path, value, detail)


def not_supported(path: FieldPath, value: Any, valid_values: list[str] | tuple[str, ...]) -> FieldError:
    """Build a NotSupported error listing every accepted value."""
    supported = tuple(valid_values)
    detail = ""
    if supported:
        detail = "supported values: " + ", ".join(_quote(v) for v in supported)
    return FieldError(ErrorType.NOT_SUPPORTED, path, value, detail, supported)


def duplicate(path: FieldPath, value: Any) -> FieldError:
    return FieldError(ErrorType.DUPLICATE, path, value)


def group_by_field(errors: ErrorList) -> dict[str, ErrorList]:
    """Group errors by rendered field path, keeping first-seen order."""
    grouped: dict[str, ErrorList] = defaultdict(list)
    for error in errors:
        grouped[error.field].append(error)
    return dict(grouped)


def format_errors(errors: ErrorList, max_errors: int | None = None) -> str:
    """Format errors as a human-readable block grouped by field path.

    Args:
        errors: Errors returned by a validator
        max_errors: Maximum number of errors to show (None for all)

    Returns:
        Formatted message

    Example:
        >>> print(format_errors(validate_kubefed_config(config)))
        Configuration validation errors:
          spec.leaderElect.leaseDuration:
            - Invalid value: "10s": leaseDuration must be greater than renewDeadline
    """
    if not errors:
        return "No validation errors found."

    lines = ["Configuration validation errors:"]
    shown = 0
    for field_name, field_errors in group_by_field(errors).items():
        if max_errors is not None and shown >= max_errors:
            break
        lines.append(f"  {field_name}:")
        for error in field_errors:
            if max_errors is not None and shown >= max_errors:
                break
            lines.append(f"    - {error.error_body()}")
            shown += 1

    remaining = len(errors) - shown
    if remaining > 0:
        lines.append(f"  ... and {remaining} more")
    return "\n".join(lines)


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _plain_value(value: Any) -> Any:
    if isinstance(value, timedelta):
        return format_duration(value)
    if isinstance(value, Enum):
        return value.value
    return value


def _render_value(value: Any) -> str:
    value = _plain_value(value)
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return str(value)
    return _quote(str(value))
