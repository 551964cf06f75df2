# File: user_api/services/validation.py

"""
Field validation for User payloads.

``validate_user`` is a pure function: it runs the payload through
``UserCreate`` / ``UserUpdate`` once, so type errors and rule violations on
every field come back together, and either returns the normalized values
(keyed by model attribute) or raises ``ValidationFailed`` with one message per
violation. Email uniqueness needs the store and is checked by
``user_service`` instead.
"""

import enum
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from user_api.core.errors import ValidationFailed
from user_api.schemas.user import UserCreate, UserUpdate


class ViolationKind(str, enum.Enum):
    missing_field = "MissingField"
    length_exceeded = "LengthExceeded"
    format_invalid = "FormatInvalid"
    range_invalid = "RangeInvalid"
    enum_invalid = "EnumInvalid"
    type_invalid = "TypeInvalid"


@dataclass(frozen=True)
class FieldViolation:
    field: Optional[str]
    kind: ViolationKind
    message: str


_PUBLIC_NAMES = {
    "first_name": "firstName",
    "last_name": "lastName",
    "is_active": "isActive",
}

_LABELS = {
    "firstName": "First name",
    "lastName": "Last name",
    "email": "Email",
    "age": "Age",
}

_LOCATION_PREFIXES = ("body", "query", "path")

# null on these means "keep the default / stored value"
_NULL_MEANS_UNSET = ("role", "is_active")


def _field_of(error: Mapping[str, Any]) -> Optional[str]:
    parts = [str(part) for part in error.get("loc", ()) if part not in _LOCATION_PREFIXES]
    parts = [_PUBLIC_NAMES.get(part, part) for part in parts]
    return ".".join(parts) or None


def describe_error(error: Mapping[str, Any]) -> FieldViolation:
    """Turn one pydantic error dict into a violation with a client message."""
    field = _field_of(error)
    label = _LABELS.get(field, field)
    ctx = error.get("ctx") or {}
    kind = error.get("type")

    if kind in ("missing", "string_too_short"):
        if field is None:
            return FieldViolation(None, ViolationKind.missing_field, "Request body is required")
        return FieldViolation(field, ViolationKind.missing_field, f"{label} is required")
    if kind == "string_too_long":
        return FieldViolation(
            field,
            ViolationKind.length_exceeded,
            f"{label} cannot be more than {ctx.get('max_length')} characters",
        )
    if kind == "greater_than_equal":
        bound = ctx.get("ge")
        message = f"{label} cannot be negative" if bound == 0 else f"{label} cannot be less than {bound}"
        return FieldViolation(field, ViolationKind.range_invalid, message)
    if kind == "less_than_equal":
        return FieldViolation(
            field, ViolationKind.range_invalid, f"{label} cannot be more than {ctx.get('le')}"
        )
    if kind == "enum":
        return FieldViolation(
            field, ViolationKind.enum_invalid, f"`{error.get('input')}` is not a valid {field}"
        )
    if kind == "email_format":
        return FieldViolation(field, ViolationKind.format_invalid, error.get("msg"))

    message = f"{field}: {error.get('msg')}" if field else str(error.get("msg"))
    return FieldViolation(field, ViolationKind.type_invalid, message)


def describe_errors(errors: Iterable[Mapping[str, Any]]) -> List[FieldViolation]:
    return [describe_error(error) for error in errors]


def collect_violations(
    payload: Optional[Mapping[str, Any]], *, partial: bool = False
) -> Tuple[dict, List[FieldViolation]]:
    """
    Validate ``payload`` and return ``(cleaned, violations)``.

    ``payload`` may use the public camelCase keys or model attribute names.
    With ``partial=True`` only the keys present in ``payload`` are checked.
    """
    model = UserUpdate if partial else UserCreate
    try:
        parsed = model.model_validate(payload if payload is not None else {})
    except ValidationError as exc:
        return {}, describe_errors(exc.errors())

    cleaned = parsed.model_dump(exclude_unset=True)
    for field in _NULL_MEANS_UNSET:
        if field in cleaned and cleaned[field] is None:
            del cleaned[field]
    return cleaned, []


def validate_user(payload: Optional[Mapping[str, Any]], *, partial: bool = False) -> dict:
    """Return the normalized payload or raise ``ValidationFailed``."""
    cleaned, violations = collect_violations(payload, partial=partial)
    if violations:
        raise ValidationFailed([v.message for v in violations])
    return cleaned
