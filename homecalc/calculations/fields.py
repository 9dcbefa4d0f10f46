"""
Calculator Input Fields

Declarative field schema plus the sanitize and validate passes every
calculator runs before ``calculate``.

Sanitization is lenient: malformed numbers become zero and unknown select
values are dropped, so problems surface as validation errors instead.
"""

import enum
import math
import re
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from pydantic import BaseModel, ConfigDict, model_validator


class FieldType(str, enum.Enum):
    """Supported input field types."""

    number = "number"
    integer = "integer"
    currency = "currency"
    range = "range"
    select = "select"
    radio = "radio"
    checkbox = "checkbox"
    checkboxes = "checkboxes"


NUMERIC_TYPES = {FieldType.number, FieldType.integer, FieldType.currency, FieldType.range}
FLOAT_TYPES = {FieldType.number, FieldType.currency, FieldType.range}
OPTION_TYPES = {FieldType.select, FieldType.radio, FieldType.checkboxes}

FALSE_STRINGS = {"", "0", "false", "off", "no"}

_LEADING_NUMBER = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")
_TAGS = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"\s+")


class FieldSpec(BaseModel):
    """Schema for one calculator input field."""

    name: str
    label: str
    type: FieldType
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None
    default: Any = None
    required: bool = False
    options: Optional[Dict[str, str]] = None
    help: Optional[str] = None
    placeholder: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_shape(self):
        if (self.options is not None) != (self.type in OPTION_TYPES):
            raise ValueError(
                f"Field '{self.name}': options are required for select, radio "
                f"and checkboxes fields and not allowed otherwise"
            )
        if self.type not in NUMERIC_TYPES and (self.min is not None or self.max is not None):
            raise ValueError(f"Field '{self.name}': min/max only apply to numeric fields")
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"Field '{self.name}': min is greater than max")
        return self

    @property
    def option_keys(self) -> List[str]:
        return list(self.options or {})

    def to_definition(self) -> dict:
        """Describe the field for form builders."""
        return self.model_dump(mode="json", exclude_none=True)


# A cross-field rule returns an error message, or None when the input passes.
ValidationRule = Callable[[Mapping[str, Any]], Optional[str]]


class ValidationResult(BaseModel):
    """Outcome of validating a clean input."""

    valid: bool
    errors: List[str]

    @property
    def message(self) -> str:
        return ", ".join(self.errors)


def to_float(value: Any) -> float:
    """Coerce a raw value to float; anything non-numeric becomes 0.0."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        result = float(value)
    elif isinstance(value, str):
        match = _LEADING_NUMBER.match(value.strip())
        if not match:
            return 0.0
        try:
            result = float(match.group(0))
        except ValueError:
            return 0.0
    else:
        return 0.0

    if math.isnan(result) or math.isinf(result):
        return 0.0
    return result


def to_int(value: Any) -> int:
    """Coerce a raw value to int by truncation."""
    return int(to_float(value))


def to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in FALSE_STRINGS
    return bool(value)


def sanitize_text(value: Any) -> str:
    """Strip tags and control characters, collapse whitespace."""
    text = _TAGS.sub("", str(value))
    return _WHITESPACE.sub(" ", text).strip()


def _is_absent(value: Any) -> bool:
    return value is None


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


def _format_bound(bound: float) -> str:
    return str(int(bound)) if float(bound).is_integer() else str(bound)


def sanitize_value(field: FieldSpec, value: Any) -> Any:
    """
    Coerce one raw value to the field's declared type.

    Returns ``None`` when the value has to be dropped (select/radio value
    outside the options, or a non-list for checkboxes).
    """
    if field.type in FLOAT_TYPES:
        return to_float(value)

    if field.type == FieldType.integer:
        return to_int(value)

    if field.type == FieldType.checkbox:
        return to_bool(value)

    if field.type in (FieldType.select, FieldType.radio):
        key = value if isinstance(value, str) else str(value)
        if key in field.option_keys:
            return key
        return None

    if field.type == FieldType.checkboxes:
        if not isinstance(value, (list, tuple, set)):
            return None
        selected = []
        for item in value:
            text = sanitize_text(item)
            if text not in selected:
                selected.append(text)
        return selected

    return sanitize_text(value)


def sanitize_input(fields: Sequence[FieldSpec], raw_input: Mapping[str, Any]) -> Dict[str, Any]:
    """Build a clean input from a raw form submission. Never raises."""
    clean: Dict[str, Any] = {}

    for field in fields:
        value = raw_input.get(field.name) if raw_input else None

        if _is_absent(value):
            if field.default is not None:
                clean[field.name] = field.default
            continue

        sanitized = sanitize_value(field, value)
        if sanitized is not None:
            clean[field.name] = sanitized

    return clean


def _is_whole_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def validate_input(
    fields: Sequence[FieldSpec],
    clean_input: Mapping[str, Any],
    rules: Sequence[ValidationRule] = (),
) -> ValidationResult:
    """
    Check a clean input against field constraints, then cross-field rules.

    All field errors are collected before the rules run. The input is not
    modified.
    """
    errors: List[str] = []

    for field in fields:
        value = clean_input.get(field.name)

        if field.required and _is_empty(value):
            errors.append(f"{field.label} is required")
            continue

        if field.name not in clean_input:
            continue

        if field.type in NUMERIC_TYPES and isinstance(value, (int, float)):
            if field.min is not None and value < field.min:
                errors.append(f"{field.label} must be at least {_format_bound(field.min)}")
            if field.max is not None and value > field.max:
                errors.append(f"{field.label} must be no more than {_format_bound(field.max)}")

        if field.type == FieldType.integer and not _is_whole_number(value):
            errors.append(f"{field.label} must be a whole number")

        if field.type in (FieldType.select, FieldType.radio) and value not in field.option_keys:
            errors.append(f"Invalid value for {field.label}")

    for rule in rules:
        error = rule(clean_input)
        if error:
            errors.append(error)

    return ValidationResult(valid=not errors, errors=errors)
