"""
Field validation rules and the engine that evaluates them.

Each rule is an Annotated type: Pydantic runs it, a violation raises a
PydanticCustomError whose type is the rule name. A contract schema (a
Contract subclass) is the rule table for one entity. validate_payload runs
a schema over a raw payload and reports every failed field in one pass.
"""

import json
import math
import re
from typing import Annotated, Any, TypeVar
from uuid import UUID

from pydantic import AfterValidator, BaseModel, BeforeValidator, StrictBool
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from inspection_core.config import EMAIL_PATTERN
from inspection_core.models import FieldError, FieldValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


# --- Rule names for Pydantic's built-in error types ---

_RULE_NAMES: dict[str, str] = {
    "missing": "required",
    "string_type": "string",
    "bool_type": "boolean",
    "bool_parsing": "boolean",
    "enum": "enum",
    "list_type": "array",
    "too_short": "min_items",
    "too_long": "max_items",
    "model_type": "object",
    "model_attributes_type": "object",
    "dict_type": "object",
    "date_type": "date",
    "date_parsing": "date",
    "date_from_datetime_parsing": "date",
    "datetime_type": "date",
    "datetime_parsing": "date",
    "datetime_from_date_parsing": "date",
    "datetime_object_invalid": "date",
    "url_type": "url",
    "url_parsing": "url",
    "url_scheme": "url",
    "url_too_long": "url",
    "int_type": "numeric",
    "int_parsing": "numeric",
    "float_type": "numeric",
    "float_parsing": "numeric",
    "uuid_type": "uuid",
    "uuid_parsing": "uuid",
    "uuid_version": "uuid",
    "value_error": "invalid",
}

# ASCII decimal text only: no digit separators, no non-ASCII digits, no nan/inf
_DECIMAL_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$", re.ASCII)


# --- Scalar rules ---

def _not_empty(value: str) -> str:
    if value == "":
        raise PydanticCustomError("not_empty", "must not be empty")
    return value


def _not_blank(value: str) -> str:
    if value.strip() == "":
        raise PydanticCustomError("not_empty", "must not be empty or blank")
    return value


def _to_number(value: Any) -> int | float:
    """
    Coerces numeric strings (multipart form fields) before the numeric check.

    Integers stay int, decimals become float. A non-numeric string is a
    numeric violation, not a separate error kind.
    """
    if isinstance(value, bool):
        raise PydanticCustomError("numeric", "must be a number")
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            raise PydanticCustomError("numeric", "must be a finite number")
        return value
    if isinstance(value, str):
        text = value.strip()
        if not _DECIMAL_RE.match(text):
            raise PydanticCustomError("numeric", "must be a number")
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            raise PydanticCustomError("numeric", "must be a number")
        if not math.isfinite(number):
            raise PydanticCustomError("numeric", "must be a finite number")
        return number
    raise PydanticCustomError("numeric", "must be a number")


def _to_integer(value: Any) -> int:
    number = _to_number(value)
    if isinstance(number, float):
        if not number.is_integer():
            raise PydanticCustomError("integer", "must be an integer")
        return int(number)
    return number


def _hyphenated_uuid(value: Any) -> Any:
    # Pydantic parses the hex digits; only the canonical 8-4-4-4-12 text form is accepted
    if isinstance(value, str) and (len(value) != 36 or any(value[i] != "-" for i in (8, 13, 18, 23))):
        raise PydanticCustomError("uuid", "must be a UUID")
    return value


def _boolean_string(value: Any) -> Any:
    # Form fields carry flags as "true"/"false" text
    if isinstance(value, bool):
        return value
    if value == "true":
        return True
    if value == "false":
        return False
    raise PydanticCustomError("boolean", "must be a boolean string ('true' or 'false')")


def _decode_json(value: Any) -> Any:
    # Nested sections may arrive as JSON text inside a multipart form
    if isinstance(value, str):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            raise PydanticCustomError("json", "must be a valid JSON object")
    return value


def _none_to_empty(value: list | None) -> list:
    return value if value is not None else []


# --- Rule factories ---

def length(min_length: int, max_length: int | None = None) -> AfterValidator:
    """String length rule. max_length=None means lower bound only."""

    def check(value: str) -> str:
        size = len(value)
        if max_length is None:
            if size < min_length:
                raise PydanticCustomError(
                    "min_length",
                    "must be at least {min_length} characters long",
                    {"min_length": min_length},
                )
        elif min_length == max_length:
            if size != min_length:
                raise PydanticCustomError(
                    "length",
                    "must be exactly {length} characters long",
                    {"length": min_length},
                )
        elif not min_length <= size <= max_length:
            raise PydanticCustomError(
                "length",
                "must be between {min_length} and {max_length} characters long",
                {"min_length": min_length, "max_length": max_length},
            )
        return value

    return AfterValidator(check)


def max_length(limit: int) -> AfterValidator:
    def check(value: str) -> str:
        if len(value) > limit:
            raise PydanticCustomError(
                "max_length",
                "must be at most {max_length} characters long",
                {"max_length": limit},
            )
        return value

    return AfterValidator(check)


def matches(pattern: str, message: str, rule: str = "pattern") -> AfterValidator:
    compiled = re.compile(pattern)

    def check(value: str) -> str:
        if not compiled.match(value):
            raise PydanticCustomError(rule, message)
        return value

    return AfterValidator(check)


def one_of(*allowed: Any) -> AfterValidator:
    """Membership in a fixed subset, e.g. of an enum."""
    names = ", ".join(str(getattr(a, "value", a)) for a in allowed)

    def check(value: Any) -> Any:
        if value not in allowed:
            raise PydanticCustomError("enum", "must be one of: {allowed}", {"allowed": names})
        return value

    return AfterValidator(check)


def number_range(minimum: float | None = None, maximum: float | None = None) -> AfterValidator:
    def check(value: int | float) -> int | float:
        if minimum is not None and value < minimum:
            raise PydanticCustomError("min", "must not be less than {minimum}", {"minimum": minimum})
        if maximum is not None and value > maximum:
            raise PydanticCustomError("max", "must not be greater than {maximum}", {"maximum": maximum})
        return value

    return AfterValidator(check)


# --- Rule types ---

NonEmptyStr = Annotated[str, AfterValidator(_not_empty)]
Label = Annotated[str, AfterValidator(_not_blank)]
Numeric = Annotated[int | float, BeforeValidator(_to_number)]
Integer = Annotated[int, BeforeValidator(_to_integer)]
Uuid = Annotated[UUID, BeforeValidator(_hyphenated_uuid)]
Email = Annotated[str, matches(EMAIL_PATTERN, "must be an email", rule="email")]
BooleanString = Annotated[bool, BeforeValidator(_boolean_string)]
Boolean = StrictBool
NoteList = Annotated[list[str] | None, AfterValidator(_none_to_empty)]
JsonObject = BeforeValidator(_decode_json)
EmptyListIfNone = AfterValidator(_none_to_empty)


# --- Engine ---

def _field_path(loc: tuple, prefix: str = "") -> str:
    path = prefix
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path or "body"


def collect_errors(exc: PydanticValidationError, prefix: str = "") -> list[FieldError]:
    """Flattens a Pydantic error into FieldErrors keyed by wire-name path."""
    return [
        FieldError(
            field=_field_path(err["loc"], prefix),
            rule=_RULE_NAMES.get(err["type"], err["type"]),
            message=err["msg"],
        )
        for err in exc.errors()
    ]


def check_payload(schema: type[BaseModel], payload: Any) -> list[FieldError]:
    """Every rule violation in payload. Empty list means valid."""
    try:
        schema.model_validate(payload)
    except PydanticValidationError as e:
        return collect_errors(e)
    return []


def validate_payload(schema: type[ModelT], payload: Any) -> ModelT:
    """
    Validates and normalizes payload against schema.

    Raises:
        FieldValidationError: With every violated rule, not just the first.
    """
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as e:
        raise FieldValidationError(collect_errors(e)) from e
