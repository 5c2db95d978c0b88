"""Schema conformance: translate jsonschema errors into the normalized taxonomy."""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Iterable

from jsonschema import exceptions as jsonschema_exceptions

from actval.validator.models import (
    DocumentKind,
    ErrorKind,
    ValidationError,
    ValidationState,
    json_pointer,
)
from actval.validator.schemas import compile_validator, load_schema

# jsonschema keyword -> (kind, title)
KEYWORD_DISPATCH: dict[str, tuple[ErrorKind, str]] = {
    "type": (ErrorKind.wrong_type, "Type of the value is wrong"),
    "multipleOf": (ErrorKind.multiple_of, "Value is not a multiple of the given number"),
    "maximum": (ErrorKind.maximum, "Maximum condition is not met"),
    "exclusiveMaximum": (ErrorKind.maximum, "Maximum condition is not met"),
    "minimum": (ErrorKind.minimum, "Minimum condition is not met"),
    "exclusiveMinimum": (ErrorKind.minimum, "Minimum condition is not met"),
    "maxLength": (ErrorKind.max_length, "MaxLength condition is not met"),
    "minLength": (ErrorKind.min_length, "MinLength condition is not met"),
    "pattern": (ErrorKind.pattern, "Pattern condition is not met"),
    "maxItems": (ErrorKind.max_items, "MaxItems condition is not met"),
    "minItems": (ErrorKind.min_items, "MinItems condition is not met"),
    "uniqueItems": (ErrorKind.unique_items, "UniqueItems condition is not met"),
    "items": (ErrorKind.items, "Items condition is not met"),
    "additionalItems": (ErrorKind.items, "Items condition is not met"),
    "maxProperties": (ErrorKind.max_properties, "MaxProperties condition is not met"),
    "minProperties": (ErrorKind.min_properties, "MinProperties condition is not met"),
    "required": (ErrorKind.required, "This property is required"),
    "dependencies": (ErrorKind.required, "This property is required"),
    "dependentRequired": (ErrorKind.required, "This property is required"),
    "additionalProperties": (ErrorKind.properties, "Property conditions are not met"),
    "propertyNames": (ErrorKind.properties, "Property conditions are not met"),
    "enum": (ErrorKind.enum, "Enum conditions are not met"),
    "const": (ErrorKind.const, "Const condition is not met"),
    "not": (ErrorKind.not_, "Not condition is not met"),
    "contains": (ErrorKind.contains, "Contains condition is not met"),
    "minContains": (ErrorKind.contains_min_max, "Contains min/max condition is not met"),
    "maxContains": (ErrorKind.contains_min_max, "Contains min/max condition is not met"),
    "format": (ErrorKind.format, "Format is wrong"),
    "unevaluatedProperties": (ErrorKind.unevaluated, "Unevaluated conditions are not met"),
    "unevaluatedItems": (ErrorKind.unevaluated, "Unevaluated conditions are not met"),
    "anyOf": (ErrorKind.any_of, "AnyOf conditions are not met"),
    "oneOf": (ErrorKind.one_of, "OneOf conditions are not met"),
}

CONTAINS_MIN_MAX = (ErrorKind.contains_min_max, "Contains min/max condition is not met")
UNKNOWN_TITLE = "Unknown schema error"


def check_schema_conformance(document: Any, kind: DocumentKind) -> ValidationState:
    """Validate ``document`` against the schema bound to ``kind``."""
    return check_against_schema(document, load_schema(kind))


def check_against_schema(document: Any, schema: dict[str, Any]) -> ValidationState:
    """Validate ``document`` against an arbitrary JSON Schema document.

    Errors keep the engine's reporting order. Deterministic and free of I/O.
    """
    validator = compile_validator(schema)
    return _state_from(validator.iter_errors(document))


def _state_from(
    errors: Iterable[jsonschema_exceptions.ValidationError],
) -> ValidationState:
    return ValidationState(errors=tuple(translate_error(e) for e in errors))


def _classify(error: jsonschema_exceptions.ValidationError) -> tuple[ErrorKind, str]:
    keyword = error.validator
    if keyword == "contains" and isinstance(error.schema, dict) and (
        "minContains" in error.schema or "maxContains" in error.schema
    ):
        return CONTAINS_MIN_MAX
    if isinstance(keyword, str) and keyword in KEYWORD_DISPATCH:
        return KEYWORD_DISPATCH[keyword]
    return ErrorKind.unknown, UNKNOWN_TITLE


def translate_error(error: jsonschema_exceptions.ValidationError) -> ValidationError:
    """Map one engine error onto the taxonomy, recursing into combinator branches."""
    kind, title = _classify(error)
    path = json_pointer(error.absolute_path)

    if kind in (ErrorKind.any_of, ErrorKind.one_of):
        return ValidationError.combinator_error(
            kind,
            path=path,
            title=title,
            states=_branch_states(error),
            detail=error.message,
        )

    detail = error.message
    if kind is ErrorKind.unknown and error.validator is not None:
        detail = f"{error.validator}: {error.message}"
    return ValidationError.schema_error(kind, path=path, title=title, detail=detail)


def _branch_states(
    error: jsonschema_exceptions.ValidationError,
) -> list[ValidationState]:
    """One state per schema branch, holding only that branch's own errors."""
    by_branch: dict[int, list[jsonschema_exceptions.ValidationError]] = defaultdict(list)
    for sub in error.context or ():
        by_branch[sub.relative_schema_path[0]].append(sub)

    branches = error.validator_value
    branch_count = len(branches) if isinstance(branches, list) else 0
    branch_count = max([branch_count, *(i + 1 for i in by_branch)])
    return [_state_from(by_branch.get(i, ())) for i in range(branch_count)]
