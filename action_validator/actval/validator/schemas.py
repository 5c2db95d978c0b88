"""Bundled JSON Schema documents for Actions and Workflows."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from jsonschema import FormatChecker
from jsonschema.protocols import Validator
from jsonschema.validators import validator_for

from actval.validator.models import DocumentKind

SCHEMA_DIR = Path(__file__).resolve().parent.parent / "schemas"

SCHEMA_FILES: dict[DocumentKind, str] = {
    DocumentKind.action: "github-action.json",
    DocumentKind.workflow: "github-workflow.json",
}

# Parsed schema documents are read-only; cache them per process.
_SCHEMA_CACHE: dict[DocumentKind, dict[str, Any]] = {}


class SchemaNotFound(FileNotFoundError):
    """A bundled schema document is missing from the installation."""


def get_schema_path(kind: DocumentKind) -> Path:
    return SCHEMA_DIR / SCHEMA_FILES[kind]


def load_schema(kind: DocumentKind) -> dict[str, Any]:
    """Load the schema document bound to ``kind``."""
    if kind in _SCHEMA_CACHE:
        return _SCHEMA_CACHE[kind]

    schema_path = get_schema_path(kind)
    if not schema_path.exists():
        raise SchemaNotFound(f"Schema file not found for {kind.value}: {schema_path}")

    schema = json.loads(schema_path.read_text(encoding="utf-8"))
    _SCHEMA_CACHE[kind] = schema
    return schema


def compile_validator(schema: dict[str, Any]) -> Validator:
    """Build a validator for the schema's declared draft, with format checks."""
    cls = validator_for(schema)
    cls.check_schema(schema)
    return cls(schema, format_checker=FormatChecker())


def clear_cache() -> None:
    """Clear the schema cache. Useful for testing."""
    _SCHEMA_CACHE.clear()
