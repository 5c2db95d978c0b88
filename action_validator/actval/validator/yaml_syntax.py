"""YAML syntax validation using ruamel.yaml."""

from __future__ import annotations

import datetime
from io import StringIO
from typing import Any

from ruamel.yaml import YAML, YAMLError

from actval.validator.models import ParseErrorLocation, ValidationError


def check_yaml_syntax(yaml_str: str) -> tuple[Any, ValidationError | None]:
    """Parse YAML and check for syntax errors.

    Returns ``(document, None)`` on success, with the document normalized to
    JSON-compatible values, or ``(None, error)`` with a parse error on failure.
    Empty input parses to ``None``; judging it is left to the schema.
    """
    yaml = YAML(typ="safe", pure=True)

    try:
        parsed = yaml.load(StringIO(yaml_str))
    except YAMLError as e:
        return None, ValidationError.parse_error(str(e), _error_location(e))
    except RecursionError:
        return None, ValidationError.parse_error("document is nested too deeply")

    try:
        return to_json_compatible(parsed), None
    except RecursiveAliasError as e:
        return None, ValidationError.parse_error(str(e))
    except RecursionError:
        return None, ValidationError.parse_error("document is nested too deeply")


def _error_location(e: YAMLError) -> ParseErrorLocation | None:
    mark = getattr(e, "problem_mark", None) or getattr(e, "context_mark", None)
    if mark is None:
        return None
    # Marks are 0-indexed; report human line/column numbers.
    return ParseErrorLocation(
        index=getattr(mark, "index", 0),
        line=mark.line + 1,
        column=mark.column + 1,
    )


def _key_to_str(key: Any) -> str:
    if key is None:
        return "null"
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, (datetime.date, datetime.datetime)):
        return key.isoformat()
    return str(key)


class RecursiveAliasError(ValueError):
    """The document refers to one of its own enclosing nodes through an alias."""


def to_json_compatible(value: Any, _open: frozenset[int] = frozenset()) -> Any:
    """Convert a loaded YAML value into plain JSON-like Python values.

    Raises ``RecursiveAliasError`` when a container holds itself. Aliases that
    are merely shared between siblings are copied.
    """
    if isinstance(value, (dict, list, tuple)):
        if id(value) in _open:
            raise RecursiveAliasError("recursive alias cannot be represented as JSON")
        _open = _open | {id(value)}
    if isinstance(value, dict):
        return {_key_to_str(k): to_json_compatible(v, _open) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_compatible(v, _open) for v in value]
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return {k: None for k in sorted(_key_to_str(v) for v in value)}
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value
