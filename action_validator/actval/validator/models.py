"""Validation data models."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Bump when a code is added to or removed from ErrorKind.
ERROR_VOCABULARY_VERSION = "1"


class DocumentKind(str, Enum):
    """Which schema governs a document."""

    action = "action"
    workflow = "workflow"


class ErrorKind(str, Enum):
    """Stable, machine-readable error codes."""

    # Schema conformance
    wrong_type = "wrong_type"
    multiple_of = "multiple_of"
    maximum = "maximum"
    minimum = "minimum"
    max_length = "max_length"
    min_length = "min_length"
    pattern = "pattern"
    max_items = "max_items"
    min_items = "min_items"
    unique_items = "unique_items"
    items = "items"
    max_properties = "max_properties"
    min_properties = "min_properties"
    required = "required"
    properties = "properties"
    enum = "enum"
    const = "const"
    not_ = "not"
    contains = "contains"
    contains_min_max = "contains_min_max"
    format = "format"
    unevaluated = "unevaluated"
    unknown = "unknown"
    # Combinators
    any_of = "any_of"
    one_of = "one_of"
    # Semantic checks
    unresolved_job = "unresolved_job"
    invalid_glob = "invalid_glob"
    no_files_matching_glob = "no_files_matching_glob"
    # Loader
    parse_error = "parse_error"


COMBINATOR_KINDS = frozenset({ErrorKind.any_of, ErrorKind.one_of})


class ValidationRequest(BaseModel):
    """One validation run's input."""

    model_config = ConfigDict(frozen=True)

    source: str
    kind: DocumentKind = DocumentKind.workflow
    display_name: str | None = None
    verbose: bool = False


class ErrorMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    path: str
    title: str
    detail: str | None = None


class ParseErrorLocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int
    line: int
    column: int


class ParseErrorMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str = ErrorKind.parse_error.value
    title: str = "Parse Error"
    detail: str
    location: ParseErrorLocation | None = None


class ValidationError(BaseModel):
    """A single validation finding.

    ``kind`` is the in-process discriminant; consumers of the serialized form
    match on ``meta.code`` instead. ``states`` is only set for ``any_of`` and
    ``one_of`` errors and holds one state per schema branch, in branch order.
    """

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind = Field(exclude=True)
    meta: ErrorMetadata | ParseErrorMetadata
    states: tuple[ValidationState, ...] | None = None

    @property
    def code(self) -> str:
        return self.meta.code

    @property
    def path(self) -> str | None:
        return getattr(self.meta, "path", None)

    @classmethod
    def schema_error(
        cls, kind: ErrorKind, path: str, title: str, detail: str | None = None,
    ) -> ValidationError:
        return cls(
            kind=kind,
            meta=ErrorMetadata(code=kind.value, path=path, title=title, detail=detail),
        )

    @classmethod
    def combinator_error(
        cls,
        kind: ErrorKind,
        path: str,
        title: str,
        states: list[ValidationState],
        detail: str | None = None,
    ) -> ValidationError:
        if kind not in COMBINATOR_KINDS:
            raise ValueError(f"{kind.value} is not a combinator error kind")
        return cls(
            kind=kind,
            meta=ErrorMetadata(code=kind.value, path=path, title=title, detail=detail),
            states=tuple(states),
        )

    @classmethod
    def unresolved_job(cls, job_name: str, missing: str) -> ValidationError:
        return cls.schema_error(
            ErrorKind.unresolved_job,
            path=f"/jobs/{escape_pointer_token(job_name)}/needs",
            title="Unresolved Job",
            detail=f"unresolved job {missing}",
        )

    @classmethod
    def invalid_glob(cls, path: str, detail: str) -> ValidationError:
        return cls.schema_error(
            ErrorKind.invalid_glob, path=path, title="Invalid Glob", detail=detail,
        )

    @classmethod
    def no_files_matching_glob(cls, path: str, pattern: str) -> ValidationError:
        return cls.schema_error(
            ErrorKind.no_files_matching_glob,
            path=path,
            title="Glob Does Not Match Any Files",
            detail=f"Glob {pattern!r} in {path} does not match any files",
        )

    @classmethod
    def parse_error(
        cls, detail: str, location: ParseErrorLocation | None = None,
    ) -> ValidationError:
        return cls(
            kind=ErrorKind.parse_error,
            meta=ParseErrorMetadata(detail=detail, location=location),
        )


class ValidationState(BaseModel):
    """Aggregated, immutable verdict of one validation run.

    The document is valid exactly when ``errors`` is empty.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    action_type: DocumentKind | None = Field(None, alias="actionType")
    file_path: str | None = Field(None, alias="filePath")
    errors: tuple[ValidationError, ...] = ()

    def is_valid(self) -> bool:
        return not self.errors

    def with_errors(self, *errors: ValidationError) -> ValidationState:
        """Return a copy with ``errors`` appended in order."""
        return self.model_copy(update={"errors": self.errors + tuple(errors)})

    def to_json_value(self) -> dict[str, Any]:
        """Serialized form shared by the CLI dump and the embedded binding."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def escape_pointer_token(token: Any) -> str:
    """Escape a single JSON Pointer reference token (RFC 6901)."""
    return str(token).replace("~", "~0").replace("/", "~1")


def json_pointer(parts: Any) -> str:
    """Build a JSON Pointer from path components; the root is ``""``."""
    return "".join(f"/{escape_pointer_token(p)}" for p in parts)


ValidationError.model_rebuild()
ValidationState.model_rebuild()
