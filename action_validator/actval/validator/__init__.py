"""Validation pipeline for Action and Workflow YAML."""

from actval.validator.models import (
    DocumentKind,
    ErrorKind,
    ValidationError,
    ValidationRequest,
    ValidationState,
)
from actval.validator.path_globs import (
    FilesystemGlobResolver,
    GlobResolver,
    SandboxGlobResolver,
)
from actval.validator.pipeline import run_validation, validate_source

__all__ = [
    "DocumentKind",
    "ErrorKind",
    "FilesystemGlobResolver",
    "GlobResolver",
    "SandboxGlobResolver",
    "ValidationError",
    "ValidationRequest",
    "ValidationState",
    "run_validation",
    "validate_source",
]
