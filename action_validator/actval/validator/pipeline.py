"""Run the syntax, schema, needs and glob checks over one document."""

from __future__ import annotations

from actval.validator.job_needs import check_job_needs
from actval.validator.models import DocumentKind, ValidationRequest, ValidationState
from actval.validator.path_globs import GlobResolver, SandboxGlobResolver, check_path_globs
from actval.validator.schema_conformance import check_schema_conformance
from actval.validator.yaml_syntax import check_yaml_syntax


def run_validation(
    request: ValidationRequest, glob_resolver: GlobResolver | None = None,
) -> ValidationState:
    """Run the full validation pipeline on one document.

    Order: 1. YAML syntax → 2. Schema conformance → 3. Job needs →
    4. Path globs. Steps 3 and 4 apply to workflows only. If syntax fails,
    returns immediately with the parse error as the only entry.
    """
    stamp = {"action_type": request.kind, "file_path": request.display_name}

    # Step 1: YAML syntax
    document, parse_error = check_yaml_syntax(request.source)
    if parse_error is not None:
        return ValidationState(**stamp, errors=(parse_error,))

    # Step 2: Schema conformance seeds the state
    schema_state = check_schema_conformance(document, request.kind)
    state = ValidationState(**stamp, errors=schema_state.errors)

    if request.kind is not DocumentKind.workflow:
        return state

    # Step 3: Job dependency cross-check
    state = state.with_errors(*check_job_needs(document))

    # Step 4: Trigger path globs
    resolver = glob_resolver if glob_resolver is not None else SandboxGlobResolver()
    return state.with_errors(*check_path_globs(document, resolver))


def validate_source(
    source: str,
    kind: DocumentKind,
    display_name: str | None = None,
    glob_resolver: GlobResolver | None = None,
) -> ValidationState:
    """Convenience wrapper building the request from plain arguments."""
    request = ValidationRequest(source=source, kind=kind, display_name=display_name)
    return run_validation(request, glob_resolver)
