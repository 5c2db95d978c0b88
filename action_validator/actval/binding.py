"""Embedded entry points: YAML text in, serialized validation state out.

These never raise for invalid documents; every finding is data in the
returned value. The host has no filesystem to offer, so trigger path globs
are reported as skipped rather than checked.
"""

from __future__ import annotations

import logging
from typing import Any

from actval.validator.models import DocumentKind, ValidationRequest
from actval.validator.path_globs import GlobResolver, SandboxGlobResolver
from actval.validator.pipeline import run_validation
from actval.validator.selector import kind_notice

logger = logging.getLogger(__name__)


def _run(
    kind: DocumentKind,
    src: str,
    verbose: bool,
    glob_resolver: GlobResolver | None,
) -> dict[str, Any]:
    request = ValidationRequest(source=src, kind=kind, verbose=verbose)
    if request.verbose:
        logger.info(kind_notice(kind))
    state = run_validation(request, glob_resolver or SandboxGlobResolver(logger))
    return state.to_json_value()


def validate_action(
    src: str, verbose: bool = False, glob_resolver: GlobResolver | None = None,
) -> dict[str, Any]:
    """Validate ``src`` as an Action metadata file."""
    return _run(DocumentKind.action, src, verbose, glob_resolver)


def validate_workflow(
    src: str, verbose: bool = False, glob_resolver: GlobResolver | None = None,
) -> dict[str, Any]:
    """Validate ``src`` as a Workflow file."""
    return _run(DocumentKind.workflow, src, verbose, glob_resolver)
