"""Choose which schema governs a document."""

from __future__ import annotations

from pathlib import PurePath

from actval.validator.models import DocumentKind

ACTION_FILE_NAMES = frozenset({"action.yml", "action.yaml"})


class UndecidableFileName(ValueError):
    """Raised when a path has no final component to infer a kind from."""


def select_document_kind(
    file_name: str | None = None,
    declared: DocumentKind | None = None,
) -> DocumentKind:
    """Return the declared kind, else infer it from the file name.

    ``action.yml`` and ``action.yaml`` are Actions; anything else, including
    no file name at all, is treated as a Workflow.
    """
    if declared is not None:
        return declared
    if file_name in ACTION_FILE_NAMES:
        return DocumentKind.action
    return DocumentKind.workflow


def file_name_of(path: str | PurePath) -> str:
    name = PurePath(path).name
    if name in ("", ".", ".."):
        raise UndecidableFileName("Unable to derive file name from src!")
    return name


def kind_notice(kind: DocumentKind, display_name: str | None = None) -> str:
    """Human notice used by verbose callers, e.g. "Treating x as a Workflow definition"."""
    article = "an Action" if kind is DocumentKind.action else "a Workflow"
    return f"Treating {display_name or 'file'} as {article} definition"
