"""Command-line entrypoint: validate one Action or Workflow file."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from actval.validator.models import ValidationRequest
from actval.validator.path_globs import FilesystemGlobResolver
from actval.validator.pipeline import run_validation
from actval.validator.selector import (
    UndecidableFileName,
    file_name_of,
    kind_notice,
    select_document_kind,
)

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def _fatal(src: Path, reason: object) -> NoReturn:
    click.echo(f"Fatal error validating {src}: {reason}")
    sys.exit(1)


@click.command(
    name="action-validator",
    help="A validator for GitHub Action and Workflow YAML files",
)
@click.version_option(VERSION, prog_name="action-validator")
@click.option("-v", "--verbose", is_flag=True, help="Be more verbose")
@click.argument("path_to_action_yaml", type=click.Path(path_type=Path))
def main(verbose: bool, path_to_action_yaml: Path) -> None:
    """Validate PATH_TO_ACTION_YAML; exit 1 if it is invalid or unreadable."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        stream=sys.stderr,
    )
    src = path_to_action_yaml

    try:
        file_name = file_name_of(src)
        source = src.read_text(encoding="utf-8")
    except (UndecidableFileName, OSError, UnicodeDecodeError) as e:
        _fatal(src, e)

    request = ValidationRequest(
        source=source,
        kind=select_document_kind(file_name),
        display_name=str(src),
        verbose=verbose,
    )
    if request.verbose:
        logger.info(kind_notice(request.kind, file_name))

    state = run_validation(request, FilesystemGlobResolver())

    if not state.is_valid():
        logger.error(
            "Validation failed: %s", json.dumps(state.to_json_value(), indent=2),
        )
        _fatal(src, "validation failed")


if __name__ == "__main__":
    main()
