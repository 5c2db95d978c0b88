"""Tests for the embedded entry points."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from actval.binding import validate_action, validate_workflow
from actval.validator.path_globs import FilesystemGlobResolver


def test_valid_action_value(valid_action_yaml: str) -> None:
    assert validate_action(valid_action_yaml) == {"actionType": "action", "errors": []}


def test_valid_workflow_value(valid_workflow_yaml: str) -> None:
    assert validate_workflow(valid_workflow_yaml) == {"actionType": "workflow", "errors": []}


def test_invalid_document_is_returned_not_raised() -> None:
    value = validate_action("name: only-a-name\n")
    assert value["actionType"] == "action"
    assert "filePath" not in value
    codes = [e["meta"]["code"] for e in value["errors"]]
    assert codes == ["required", "required"]


def test_parse_error_value() -> None:
    value = validate_workflow("on: [push\n")
    assert len(value["errors"]) == 1
    meta = value["errors"][0]["meta"]
    assert meta["code"] == "parse_error"
    assert meta["title"] == "Parse Error"
    assert set(meta["location"]) == {"index", "line", "column"}


def test_combinator_states_serialized() -> None:
    value = validate_workflow("on: push\njobs:\n  build:\n    runs-on: 5\n")
    err = value["errors"][0]
    assert err["meta"]["code"] == "one_of"
    assert err["meta"]["path"] == "/jobs/build"
    assert len(err["states"]) == 2
    for state in err["states"]:
        assert "actionType" not in state
        assert state["errors"]


def test_globs_are_advisory_only(caplog: pytest.LogCaptureFixture) -> None:
    src = (
        "on:\n  push:\n    paths: ['[unterminated']\n"
        "jobs:\n  build:\n    runs-on: ubuntu-latest\n    steps:\n      - run: make\n"
    )
    with caplog.at_level(logging.WARNING):
        value = validate_workflow(src)
    assert value["errors"] == []
    assert any("on.push.paths" in r.getMessage() for r in caplog.records)


def test_resolver_can_be_injected(empty_tree: Path) -> None:
    src = (
        "on:\n  push:\n    paths: ['no/such/file/*.txt']\n"
        "jobs:\n  build:\n    runs-on: ubuntu-latest\n    steps:\n      - run: make\n"
    )
    value = validate_workflow(src, glob_resolver=FilesystemGlobResolver())
    assert [e["meta"]["code"] for e in value["errors"]] == ["no_files_matching_glob"]


def test_verbose_notice(caplog: pytest.LogCaptureFixture, valid_action_yaml: str) -> None:
    with caplog.at_level(logging.INFO, logger="actval.binding"):
        validate_action(valid_action_yaml, verbose=True)
    assert "Treating file as an Action definition" in caplog.text


def test_recursive_alias_is_reported_not_raised() -> None:
    value = validate_workflow("on: push\njobs: &a\n  x: *a\n")
    assert [e["meta"]["code"] for e in value["errors"]] == ["parse_error"]
