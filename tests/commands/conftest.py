"""Helpers for CLI tests: invoke the real app over isolated directories."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from focusnote.main import app


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner):
    """Invoke the focusnote app with the given arguments."""

    def _invoke(*args: str, input: str | None = None):
        return runner.invoke(app, list(args), input=input)

    return _invoke


@pytest.fixture
def add_task(invoke):
    """Create a task through the CLI and return its JSON record."""

    def _add(title: str, *extra: str) -> dict:
        result = invoke("tasks", "add", title, *extra, "--output", "json")
        assert result.exit_code == 0, result.output
        return json.loads(result.stdout)

    return _add
