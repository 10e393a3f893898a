from __future__ import annotations

import os
from typing import List

import pytest
from click.testing import CliRunner

from functions_deploy import cli, firebase_functions
from functions_deploy.subprocess_utils import RunResult

from conftest import write_manifest


def test_deploy_success_exits_zero(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    write_manifest(tmp_path, {"functions": []})
    monkeypatch.setenv("INPUT_FIREBASESERVICEACCOUNT", '{"type": "service_account"}')
    calls: List[list[str]] = []

    def fake_run(cmd, **kwargs):  # noqa: ANN001, ANN003
        calls.append(list(cmd))
        return RunResult(returncode=0, stdout="", stderr="")

    monkeypatch.setattr(firebase_functions, "run_command", fake_run)

    result = CliRunner().invoke(
        cli.main,
        ["-C", str(tmp_path), "deploy", "--project-id", "cli-project", "--firebase-tools-version", "13.0.0"],
    )

    assert result.exit_code == 0, result.output
    assert calls[0][1] == "firebase-tools@13.0.0"
    assert "cli-project" in calls[0]
    assert "::group::Deploying firebase functions" in result.output


def test_deploy_missing_inputs_fails(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INPUT_PROJECTID", "test-project")

    result = CliRunner().invoke(cli.main, ["-C", str(tmp_path), "deploy"])

    assert result.exit_code == 1
    assert "::error::" in result.output
    assert "firebaseServiceAccount" in result.output


def test_deploy_bad_manifest_fails(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    write_manifest(tmp_path, {"functions": "not-an-array"})
    monkeypatch.setenv("INPUT_PROJECTID", "test-project")
    monkeypatch.setenv("INPUT_FIREBASESERVICEACCOUNT", "{}")

    result = CliRunner().invoke(cli.main, ["-C", str(tmp_path), "deploy"])

    assert result.exit_code == 1
    assert "::error::Unexpected data shape" in result.output


def test_plan_prints_directories(tmp_path) -> None:
    write_manifest(tmp_path, {"functions": [{"source": "functions"}]})
    (tmp_path / "functions").mkdir()

    result = CliRunner().invoke(cli.main, ["-C", str(tmp_path), "plan"])

    assert result.exit_code == 0, result.output
    assert "- functions: node" in result.output


def test_plan_with_relative_entry_point(tmp_path) -> None:
    app = tmp_path / "app"
    app.mkdir()
    write_manifest(app, {"functions": [{"source": "missing"}]})

    result = CliRunner().invoke(cli.main, ["-C", str(tmp_path), "plan", "--entry-point", "app"])

    assert result.exit_code == 1
    assert "- missing: MISSING" in result.output


def test_cli_options_do_not_leak_into_later_runs(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    write_manifest(tmp_path, {"functions": []})
    monkeypatch.setenv("INPUT_FIREBASESERVICEACCOUNT", '{"type": "service_account"}')
    monkeypatch.setattr(
        firebase_functions, "run_command", lambda cmd, **kwargs: RunResult(returncode=0, stdout="", stderr="")
    )
    runner = CliRunner()

    first = runner.invoke(cli.main, ["-C", str(tmp_path), "deploy", "--project-id", "cli-project"])
    second = runner.invoke(cli.main, ["-C", str(tmp_path), "deploy"])

    assert first.exit_code == 0, first.output
    assert "INPUT_PROJECTID" not in os.environ
    assert second.exit_code == 1
    assert "projectId" in second.output
