import os

import pytest

from functions_deploy.config import DeployConfig, get_input, input_env_name, load_env_files


def _base_env() -> dict[str, str]:
    return {
        "INPUT_PROJECTID": "test-project",
        "INPUT_FIREBASESERVICEACCOUNT": '{"type": "service_account"}',
    }


def test_input_env_name_matches_runner_convention() -> None:
    assert input_env_name("projectId") == "INPUT_PROJECTID"
    assert input_env_name("firebase tools version") == "INPUT_FIREBASE_TOOLS_VERSION"


def test_from_env_reads_action_inputs(monkeypatch: pytest.MonkeyPatch) -> None:
    for key, value in _base_env().items():
        monkeypatch.setenv(key, value)
    monkeypatch.setenv("INPUT_FIREBASETOOLSVERSION", "13.0.0")

    cfg = DeployConfig.from_env()

    assert cfg.project_id == "test-project"
    assert cfg.firebase_service_account == '{"type": "service_account"}'
    assert cfg.entry_point == "."
    assert cfg.firebase_tools_version == "13.0.0"


def test_missing_required_input_raises_value_error(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("INPUT_PROJECTID", "test-project")

    with pytest.raises(ValueError) as excinfo:
        DeployConfig.from_env()

    assert "firebaseServiceAccount" in str(excinfo.value)
    assert "projectId" not in str(excinfo.value)


def test_blank_input_falls_back_to_plain_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INPUT_PROJECTID", "   ")
    monkeypatch.setenv("FIREBASE_PROJECT_ID", "fallback-project")

    assert get_input("projectId", "FIREBASE_PROJECT_ID") == "fallback-project"


def test_repr_hides_service_account(monkeypatch: pytest.MonkeyPatch) -> None:
    for key, value in _base_env().items():
        monkeypatch.setenv(key, value)

    cfg = DeployConfig.from_env()

    assert _base_env()["INPUT_FIREBASESERVICEACCOUNT"] not in repr(cfg)
    assert "firebase_service_account='***'" in repr(cfg)
    assert "test-project" in repr(cfg)


def test_env_file_does_not_override_runner_inputs(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".env").write_text(
        "FIREBASE_PROJECT_ID=from-dotenv\nFIREBASE_SERVICE_ACCOUNT=secret\nINPUT_PROJECTID=ignored\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("INPUT_PROJECTID", "from-runner")
    # load_dotenv 가 채우는 키도 테스트 후 정리되도록 미리 등록해 둔다.
    monkeypatch.setenv("FIREBASE_SERVICE_ACCOUNT", "")
    monkeypatch.delenv("FIREBASE_SERVICE_ACCOUNT")
    monkeypatch.setenv("FIREBASE_PROJECT_ID", "")
    monkeypatch.delenv("FIREBASE_PROJECT_ID")

    load_env_files(str(tmp_path))
    cfg = DeployConfig.from_env()

    assert cfg.project_id == "from-runner"
    assert cfg.firebase_service_account == "secret"


def test_overrides_win_without_touching_environ(monkeypatch: pytest.MonkeyPatch) -> None:
    for key, value in _base_env().items():
        monkeypatch.setenv(key, value)

    cfg = DeployConfig.from_env({"projectId": "cli-project", "entryPoint": None, "firebaseToolsVersion": "  "})

    assert cfg.project_id == "cli-project"
    assert cfg.entry_point == "."
    assert cfg.firebase_tools_version is None
    assert os.environ["INPUT_PROJECTID"] == "test-project"
    assert "INPUT_ENTRYPOINT" not in os.environ
