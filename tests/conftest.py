"""
pytest 설정:

로컬 작업 환경에 설치된 다른 버전의 functions_deploy 패키지가 존재할 때,
`pytest` 실행 시 site-packages 쪽이 먼저 import 되어 테스트가 깨질 수 있다.

테스트는 항상 현재 레포의 소스를 대상으로 해야 하므로, repo root 를 sys.path 최상단에 고정한다.
"""

from __future__ import annotations

import json
import os
import sys
from typing import Any

import pytest


def pytest_configure() -> None:
    repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    if repo_root not in sys.path:
        sys.path.insert(0, repo_root)


_ENV_KEYS = (
    "INPUT_PROJECTID",
    "INPUT_FIREBASESERVICEACCOUNT",
    "INPUT_ENTRYPOINT",
    "INPUT_FIREBASETOOLSVERSION",
    "FIREBASE_PROJECT_ID",
    "FIREBASE_SERVICE_ACCOUNT",
    "FUNCTIONS_ENTRY_POINT",
    "FIREBASE_TOOLS_VERSION",
    "GITHUB_OUTPUT",
    "GITHUB_STEP_SUMMARY",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # runner 에서 돌 때 실제 입력/출력 파일을 건드리지 않도록 비운다.
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)

    from functions_deploy import actions

    actions.reset()


def write_manifest(base_dir: Any, data: Any) -> None:
    with open(os.path.join(str(base_dir), "firebase.json"), "w", encoding="utf-8") as f:
        json.dump(data, f)
