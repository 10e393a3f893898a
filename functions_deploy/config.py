from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, List

from dotenv import load_dotenv


ENV_FILES_DEFAULT_ORDER = [".env", ".env.functions"]

DEFAULT_ENTRY_POINT = "."


def load_env_files(base_dir: str = ".",
                   files: Optional[List[str]] = None) -> None:
    """
    주어진 디렉토리에서 .env 계열 파일을 순서대로 로드한다.
    후순위 파일이 같은 키를 덮어쓰지만, 이미 설정된 프로세스 환경변수(CI 입력)는 덮어쓰지 않는다.
    """
    order = files or ENV_FILES_DEFAULT_ORDER
    for name in order:
        path = os.path.join(base_dir, name)
        if os.path.exists(path):
            load_dotenv(path, override=False)


def input_env_name(name: str) -> str:
    """Actions 입력 이름을 runner 가 넘겨주는 환경변수 이름으로 바꾼다. (projectId -> INPUT_PROJECTID)"""
    return "INPUT_" + name.replace(" ", "_").upper()


def get_input(
    name: str,
    fallback_env: Optional[str] = None,
    overrides: Optional[Mapping[str, Optional[str]]] = None,
) -> Optional[str]:
    """
    Actions 입력값을 읽는다. overrides(CLI 옵션)가 먼저, 비어 있으면 fallback_env 를 본다.
    앞뒤 공백은 제거한다.
    """
    if overrides:
        value = overrides.get(name)
        if value is not None and value.strip():
            return value.strip()
    raw = os.getenv(input_env_name(name))
    if raw is not None and raw.strip():
        return raw.strip()
    if fallback_env:
        raw = os.getenv(fallback_env)
        if raw is not None and raw.strip():
            return raw.strip()
    return None


@dataclass
class DeployConfig:
    # 필수
    project_id: str
    firebase_service_account: str

    # 선택
    entry_point: str = DEFAULT_ENTRY_POINT
    firebase_tools_version: Optional[str] = None

    @classmethod
    def from_env(cls, overrides: Optional[Mapping[str, Optional[str]]] = None) -> "DeployConfig":
        """
        환경변수(INPUT_*, fallback env)에서 설정을 읽는다.
        overrides 는 입력 이름(projectId 등) 기준으로 환경변수보다 우선한다. os.environ 은 건드리지 않는다.
        """
        missing: List[str] = []
        def req(name: str, fallback: str) -> str:
            val = get_input(name, fallback, overrides)
            if not val:
                missing.append(f"{name} ({input_env_name(name)} / {fallback})")
            return val or ""

        cfg = cls(
            project_id=req("projectId", "FIREBASE_PROJECT_ID"),
            firebase_service_account=req("firebaseServiceAccount", "FIREBASE_SERVICE_ACCOUNT"),
            entry_point=get_input("entryPoint", "FUNCTIONS_ENTRY_POINT", overrides) or DEFAULT_ENTRY_POINT,
            firebase_tools_version=get_input("firebaseToolsVersion", "FIREBASE_TOOLS_VERSION", overrides),
        )

        if missing:
            raise ValueError(
                "필수 입력값이 누락되었습니다: " + ", ".join(sorted(set(missing)))
            )

        return cfg

    def __repr__(self) -> str:
        # 서비스 계정 시크릿은 로그에 남기지 않는다.
        return (
            f"DeployConfig(project_id={self.project_id!r}, "
            f"firebase_service_account='***', "
            f"entry_point={self.entry_point!r}, "
            f"firebase_tools_version={self.firebase_tools_version!r})"
        )
