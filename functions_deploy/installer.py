"""
installer
---------

firebase.json 에 선언된 함수 디렉토리마다 의존성을 설치하는 모듈.

- 디렉토리는 manifest 순서대로 하나씩 처리한다. (병렬 설치 없음)
- 첫 실패에서 즉시 멈추고, 이후 디렉토리는 건드리지 않는다.
- 프로세스 작업 디렉토리(os.chdir)는 바꾸지 않는다. 각 명령에 cwd 를 직접 넘긴다.
"""

from __future__ import annotations

import os
from typing import Dict, List, Sequence

from .errors import (
    DependencyInstallError,
    DirectoryChangeError,
    DirectoryNotFoundError,
    InstallCommandError,
)
from .logging_utils import get_logger
from .result import Err, Ok, Result
from .runtime import Runtime, detect_runtime
from .subprocess_utils import CommandError, run_command


logger = get_logger(__name__)


VENV_DIRNAME = "venv"
REQUIREMENTS_FILENAME = "requirements.txt"
PYTHON_BIN = "python3"


def _venv_bin_dir(venv_dir: str) -> str:
    return os.path.join(venv_dir, "Scripts" if os.name == "nt" else "bin")


def _activated_env(venv_dir: str) -> Dict[str, str]:
    """venv 의 activate 스크립트가 하는 일(VIRTUAL_ENV, PATH)을 환경변수로 재현한다."""
    env = dict(os.environ)
    env["VIRTUAL_ENV"] = venv_dir
    env["PATH"] = _venv_bin_dir(venv_dir) + os.pathsep + env.get("PATH", "")
    env.pop("PYTHONHOME", None)
    return env


def _log_captured_output(err: CommandError) -> None:
    if err.stdout.strip():
        logger.error("설치 stdout:\n%s", err.stdout.rstrip())
    if err.stderr.strip():
        logger.error("설치 stderr:\n%s", err.stderr.rstrip())


def _list_packages(cmd: List[str], *, cwd: str, env: Dict[str, str] | None = None) -> None:
    # 목록 출력은 참고용이라 실패해도 설치 결과에 영향을 주지 않는다.
    try:
        listing = run_command(cmd, cwd=cwd, env=env)
    except CommandError as e:
        logger.warning("패키지 목록 조회 실패 (무시): %s", e)
        return
    if listing.stdout.strip():
        logger.info("설치된 패키지:\n%s", listing.stdout.rstrip())


def install_python(path: str) -> None:
    """
    venv 생성 → 활성화 → requirements.txt 설치 → pip list.

    firebase-tools 는 함수 디렉토리 바로 아래의 venv 를 사용하므로 이름을 바꾸지 않는다.
    """
    venv_dir = os.path.join(path, VENV_DIRNAME)
    logger.info("Python 가상환경 생성: %s", venv_dir)
    run_command([PYTHON_BIN, "-m", "venv", VENV_DIRNAME], cwd=path)

    env = _activated_env(venv_dir)
    venv_python = os.path.join(_venv_bin_dir(venv_dir), "python")

    logger.info("Python 의존성 설치 (%s)", REQUIREMENTS_FILENAME)
    run_command(
        [venv_python, "-m", "pip", "install", "-r", REQUIREMENTS_FILENAME],
        cwd=path,
        env=env,
    )

    _list_packages([venv_python, "-m", "pip", "list"], cwd=path, env=env)


def install_node(path: str) -> None:
    """lockfile 기준 clean install(npm ci) 후 의존성 트리를 출력한다."""
    logger.info("npm 의존성 설치 (npm ci)")
    run_command(["npm", "ci"], cwd=path)

    _list_packages(["npm", "ls"], cwd=path)


def install_in_directory(directory: str, base_dir: str = ".") -> Result[str]:
    path = os.path.join(base_dir, directory)
    logger.info("Entrypoint 디렉토리: %s", os.path.abspath(base_dir))

    if not os.path.exists(path):
        return Err(DirectoryNotFoundError(directory))
    logger.info("디렉토리 '%s' 확인. 설치를 계속합니다.", directory)

    if not os.path.isdir(path):
        return Err(DirectoryChangeError(directory, "Not a directory."))
    if not os.access(path, os.R_OK | os.X_OK):
        return Err(DirectoryChangeError(directory, "Permission denied."))

    runtime = detect_runtime(path)
    logger.info("런타임 판별: %s -> %s", directory, runtime.value)

    try:
        if runtime is Runtime.PYTHON:
            install_python(path)
        else:
            install_node(path)
    except CommandError as e:
        _log_captured_output(e)
        label = "python" if runtime is Runtime.PYTHON else "npm"
        return Err(
            InstallCommandError(
                directory,
                f"Error when installing {label} dependencies: {e}",
            )
        )

    return Ok(directory)


def install_dependencies(directories: Sequence[str], base_dir: str = ".") -> Result[List[str]]:
    """
    directories 를 순서대로 설치한다.

    Returns:
        Ok(처리한 디렉토리 목록, 순서 유지) 또는 첫 실패를 감싼 Err(DependencyInstallError)
    """
    processed: List[str] = []
    for directory in directories:
        outcome = install_in_directory(directory, base_dir)
        if isinstance(outcome, Err):
            logger.error("디렉토리 설치 실패: %s", directory)
            return Err(DependencyInstallError(directory, outcome.error))
        processed.append(outcome.value)

    logger.info("함수 의존성 설치 완료: %s", processed)
    return Ok(processed)
