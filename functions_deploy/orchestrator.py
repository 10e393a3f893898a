from __future__ import annotations

import os
from typing import Any, List

from . import actions, credentials, firebase_functions, installer, manifest
from .config import DeployConfig
from .errors import DirectoryGuardError
from .logging_utils import get_logger
from .report import RunReport, build_report
from .result import Err, Ok, Result
from .runtime import detect_runtime


logger = get_logger(__name__)


MANIFEST_NOT_FOUND_MESSAGE = (
    "firebase.json file not found. If your firebase.json file is not in the root of your repo, "
    "edit the entryPoint option of this GitHub action."
)


def guard_entry_point(entry_point: str) -> Result[str]:
    """
    entryPoint 디렉토리와 그 안의 firebase.json 을 확인한다.

    os.chdir 대신 이후 단계가 기준으로 쓸 base_dir(절대경로)를 돌려준다.
    """
    if entry_point != ".":
        logger.info("기준 디렉토리: %s", entry_point)
        if not os.path.isdir(entry_point):
            return Err(
                DirectoryGuardError(
                    f"Error changing to directory {entry_point}: no such directory"
                )
            )

    base_dir = os.path.abspath(entry_point)
    if not os.path.isfile(manifest.manifest_path(base_dir)):
        return Err(DirectoryGuardError(MANIFEST_NOT_FOUND_MESSAGE))

    logger.info("firebase.json 확인. 배포를 계속합니다.")
    return Ok(base_dir)


def _run_steps(cfg: DeployConfig) -> Result[Any]:
    with actions.group("Verifying firebase.json exists"):
        guarded = guard_entry_point(cfg.entry_point)
    if isinstance(guarded, Err):
        return guarded
    base_dir = guarded.value

    with actions.group("Setting up CLI credentials"):
        secret = credentials.resolve_service_account(cfg.firebase_service_account)
        if isinstance(secret, Err):
            return secret
        gac = credentials.create_credential_file(secret.value)
        if isinstance(gac, Err):
            return gac
        logger.info("Application Default Credentials 임시 파일을 만들었습니다.")
    gac_path = gac.value

    try:
        with actions.group("Installing function dependencies"):
            directories = manifest.read_function_directories(base_dir)
            if isinstance(directories, Err):
                return directories
            installed = installer.install_dependencies(directories.value, base_dir)
            if isinstance(installed, Err):
                return installed

        with actions.group("Deploying firebase functions"):
            return firebase_functions.deploy_production_functions(
                gac_path,
                project_id=cfg.project_id,
                firebase_tools_version=cfg.firebase_tools_version,
                base_dir=base_dir,
            )
    finally:
        credentials.remove_credential_file(gac_path)


def run_deploy(cfg: DeployConfig) -> RunReport:
    """
    guard → credentials → install → deploy 를 순서대로 실행하고 최종 리포트를 만든다.
    어느 단계든 첫 실패에서 멈춘다.
    """
    outcome = _run_steps(cfg)
    if isinstance(outcome, Err):
        logger.error("배포 실패: %s", outcome.message)
    return build_report(outcome, cfg.project_id)


def plan_deploy(entry_point: str = ".") -> tuple[str, bool]:
    """
    실제 설치/배포 없이 firebase.json 과 함수 디렉토리 상태를 요약한다.

    Returns:
        summary: 사람이 읽기 좋은 텍스트 요약
        has_issues: 배포가 실패할 것이 확실한 문제가 있는지 여부
    """
    lines: List[str] = []
    lines.append("# Functions deploy plan")
    lines.append(f"- entry_point: {entry_point}")
    lines.append("")

    guarded = guard_entry_point(entry_point)
    if isinstance(guarded, Err):
        lines.append(f"- [ERROR] {guarded.message}")
        return "\n".join(lines), True
    base_dir = guarded.value

    directories = manifest.read_function_directories(base_dir)
    if isinstance(directories, Err):
        lines.append(f"- [ERROR] {directories.message}")
        return "\n".join(lines), True

    lines.append("## Function directories")
    if not directories.value:
        lines.append("- (none)")

    has_issues = False
    for directory in directories.value:
        path = os.path.join(base_dir, directory)
        if not os.path.isdir(path):
            has_issues = True
            lines.append(f"- {directory}: MISSING")
            continue
        lines.append(f"- {directory}: {detect_runtime(path).value}")

    return "\n".join(lines), has_issues
