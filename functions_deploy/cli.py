import os
import sys
from typing import Dict, Optional

import click

from . import actions
from .config import DEFAULT_ENTRY_POINT, load_env_files, get_input, DeployConfig
from .logging_utils import setup_logging, get_logger
from .orchestrator import plan_deploy, run_deploy
from .report import failure_report, publish_report


logger = get_logger(__name__)


@click.group()
@click.option(
    "-C",
    "--chdir",
    "chdir",
    type=click.Path(file_okay=False, dir_okay=True, exists=True),
    default=".",
    help="작업 디렉토리 (기본: 현재 디렉토리). .env 파일도 여기서 읽는다.",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="로그 레벨을 DEBUG로 올립니다.",
)
@click.pass_context
def main(ctx: click.Context, chdir: str, verbose: int) -> None:
    """Firebase Cloud Functions 배포용 CI 스텝"""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["chdir"] = chdir
    ctx.obj["verbose"] = verbose


def _overrides(
    project_id: Optional[str] = None,
    entry_point: Optional[str] = None,
    firebase_tools_version: Optional[str] = None,
) -> Dict[str, Optional[str]]:
    # CLI 옵션은 Actions 입력 이름 기준으로 넘겨 환경변수보다 우선하게 한다.
    return {
        "projectId": project_id,
        "entryPoint": entry_point,
        "firebaseToolsVersion": firebase_tools_version,
    }


@main.command(name="deploy")
@click.option("--project-id", "project_id", type=str, default=None, help="Firebase 프로젝트 ID (projectId)")
@click.option("--entry-point", "entry_point", type=str, default=None, help="firebase.json 이 있는 디렉토리 (entryPoint)")
@click.option(
    "--firebase-tools-version",
    "firebase_tools_version",
    type=str,
    default=None,
    help="사용할 firebase-tools 버전 (기본: latest)",
)
@click.pass_context
def deploy(
    ctx: click.Context,
    project_id: Optional[str],
    entry_point: Optional[str],
    firebase_tools_version: Optional[str],
) -> None:
    """함수 의존성을 설치하고 Firebase Functions 를 배포"""
    base_dir: str = ctx.obj["chdir"]
    load_env_files(base_dir)
    actions.reset()

    try:
        cfg = DeployConfig.from_env(_overrides(project_id, entry_point, firebase_tools_version))
    except ValueError as e:
        logger.error("설정 로드 실패: %s", e)
        publish_report(failure_report(str(e)))
        sys.exit(1)
    logger.debug("Config loaded: %s", cfg)

    # entryPoint 는 -C 디렉토리 기준 상대경로로 해석한다.
    cfg.entry_point = os.path.normpath(os.path.join(base_dir, cfg.entry_point))

    report = run_deploy(cfg)
    publish_report(report)

    if not report.succeeded or actions.is_failed():
        sys.exit(1)


@main.command()
@click.option("--entry-point", "entry_point", type=str, default=None, help="firebase.json 이 있는 디렉토리 (entryPoint)")
@click.pass_context
def plan(ctx: click.Context, entry_point: Optional[str]) -> None:
    """설치/배포 없이 firebase.json 과 함수 디렉토리(런타임 판별 포함)를 출력"""
    base_dir: str = ctx.obj["chdir"]
    load_env_files(base_dir)

    target = get_input("entryPoint", "FUNCTIONS_ENTRY_POINT", _overrides(entry_point=entry_point)) or DEFAULT_ENTRY_POINT
    report, has_issues = plan_deploy(os.path.normpath(os.path.join(base_dir, target)))
    click.echo(report)

    if has_issues:
        sys.exit(1)
