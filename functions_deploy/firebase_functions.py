"""
firebase_functions
------------------

firebase-tools 로 Cloud Functions 를 배포하는 모듈.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .errors import DeploymentError
from .logging_utils import get_logger
from .result import Err, Ok, Result
from .subprocess_utils import CommandError, run_command


logger = get_logger(__name__)


DEFAULT_FIREBASE_TOOLS_VERSION = "latest"


@dataclass(frozen=True)
class DeployOutput:
    raw_output: str
    result: Dict[str, Any] = field(default_factory=dict)


def build_deploy_command(project_id: str, firebase_tools_version: Optional[str] = None) -> List[str]:
    version = firebase_tools_version or DEFAULT_FIREBASE_TOOLS_VERSION
    return [
        "npx",
        f"firebase-tools@{version}",
        "deploy",
        "--only",
        "functions",
        "--project",
        project_id,
        "--json",
    ]


def _parse_json_output(raw: str) -> Dict[str, Any]:
    """
    --json 출력은 마지막에 JSON 객체 하나가 붙는다. 앞쪽 진행 로그는 무시한다.
    파싱이 안 되면 빈 dict.
    """
    # 줄 맨 앞의 "{" 를 뒤에서부터 시도한다.
    end = len(raw)
    while end > 0:
        start = raw.rfind("\n{", 0, end)
        start = 0 if start < 0 else start + 1
        if raw.startswith("{", start):
            try:
                parsed = json.loads(raw[start:])
            except ValueError:
                pass
            else:
                return parsed if isinstance(parsed, dict) else {}
        if start == 0:
            break
        end = start - 1
    return {}


def deploy_production_functions(
    credential_path: str,
    *,
    project_id: str,
    firebase_tools_version: Optional[str] = None,
    base_dir: str = ".",
) -> Result[DeployOutput]:
    """
    functions 만 production 프로젝트로 배포한다.

    credential_path 는 GOOGLE_APPLICATION_CREDENTIALS 로 넘겨 firebase-tools 가 직접 인증하게 한다.
    """
    cmd = build_deploy_command(project_id, firebase_tools_version)
    env = dict(os.environ)
    env["GOOGLE_APPLICATION_CREDENTIALS"] = credential_path

    logger.info(
        "Firebase Functions 배포: project=%s firebase-tools=%s dir=%s",
        project_id,
        firebase_tools_version or DEFAULT_FIREBASE_TOOLS_VERSION,
        base_dir,
    )

    try:
        run = run_command(cmd, cwd=base_dir, env=env, stream_output=True)
    except CommandError as e:
        raw = e.output or str(e)
        logger.error("firebase deploy 실패 (exit=%s)", e.returncode)
        return Err(DeploymentError(raw))

    parsed = _parse_json_output(run.stdout)
    if parsed.get("status") == "error":
        # exit 0 이어도 status=error 면 실패로 본다.
        return Err(DeploymentError(str(parsed.get("error") or run.stdout)))

    result = parsed.get("result") if isinstance(parsed.get("result"), dict) else {}
    if result:
        logger.debug("firebase deploy result: %s", result)
    return Ok(DeployOutput(raw_output=run.stdout, result=result))
