"""
report
------

파이프라인 최종 결과를 하나의 리포트로 만들고 CI 에 노출하는 모듈.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

from . import actions
from .logging_utils import get_logger
from .result import Err, Result


logger = get_logger(__name__)


CONSOLE_HOST = "console.firebase.google.com"

SUCCESS = "success"
FAILURE = "failure"


def console_url(project_id: str) -> str:
    return f"https://{CONSOLE_HOST}/project/{project_id}/functions"


@dataclass(frozen=True)
class RunReport:
    conclusion: str
    title: str
    summary: str
    console_url: Optional[str] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.conclusion == SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.console_url:
            data["console_url"] = self.console_url
        data["conclusion"] = self.conclusion
        data["output"] = {"title": self.title, "summary": self.summary}
        return data


def success_report(project_id: str) -> RunReport:
    return RunReport(
        conclusion=SUCCESS,
        title="Functions deploy succeeded",
        summary=f"Deployed all functions to firebase project '{project_id}'",
        console_url=console_url(project_id),
    )


def failure_report(message: str) -> RunReport:
    return RunReport(
        conclusion=FAILURE,
        title="Functions deploy failed",
        summary=f"Error: {message}",
        error=message,
    )


def build_report(outcome: Result[Any], project_id: str) -> RunReport:
    if isinstance(outcome, Err):
        return failure_report(outcome.message)
    return success_report(project_id)


def _summary_markdown(report: RunReport) -> str:
    lines = [f"## {report.title}", "", report.summary]
    if report.console_url:
        lines.append("")
        lines.append(f"[Firebase console]({report.console_url})")
    return "\n".join(lines)


def publish_report(report: RunReport) -> None:
    """
    리포트를 한 번만 노출한다.
    실패면 set_failed 로 run 을 실패 상태로 표시한다.
    """
    if not report.succeeded:
        actions.set_failed(report.error or report.summary)

    logger.info("결과: %s", json.dumps(report.to_dict(), ensure_ascii=False))

    actions.set_output("conclusion", report.conclusion)
    if report.console_url:
        actions.set_output("console_url", report.console_url)
    actions.append_summary(_summary_markdown(report))
