"""
actions
-------

GitHub Actions runner 와 주고받는 최소한의 workflow command 래퍼.

- group / end_group : 로그 접기(::group::)
- set_failed        : ::error:: 주석 + 실패 상태 기록(프로세스 exit code 는 CLI 가 결정)
- set_output        : $GITHUB_OUTPUT 에 step output 기록
- append_summary    : $GITHUB_STEP_SUMMARY 에 markdown 추가

runner 밖(로컬 실행)에서는 파일 기반 명령은 조용히 건너뛴다.
"""

from __future__ import annotations

import os
import sys
import uuid
from contextlib import contextmanager
from typing import Iterator

from .logging_utils import get_logger


logger = get_logger(__name__)

_failed: bool = False


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _issue(command: str, message: str = "") -> None:
    sys.stdout.write(f"::{command}::{_escape_data(message)}\n")
    sys.stdout.flush()


def start_group(name: str) -> None:
    _issue("group", name)


def end_group() -> None:
    _issue("endgroup")


@contextmanager
def group(name: str) -> Iterator[None]:
    start_group(name)
    try:
        yield
    finally:
        end_group()


def set_failed(message: str) -> None:
    global _failed
    _failed = True
    _issue("error", message)


def is_failed() -> bool:
    return _failed


def reset() -> None:
    global _failed
    _failed = False


def _append_file_command(env_name: str, text: str) -> bool:
    path = os.getenv(env_name)
    if not path:
        return False
    with open(path, "a", encoding="utf-8") as f:
        f.write(text)
    return True


def set_output(name: str, value: str) -> None:
    # 값에 줄바꿈이 있어도 안전하도록 heredoc 구분자를 쓴다.
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    text = f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
    if not _append_file_command("GITHUB_OUTPUT", text):
        logger.debug("GITHUB_OUTPUT 이 없어 output 기록을 건너뜁니다: %s", name)


def append_summary(markdown: str) -> None:
    if not _append_file_command("GITHUB_STEP_SUMMARY", markdown.rstrip("\n") + "\n"):
        logger.debug("GITHUB_STEP_SUMMARY 가 없어 summary 기록을 건너뜁니다.")
