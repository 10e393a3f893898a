from __future__ import annotations

import subprocess
import sys
from dataclasses import dataclass
from textwrap import shorten
from typing import Mapping, Sequence

from .logging_utils import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class RunResult:
    returncode: int
    stdout: str
    stderr: str


class CommandError(RuntimeError):
    """
    자식 프로세스가 실패했을 때 발생한다.

    stdout/stderr 전체를 들고 있으므로 호출 측에서 필요한 만큼 로그로 흘릴 수 있다.
    """

    def __init__(
        self,
        message: str,
        *,
        cmd: Sequence[str],
        returncode: int | None = None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr

    @property
    def output(self) -> str:
        return "\n".join(part for part in (self.stdout.strip(), self.stderr.strip()) if part)


def _summarize(stdout: str, stderr: str) -> str:
    stdout = (stdout or "").strip()
    stderr = (stderr or "").strip()
    if stderr:
        return "\nstderr:\n" + shorten(stderr, width=2000)
    if stdout:
        return "\nstdout:\n" + shorten(stdout, width=2000)
    return ""


def run_command(
    cmd: Sequence[str],
    *,
    cwd: str | None = None,
    env: Mapping[str, str] | None = None,
    timeout: float | None = None,
    stream_output: bool = False,
) -> RunResult:
    """
    subprocess 실행 공통 유틸.

    - stream_output=False: stdout/stderr 를 메모리에 캡처, 실패 시 CommandError
    - stream_output=True : stdout/stderr 를 합쳐 실시간으로 흘리면서 동시에 캡처

    timeout 기본값은 None(무제한)이다. 패키지 매니저/배포 CLI 가 멈추면 실행 전체가 멈춘다.
    """
    logger.info("명령 실행: %s", " ".join(cmd))

    if stream_output:
        # firebase-tools 는 진행 로그를 stderr 로도 내보내므로 STDOUT 으로 합친다.
        try:
            proc = subprocess.Popen(  # noqa: S603
                list(cmd),
                cwd=cwd,
                env=dict(env) if env is not None else None,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                bufsize=1,
            )
        except FileNotFoundError as e:
            raise CommandError(
                f"필요한 명령을 찾을 수 없습니다: {cmd[0]} (node/npm/python 이 설치되어 있는지 확인하세요)",
                cmd=cmd,
            ) from e
        except OSError as e:
            raise CommandError(f"명령을 실행할 수 없습니다: {cmd[0]} ({e})", cmd=cmd) from e

        out_lines: list[str] = []
        try:
            assert proc.stdout is not None
            for line in proc.stdout:
                out_lines.append(line)
                sys.stdout.write(line)
                sys.stdout.flush()
            returncode = proc.wait(timeout=timeout)
        except subprocess.TimeoutExpired as e:
            proc.kill()
            raise CommandError(
                f"명령 실행이 {timeout}초 안에 끝나지 않았습니다: {' '.join(cmd)}",
                cmd=cmd,
                stdout="".join(out_lines),
            ) from e
        finally:
            if proc.stdout is not None:
                proc.stdout.close()

        combined = "".join(out_lines)
        if returncode != 0:
            raise CommandError(
                f"명령 실행 실패: {' '.join(cmd)} (exit={returncode}){_summarize(combined, '')}",
                cmd=cmd,
                returncode=returncode,
                stdout=combined,
            )
        return RunResult(returncode=returncode, stdout=combined, stderr="")

    try:
        result = subprocess.run(
            list(cmd),
            check=True,
            capture_output=True,
            text=True,
            timeout=timeout,
            cwd=cwd,
            env=dict(env) if env is not None else None,
        )
    except FileNotFoundError as e:
        raise CommandError(
            f"필요한 명령을 찾을 수 없습니다: {cmd[0]} (node/npm/python 이 설치되어 있는지 확인하세요)",
            cmd=cmd,
        ) from e
    except OSError as e:
        raise CommandError(f"명령을 실행할 수 없습니다: {cmd[0]} ({e})", cmd=cmd) from e
    except subprocess.TimeoutExpired as e:
        raise CommandError(
            f"명령 실행이 {timeout}초 안에 끝나지 않았습니다: {' '.join(cmd)}",
            cmd=cmd,
        ) from e
    except subprocess.CalledProcessError as e:
        raise CommandError(
            f"명령 실행 실패: {' '.join(cmd)} (exit={e.returncode}){_summarize(e.stdout, e.stderr)}",
            cmd=cmd,
            returncode=e.returncode,
            stdout=e.stdout or "",
            stderr=e.stderr or "",
        ) from e

    if result.stdout:
        logger.debug("명령 stdout: %s", shorten(result.stdout.strip(), width=2000))
    if result.stderr:
        logger.debug("명령 stderr: %s", shorten(result.stderr.strip(), width=2000))
    return RunResult(returncode=result.returncode, stdout=result.stdout or "", stderr=result.stderr or "")
