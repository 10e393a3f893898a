"""
errors
------

배포 파이프라인의 각 단계가 돌려주는 에러 타입 모음.

모든 에러는 FunctionsDeployError 를 상속하며, 단계 경계에서 Err(...) 로
감싸져 orchestrator 까지 전달된다. 재시도 대상인 에러는 없다.
"""

from __future__ import annotations

from typing import Optional


class FunctionsDeployError(RuntimeError):
    """파이프라인 에러 공통 베이스."""


class DirectoryGuardError(FunctionsDeployError):
    """entryPoint 디렉토리가 없거나 firebase.json 이 없을 때."""


class ManifestParseError(FunctionsDeployError):
    """firebase.json 을 읽거나 JSON 으로 파싱할 수 없을 때."""


class ManifestShapeError(FunctionsDeployError):
    """functions / source 필드가 없거나 타입이 맞지 않을 때."""


class DirectoryNotFoundError(FunctionsDeployError):
    def __init__(self, directory: str) -> None:
        super().__init__(f"No directory '{directory}' could be found.")
        self.directory = directory


class DirectoryChangeError(FunctionsDeployError):
    def __init__(self, directory: str, reason: Optional[str] = None) -> None:
        message = f"Error changing to directory: {directory}."
        if reason:
            message = f"{message} {reason}"
        super().__init__(message)
        self.directory = directory


class InstallCommandError(FunctionsDeployError):
    def __init__(self, directory: str, message: str) -> None:
        super().__init__(message)
        self.directory = directory


class DependencyInstallError(FunctionsDeployError):
    """디렉토리 단위 실패를 어느 디렉토리였는지와 함께 감싼다. cause 에 원래 에러가 있다."""

    def __init__(self, directory: str, cause: FunctionsDeployError) -> None:
        super().__init__(
            f"Could not install dependencies in directory {directory}: {cause}"
        )
        self.directory = directory
        self.cause = cause


class CredentialWriteError(FunctionsDeployError):
    """서비스 계정 시크릿을 임시 파일로 만들지 못했을 때."""


class DeploymentError(FunctionsDeployError):
    def __init__(self, raw_output: str) -> None:
        super().__init__(raw_output)
        self.raw_output = raw_output
