"""
credentials
-----------

서비스 계정 시크릿을 임시 파일로 만들어 firebase-tools 에 넘기는 모듈.

입력값이 Secret Manager 참조(sm://... 또는 projects/.../secrets/...)이면
먼저 Secret Manager 에서 payload 를 읽어온다. 그 외에는 입력값을 그대로 쓴다.
"""

from __future__ import annotations

import os
import re
import tempfile
from typing import Optional

from google.api_core.exceptions import GoogleAPICallError, NotFound
from google.auth.exceptions import GoogleAuthError
from google.cloud import secretmanager

from .errors import CredentialWriteError
from .logging_utils import get_logger
from .result import Err, Ok, Result


logger = get_logger(__name__)


CREDENTIAL_FILE_PREFIX = "gac-"
CREDENTIAL_FILE_SUFFIX = ".json"

_SM_SHORT_RE = re.compile(r"^sm://(?P<project>[^/]+)/(?P<secret>[^/]+)(?:/(?P<version>[^/]+))?$")
_SM_RESOURCE_RE = re.compile(r"^projects/[^/]+/secrets/[^/]+/versions/[^/]+$")


def secret_version_name(value: str) -> Optional[str]:
    """
    Secret Manager 참조이면 secret version 리소스 이름을, 아니면 None 을 돌려준다.
    """
    candidate = value.strip()
    if _SM_RESOURCE_RE.match(candidate):
        return candidate
    m = _SM_SHORT_RE.match(candidate)
    if m:
        version = m.group("version") or "latest"
        return f"projects/{m.group('project')}/secrets/{m.group('secret')}/versions/{version}"
    return None


def resolve_service_account(value: str) -> Result[str]:
    name = secret_version_name(value)
    if name is None:
        return Ok(value)

    logger.info("Secret Manager 에서 서비스 계정 키를 읽습니다: %s", name)
    try:
        client = secretmanager.SecretManagerServiceClient()
        response = client.access_secret_version(name=name)
    except NotFound:
        return Err(CredentialWriteError(f"Service account secret not found: {name}"))
    except GoogleAPICallError as e:
        logger.error("Secret Manager 호출 실패: %s", e)
        return Err(CredentialWriteError(f"Could not read service account secret {name}: {e}"))
    except GoogleAuthError as e:
        logger.error("Secret Manager 인증 실패: %s", e)
        return Err(CredentialWriteError(f"Could not authenticate to read service account secret {name}: {e}"))

    return Ok(response.payload.data.decode("utf-8"))


def create_credential_file(secret: str) -> Result[str]:
    """
    시크릿을 그대로(가공 없이) 새 임시 파일에 쓰고 경로를 돌려준다.
    호출마다 다른 파일이 만들어진다.
    """
    try:
        fd, path = tempfile.mkstemp(prefix=CREDENTIAL_FILE_PREFIX, suffix=CREDENTIAL_FILE_SUFFIX)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(secret)
    except OSError as e:
        logger.error("임시 credential 파일 생성 실패: %s", e)
        return Err(CredentialWriteError(f"Could not write credentials file: {e}"))

    logger.debug("credential 파일 생성: %s", path)
    return Ok(path)


def remove_credential_file(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        return
    except OSError as e:
        logger.debug("credential 파일 삭제 실패: %s (%s)", path, e)
