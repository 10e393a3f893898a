"""
manifest
--------

firebase.json 을 읽고 functions[].source 디렉토리 목록을 뽑는 모듈.
"""

from __future__ import annotations

import json
import os
from typing import Any, List

from .errors import ManifestParseError, ManifestShapeError
from .logging_utils import get_logger
from .result import Err, Ok, Result


logger = get_logger(__name__)


MANIFEST_FILENAME = "firebase.json"


def manifest_path(base_dir: str) -> str:
    return os.path.join(base_dir, MANIFEST_FILENAME)


def load_manifest(base_dir: str = ".") -> Result[Any]:
    """
    base_dir/firebase.json 을 파싱한다.
    원본 예외는 로그로만 남기고, 사용자에게는 고정 메시지를 돌려준다.
    """
    path = manifest_path(base_dir)
    logger.info("'%s' 파싱 중", MANIFEST_FILENAME)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error("firebase.json 파싱 실패: %s", e)
        return Err(ManifestParseError(f"Could not parse {MANIFEST_FILENAME}"))
    return Ok(data)


def get_function_directories(data: Any) -> Result[List[str]]:
    """
    functions 배열의 각 원소에서 source 를 꺼낸다.
    순서는 manifest 순서 그대로, 중복도 그대로 둔다.
    """
    logger.info("함수 소스 디렉토리 목록 확인")

    functions = data.get("functions") if isinstance(data, dict) else None
    if not isinstance(functions, list):
        logger.error("functions 필드가 배열이 아닙니다: %r", type(functions).__name__)
        return Err(
            ManifestShapeError(
                f"Unexpected data shape in {MANIFEST_FILENAME}: 'functions' must be an array"
            )
        )

    directories: List[str] = []
    for item in functions:
        source = item.get("source") if isinstance(item, dict) else None
        if not isinstance(source, str):
            logger.error("함수 source 가 문자열이 아닙니다: %r", item)
            return Err(
                ManifestShapeError(f"Could not find function source in {MANIFEST_FILENAME}")
            )
        directories.append(source)

    return Ok(directories)


def read_function_directories(base_dir: str = ".") -> Result[List[str]]:
    loaded = load_manifest(base_dir)
    if isinstance(loaded, Err):
        return loaded
    return get_function_directories(loaded.value)
