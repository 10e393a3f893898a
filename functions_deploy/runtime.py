"""
runtime
-------

함수 디렉토리의 런타임(Python / Node) 판별.

main.py 가 있으면 Python, 없으면 무조건 Node(JS/TS)로 본다.
다른 스택도 Node 로 분류되며 별도 에러 경로는 없다.
"""

from __future__ import annotations

import os
from enum import Enum


PYTHON_MARKER_FILE = "main.py"


class Runtime(str, Enum):
    PYTHON = "python"
    NODE = "node"


def detect_runtime(directory: str) -> Runtime:
    if os.path.isfile(os.path.join(directory, PYTHON_MARKER_FILE)):
        return Runtime.PYTHON
    return Runtime.NODE
