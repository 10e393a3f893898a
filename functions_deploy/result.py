"""
result
------

단계 간 성공/실패를 전달하는 Result 타입.

예외를 단계 경계 밖으로 던지지 않고, Ok(value) 또는 Err(error) 둘 중 하나를
돌려준다. 호출 측은 isinstance 또는 is_ok() 로 분기한다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from .errors import FunctionsDeployError


T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    error: FunctionsDeployError

    def is_ok(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return str(self.error)


Result = Union[Ok[T], Err]
