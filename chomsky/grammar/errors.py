"""chomsky 코어의 예외 타입"""

from __future__ import annotations
from typing     import Any


class NotFoundError(KeyError):
    """가변 생성 규칙 관계에서 존재하지 않는 head를 참조했을 때."""

    def __init__(self, head: Any, message: str = "no such head found on production rules"):
        super().__init__(message)
        self.head = head
        self.message = message

    def __str__(self) -> str:
        head = " ".join(str(s) for s in self.head) if isinstance(self.head, tuple) else str(self.head)
        return f"{self.message}: {head}"


class RecordError(ValueError):
    """직렬화 레코드의 구조 자체가 잘못되어 Grammar를 만들 수 없을 때."""
