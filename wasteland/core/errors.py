"""게임 에러 분류

모든 에러는 복구 가능하다. 인터프리터가 잡아서 서술로 바꾸고,
상태는 변경되지 않은 채로 남는다 (거절된 커맨드는 비용이 없다).
"""

from __future__ import annotations


class GameError(Exception):
    """커맨드 처리 중 발생하는 복구 가능한 에러의 기반 클래스"""

    severity = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UserInputError(GameError):
    """알 수 없는 커맨드, 대상 없음, 잘못된 방향"""


class PreconditionError(GameError):
    """무게 초과, 출구 조건 미충족, 상황에 맞지 않는 아이템"""


class PersistenceError(GameError):
    """세이브 데이터 없음 또는 파싱 불가"""


class ContentError(ValueError):
    """월드 콘텐츠 스키마 위반. 로드 시점에만 발생."""
