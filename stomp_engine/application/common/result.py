"""Attempt Result.

연결 시도 1회의 결과를 값으로 표현합니다.
EngineLoop의 재시도/failover 결정은 이 값만 보고 내려집니다.
"""

from __future__ import annotations

from dataclasses import dataclass

from stomp_engine.domain.enums import AttemptStatus


@dataclass(frozen=True)
class AttemptResult:
    """연결 시도 결과.

    핵심 원칙:
    - 시도 중 발생한 예외는 루프 밖으로 전파되지 않고 AttemptResult로 변환
    - 다음 행동은 policy.decide_next()가 결정
    """

    status: AttemptStatus
    message: str | None = None

    @property
    def is_stopped(self) -> bool:
        """종료 체크포인트 도달 여부."""
        return self.status == AttemptStatus.STOPPED

    @property
    def is_refused(self) -> bool:
        """연결 거부 여부 (retry delay 대상)."""
        return self.status == AttemptStatus.CONNECT_REFUSED

    @property
    def is_connection_lost(self) -> bool:
        """연결 이후 끊김 여부."""
        return self.status == AttemptStatus.CONNECTION_LOST

    @classmethod
    def stopped(cls) -> AttemptResult:
        """종료 결과 생성."""
        return cls(status=AttemptStatus.STOPPED)

    @classmethod
    def connect_failed(cls, message: str) -> AttemptResult:
        """연결 실패 결과 생성."""
        return cls(status=AttemptStatus.CONNECT_FAILED, message=message)

    @classmethod
    def connect_refused(cls, message: str) -> AttemptResult:
        """연결 거부 결과 생성."""
        return cls(status=AttemptStatus.CONNECT_REFUSED, message=message)

    @classmethod
    def subscribe_failed(cls, message: str) -> AttemptResult:
        """SUBSCRIBE 실패 결과 생성."""
        return cls(status=AttemptStatus.SUBSCRIBE_FAILED, message=message)

    @classmethod
    def connection_lost(cls, message: str) -> AttemptResult:
        """연결 끊김 결과 생성."""
        return cls(status=AttemptStatus.CONNECTION_LOST, message=message)
