"""STOMP Engine Domain Enums.

프레임 명령, 엔진 상태, 연결 시도 결과를 정의합니다.
"""

from enum import Enum, auto


class FrameCommand(str, Enum):
    """브로커에서 수신한 프레임 명령."""

    MESSAGE = "MESSAGE"
    ERROR = "ERROR"
    RECEIPT = "RECEIPT"
    OTHER = "OTHER"

    @classmethod
    def parse(cls, command: str) -> "FrameCommand":
        """명령 문자열을 FrameCommand로 변환 (알 수 없으면 OTHER)."""
        try:
            return cls(command.upper())
        except ValueError:
            return cls.OTHER


class EngineState(str, Enum):
    """EngineLoop 상태.

    SELECTING_SERVER → CONNECTING → SUBSCRIBED → RECEIVING
        → (DISPATCHING → RECEIVING)* → DISCONNECTING → SELECTING_SERVER

    STOPPED는 RECEIVING/DISPATCHING 사이의 종료 체크포인트에서만 도달합니다.
    """

    SELECTING_SERVER = "selecting_server"
    CONNECTING = "connecting"
    SUBSCRIBED = "subscribed"
    RECEIVING = "receiving"
    DISPATCHING = "dispatching"
    DISCONNECTING = "disconnecting"
    STOPPED = "stopped"


class AttemptStatus(Enum):
    """연결 시도 1회의 종료 사유.

    - STOPPED: 종료 체크포인트 도달 → 루프 종료
    - CONNECT_FAILED: 연결 실패 → 재시도 / failover
    - CONNECT_REFUSED: 연결 거부 → 대기 후 재시도 / failover
    - SUBSCRIBE_FAILED: SUBSCRIBE 헤더 오류 → 재시도 / failover
    - CONNECTION_LOST: 수신/디스패치 중 연결 끊김 → failover
    """

    STOPPED = auto()
    CONNECT_FAILED = auto()
    CONNECT_REFUSED = auto()
    SUBSCRIBE_FAILED = auto()
    CONNECTION_LOST = auto()


class LoopAction(Enum):
    """연결 시도 이후 EngineLoop가 취할 행동."""

    STOP = auto()
    RETRY = auto()
    RETRY_AFTER_DELAY = auto()
    FAILOVER = auto()
    FAILOVER_AFTER_DELAY = auto()

    @property
    def sleeps(self) -> bool:
        """다음 시도 전 retry delay 대기 여부."""
        return self in (LoopAction.RETRY_AFTER_DELAY, LoopAction.FAILOVER_AFTER_DELAY)

    @property
    def fails_over(self) -> bool:
        """다음 서버로 넘어가는지 여부."""
        return self in (LoopAction.FAILOVER, LoopAction.FAILOVER_AFTER_DELAY)
