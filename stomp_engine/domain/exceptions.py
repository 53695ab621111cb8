"""STOMP Engine Exceptions.

에러 분류:
    ConfigError               서버 목록 오류 → 시작 시 치명적, 재시도 없음
    ConnectError              연결 실패 (refused 포함) → 재시도 / failover
    ConnectionLost            수신/송신 중 연결 끊김 → failover
    SubscribeError            SUBSCRIBE 헤더 형식 오류 → 실패한 시도로 집계
    MalformedDestinationError destination 헤더가 /queue/<route> 형식이 아님
    RouteNotFoundError        등록되지 않은 route
    ActionNotFoundError       컨트롤러에 없는 메시지 type
"""

from __future__ import annotations


class EngineError(Exception):
    """엔진 기본 예외."""

    def __init__(self, message: str = "STOMP engine error") -> None:
        self.message = message
        super().__init__(message)


class ConfigError(EngineError):
    """잘못된 설정 (빈 서버 목록 등)."""


class ConnectError(EngineError):
    """브로커 연결 실패."""

    def __init__(self, message: str, refused: bool = False) -> None:
        self.refused = refused
        super().__init__(message)


class ConnectionLost(EngineError):
    """연결된 transport가 닫히거나 오류 발생."""


class SubscribeError(EngineError):
    """SUBSCRIBE 헤더가 key-value mapping이 아님."""


class MalformedDestinationError(EngineError):
    """destination 헤더가 큐 경로 형식과 맞지 않음."""

    def __init__(self, destination: str | None) -> None:
        self.destination = destination
        super().__init__(f"Malformed destination: {destination!r}")


class RouteNotFoundError(EngineError):
    """route에 등록된 컨트롤러 없음."""

    def __init__(self, route: str) -> None:
        self.route = route
        super().__init__(f"No controller registered for route: {route}")


class ActionNotFoundError(EngineError):
    """메시지 type에 해당하는 action 없음."""

    def __init__(self, namespace: str, message_type: str) -> None:
        self.namespace = namespace
        self.message_type = message_type
        super().__init__(f"No action {message_type!r} in controller {namespace!r}")
