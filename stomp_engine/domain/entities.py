"""STOMP Engine Domain Entities.

엔진이 다루는 값 객체입니다.
엔드포인트/설정은 시작 시 한 번 만들어지고 이후 변경되지 않습니다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from stomp_engine.domain.enums import EngineState, FrameCommand

REPLY_ADDRESS_HEADER = "X-Reply-Address"


@dataclass(frozen=True)
class ServerEndpoint:
    """브로커 엔드포인트.

    Attributes:
        hostname: 브로커 호스트
        port: STOMP 포트
        subscribe_headers: 이 엔드포인트 전용 SUBSCRIBE 헤더 (검증 전 원본 값)
    """

    hostname: str
    port: int
    subscribe_headers: Any = None

    def describe(self) -> str:
        """``host:port`` 문자열."""
        return f"{self.hostname}:{self.port}"


@dataclass(frozen=True)
class EngineConfig:
    """엔진 설정.

    Attributes:
        servers: 정규화된 엔드포인트 목록 (순서 유지)
        tries_per_server: 엔드포인트당 연결 시도 횟수 (≥1)
        retry_delay_seconds: connection refused 시 대기 시간
        use_utf8_encoding: 응답 본문(str)을 UTF-8 octet으로 변환해 전송
        subscribe_headers: 모든 SUBSCRIBE에 병합되는 추가 헤더
        login: CONNECT 사용자 (optional)
        passcode: CONNECT 비밀번호 (optional)
    """

    servers: tuple[ServerEndpoint, ...]
    tries_per_server: int = 1
    retry_delay_seconds: int = 15
    use_utf8_encoding: bool = False
    subscribe_headers: Mapping[str, Any] = field(default_factory=dict)
    login: str | None = None
    passcode: str | None = None


@dataclass(frozen=True)
class InboundFrame:
    """수신 프레임 (receive 1회당 하나)."""

    command: FrameCommand
    headers: Mapping[str, str]
    body: bytes = b""
    raw_command: str = ""

    @property
    def destination(self) -> str | None:
        """MESSAGE 프레임의 destination 헤더."""
        return self.headers.get("destination")

    @property
    def message_id(self) -> str | None:
        """브로커가 부여한 delivery identity."""
        return self.headers.get("message-id")

    @property
    def subscription(self) -> str | None:
        """메시지를 전달한 subscription id."""
        return self.headers.get("subscription")

    @property
    def error_message(self) -> str | None:
        """ERROR 프레임의 message 헤더."""
        return self.headers.get("message")


@dataclass(frozen=True)
class OutboundFrame:
    """송신 프레임 (reply 1회당 하나)."""

    destination: str
    body: bytes | str
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ApplicationRequest:
    """애플리케이션 요청.

    Attributes:
        route: destination에서 추출한 논리 route
        body: 프레임 본문 그대로 (파싱하지 않음)
        broker: 메시지를 전달한 브로커 (``host:port``)
        headers: 원본 프레임 헤더
    """

    route: str
    body: bytes
    broker: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ApplicationResponse:
    """애플리케이션 응답.

    ``X-Reply-Address`` 헤더가 있으면 해당 temp queue로 응답을 보냅니다.
    """

    body: bytes | str
    headers: Mapping[str, str] = field(default_factory=dict)
    success: bool = True

    @property
    def reply_to(self) -> str | None:
        """reply destination 토큰 (없으면 응답 불필요)."""
        value = self.headers.get(REPLY_ADDRESS_HEADER)
        return value or None


@dataclass
class RunState:
    """EngineLoop 전용 실행 상태.

    EngineLoop만 읽고 씁니다.
    종료 요청은 여기가 아닌 StopToken으로 전달됩니다.
    """

    server_index: int = 0
    try_count: int = 0
    state: EngineState = EngineState.SELECTING_SERVER
    attempts: int = 0
    frames_handled: int = 0
