"""Broker Connection Port.

브로커 엔드포인트 하나에 대한 연결 인터페이스입니다.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Protocol

from stomp_engine.domain.entities import InboundFrame, ServerEndpoint


class BrokerConnection(Protocol):
    """브로커 연결 인터페이스.

    구현체:
        - StompBrokerConnection (infrastructure/messaging/)
    """

    def connect(self, endpoint: ServerEndpoint) -> None:
        """연결 수립.

        Raises:
            ConnectError: 네트워크 실패 (connection refused 포함)
        """
        ...

    def subscribe(self, destinations: Iterable[str], headers: Mapping[str, Any]) -> None:
        """destination마다 client-ack 모드로 SUBSCRIBE.

        Raises:
            SubscribeError: headers가 mapping이 아님
        """
        ...

    def receive_frame(self) -> InboundFrame:
        """프레임이 도착할 때까지 블록 (timeout 없음).

        Raises:
            ConnectionLost: transport가 닫히거나 오류 발생
        """
        ...

    def send(self, destination: str, body: bytes | str, headers: Mapping[str, str] | None = None) -> None:
        """프레임 송신."""
        ...

    def acknowledge(self, frame: InboundFrame) -> None:
        """수신 프레임 소비 확인 (원본 프레임의 delivery identity 사용)."""
        ...

    def disconnect(self) -> None:
        """transport 해제 (idempotent)."""
        ...

    def describe(self) -> str | None:
        """연결된 브로커 ``host:port`` (미연결 시 None)."""
        ...
