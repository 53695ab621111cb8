"""STOMP Broker Connection.

stomp.py 기반 BrokerConnection 구현체입니다.

stomp.py는 수신 스레드에서 listener 콜백을 호출합니다.
listener는 프레임을 inbox 큐에 넣기만 하고, EngineLoop는 receive_frame()에서
inbox를 블로킹으로 꺼내므로 프레임 처리는 루프 스레드 하나에서만 일어납니다.

    stomp.py receiver thread                EngineLoop thread
    ────────────────────────                ─────────────────
    on_message / on_error  ──▶ inbox ──▶    receive_frame()
    on_disconnected        ──▶ _DISCONNECTED → ConnectionLost
"""

from __future__ import annotations

import logging
import queue
import socket
from typing import TYPE_CHECKING, Any, Iterable, Mapping

import stomp
from stomp.exception import ConnectFailedException, StompException

from stomp_engine.domain.entities import InboundFrame
from stomp_engine.domain.enums import FrameCommand
from stomp_engine.domain.exceptions import ConnectError, ConnectionLost, SubscribeError

if TYPE_CHECKING:
    from stomp_engine.domain.entities import EngineConfig, ServerEndpoint

logger = logging.getLogger(__name__)

LISTENER_NAME = "stomp-engine"

REFUSAL_CHECK_TIMEOUT = 5.0

# SUBSCRIBE마다 엔진이 직접 지정하는 헤더
_RESERVED_SUBSCRIBE_HEADERS = frozenset({"destination", "ack", "id"})

_DISCONNECTED = object()


def _is_refused(endpoint: "ServerEndpoint") -> bool:
    """엔드포인트가 연결을 거부하는지 확인 (DNS 실패, unreachable, timeout은 False)."""
    try:
        with socket.create_connection((endpoint.hostname, endpoint.port), timeout=REFUSAL_CHECK_TIMEOUT):
            return False
    except ConnectionRefusedError:
        return True
    except OSError:
        return False


def to_inbound_frame(frame: Any) -> InboundFrame:
    """stomp.py Frame → InboundFrame."""
    body = frame.body
    if body is None:
        body = b""
    elif isinstance(body, str):
        body = body.encode("utf-8")

    return InboundFrame(
        command=FrameCommand.parse(frame.cmd or ""),
        headers=dict(frame.headers or {}),
        body=body,
        raw_command=frame.cmd or "",
    )


class InboxListener(stomp.ConnectionListener):
    """수신 프레임을 inbox 큐로 넘기는 listener.

    CONNECTED 이전에 받은 ERROR 프레임은 브로커의 CONNECT 거절로 기록합니다.
    """

    def __init__(self, inbox: queue.Queue) -> None:
        self._inbox = inbox
        self.connected = False
        self.rejection: str | None = None

    def on_connected(self, frame: Any) -> None:
        self.connected = True

    def on_message(self, frame: Any) -> None:
        self._inbox.put(to_inbound_frame(frame))

    def on_error(self, frame: Any) -> None:
        inbound = to_inbound_frame(frame)
        if not self.connected:
            self.rejection = inbound.error_message or "CONNECT rejected"
        self._inbox.put(inbound)

    def on_receipt(self, frame: Any) -> None:
        self._inbox.put(to_inbound_frame(frame))

    def on_disconnected(self) -> None:
        self._inbox.put(_DISCONNECTED)

    def on_heartbeat_timeout(self) -> None:
        self._inbox.put(_DISCONNECTED)


class StompBrokerConnection:
    """STOMP 1.1 브로커 연결.

    재연결은 하지 않습니다 (reconnect_attempts_max=1).
    재시도와 failover는 EngineLoop가 결정합니다.
    """

    def __init__(self, config: "EngineConfig") -> None:
        """Initialize.

        Args:
            config: 엔진 설정 (인증 정보, UTF-8 변환 여부)
        """
        self._config = config
        self._inbox: queue.Queue = queue.Queue()
        self._connection: stomp.Connection | None = None
        self._endpoint: ServerEndpoint | None = None

    def connect(self, endpoint: "ServerEndpoint") -> None:
        """브로커 연결 (CONNECTED 수신까지 대기).

        Raises:
            ConnectError: 연결 실패 (refused=True: 브로커가 연결을 받지 않음)
        """
        broker = endpoint.describe()
        connection = stomp.Connection(
            host_and_ports=[(endpoint.hostname, endpoint.port)],
            reconnect_attempts_max=1,
            auto_decode=False,
        )
        listener = InboxListener(self._inbox)
        connection.set_listener(LISTENER_NAME, listener)

        try:
            connection.connect(
                username=self._config.login,
                passcode=self._config.passcode,
                wait=True,
            )
        except ConnectFailedException as e:
            self._abandon(connection, broker)
            if listener.rejection is not None:
                # 소켓은 열렸고 브로커가 CONNECT에 ERROR로 응답 (인증 실패 등)
                raise ConnectError(f"{broker} rejected CONNECT: {listener.rejection}") from e
            # stomp.py는 소켓 오류 종류를 구분하지 않으므로 직접 확인
            if _is_refused(endpoint):
                raise ConnectError(f"Connection refused by {broker}", refused=True) from e
            raise ConnectError(f"Cannot connect to {broker}") from e
        except ConnectionRefusedError as e:
            self._abandon(connection, broker)
            raise ConnectError(f"Connection refused by {broker}", refused=True) from e
        except (OSError, StompException) as e:
            self._abandon(connection, broker)
            raise ConnectError(f"Cannot connect to {broker}: {e}") from e

        self._connection = connection
        self._endpoint = endpoint

    def subscribe(self, destinations: Iterable[str], headers: Mapping[str, Any]) -> None:
        """destination마다 ``ack: client``로 SUBSCRIBE.

        subscription id는 destination 이름입니다.

        Raises:
            SubscribeError: headers가 mapping이 아님
            ConnectError: SUBSCRIBE 전송 실패
        """
        if not isinstance(headers, Mapping):
            raise SubscribeError("subscribe headers must be a key-value mapping")

        extra = {
            str(key): str(value)
            for key, value in headers.items()
            if key not in _RESERVED_SUBSCRIBE_HEADERS
        }
        connection = self._require_connection()

        for destination in destinations:
            try:
                connection.subscribe(
                    destination=destination,
                    id=destination,
                    ack="client",
                    headers=dict(extra),
                )
            except (OSError, StompException) as e:
                raise ConnectError(f"Cannot subscribe to {destination}: {e}") from e

    def receive_frame(self) -> InboundFrame:
        """다음 프레임까지 블록 (timeout 없음).

        Raises:
            ConnectionLost: 연결 종료
        """
        self._require_connection()
        item = self._inbox.get()
        if item is _DISCONNECTED:
            raise ConnectionLost(f"Connection to {self.describe()} closed")
        return item

    def send(
        self,
        destination: str,
        body: bytes | str,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        """프레임 송신.

        utf8 설정 시 문자열 본문을 UTF-8 octet으로 변환합니다.

        Raises:
            ConnectionLost: 송신 실패
        """
        if self._config.use_utf8_encoding and isinstance(body, str):
            body = body.encode("utf-8")

        connection = self._require_connection()
        try:
            connection.send(destination=destination, body=body, headers=dict(headers or {}))
        except (OSError, StompException) as e:
            raise ConnectionLost(f"Cannot send to {destination}: {e}") from e

    def acknowledge(self, frame: InboundFrame) -> None:
        """프레임 ack (message-id + subscription).

        Raises:
            ConnectionLost: ACK 전송 실패
        """
        connection = self._require_connection()
        try:
            connection.ack(frame.message_id, frame.subscription)
        except (OSError, StompException) as e:
            raise ConnectionLost(f"Cannot ack message {frame.message_id}: {e}") from e

    def disconnect(self) -> None:
        """연결 해제 (idempotent)."""
        connection, self._connection = self._connection, None
        if connection is None:
            return
        try:
            if connection.is_connected():
                connection.disconnect()
        except (OSError, StompException) as e:
            logger.debug("Error while disconnecting", extra={"broker": self.describe(), "error": str(e)})
        finally:
            self._endpoint = None

    def describe(self) -> str | None:
        """연결된 브로커 ``host:port``."""
        return self._endpoint.describe() if self._endpoint else None

    @staticmethod
    def _abandon(connection: stomp.Connection, broker: str) -> None:
        """연결 실패 후 남은 소켓/수신 스레드 정리."""
        try:
            connection.disconnect()
        except (OSError, StompException) as e:
            logger.debug("Error while abandoning connection", extra={"broker": broker, "error": str(e)})

    def _require_connection(self) -> stomp.Connection:
        if self._connection is None:
            raise ConnectionLost("Not connected to a STOMP broker")
        return self._connection
