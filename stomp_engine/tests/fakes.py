"""테스트용 Fake 구현체."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from stomp_engine.domain.entities import InboundFrame, ServerEndpoint
from stomp_engine.domain.enums import FrameCommand
from stomp_engine.domain.exceptions import ConnectionLost


def make_message(
    route: str = "testcontroller",
    body: bytes = b"type: ping\n",
    message_id: str = "ID:msg-1",
    **headers: str,
) -> InboundFrame:
    """MESSAGE 프레임 생성."""
    return InboundFrame(
        command=FrameCommand.MESSAGE,
        headers={
            "destination": f"/queue/{route}",
            "message-id": message_id,
            "subscription": f"/queue/{route}",
            **headers,
        },
        body=body,
        raw_command="MESSAGE",
    )


class FakeBrokerConnection:
    """스크립트된 BrokerConnection.

    모든 호출을 ``events``에 기록합니다.
    준비된 프레임이 떨어지면 receive_frame()은 ConnectionLost를 발생시킵니다.
    """

    def __init__(
        self,
        frames: Iterable[InboundFrame] = (),
        connect_error: Exception | None = None,
        subscribe_error: Exception | None = None,
        send_error: Exception | None = None,
    ) -> None:
        self.frames = list(frames)
        self.connect_error = connect_error
        self.subscribe_error = subscribe_error
        self.send_error = send_error
        self.events: list[tuple[Any, ...]] = []
        self.endpoint: ServerEndpoint | None = None
        self.disconnects = 0

    def connect(self, endpoint: ServerEndpoint) -> None:
        self.events.append(("connect", endpoint.describe()))
        if self.connect_error is not None:
            raise self.connect_error
        self.endpoint = endpoint

    def subscribe(self, destinations: Iterable[str], headers: Mapping[str, Any]) -> None:
        self.events.append(("subscribe", list(destinations), dict(headers)))
        if self.subscribe_error is not None:
            raise self.subscribe_error

    def receive_frame(self) -> InboundFrame:
        if not self.frames:
            raise ConnectionLost("no more frames")
        frame = self.frames.pop(0)
        self.events.append(("receive", frame.message_id))
        return frame

    def send(self, destination: str, body: bytes | str, headers: Mapping[str, str] | None = None) -> None:
        self.events.append(("send", destination, body))
        if self.send_error is not None:
            raise self.send_error

    def acknowledge(self, frame: InboundFrame) -> None:
        self.events.append(("ack", frame.message_id))

    def disconnect(self) -> None:
        self.disconnects += 1
        self.events.append(("disconnect",))

    def describe(self) -> str | None:
        return self.endpoint.describe() if self.endpoint else None

    def calls(self, name: str) -> list[tuple[Any, ...]]:
        """이름이 name인 이벤트만 반환."""
        return [event for event in self.events if event[0] == name]


class ConnectionScript:
    """시도마다 다음 FakeBrokerConnection을 반환하는 factory."""

    def __init__(self, connections: Iterable[FakeBrokerConnection]) -> None:
        self._connections = list(connections)
        self.created: list[FakeBrokerConnection] = []

    def __call__(self) -> FakeBrokerConnection:
        if not self._connections:
            raise AssertionError("connection factory exhausted")
        connection = self._connections.pop(0)
        self.created.append(connection)
        return connection

    @property
    def connected_to(self) -> list[str]:
        """시도한 엔드포인트 순서."""
        return [event[1] for c in self.created for event in c.calls("connect")]
