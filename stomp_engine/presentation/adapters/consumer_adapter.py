"""Consumer Adapter.

MESSAGE 프레임 처리 경로를 담당하는 프로토콜 어댑터입니다.

InboundFrame (MESSAGE)
        │
        ▼
RequestAdapter.to_request
        │
        ▼
RequestHandler.handle (Application)
        │
        │ ApplicationResponse
        ▼
RequestAdapter.to_reply_frame ──▶ connection.send (reply 헤더가 있을 때만)
        │
        ▼
connection.acknowledge (항상 마지막, 프레임당 한 번)

send/ack 중 발생한 ConnectionLost는 그대로 전파됩니다.
이 경우 프레임은 ack되지 않으며 브로커가 재전달합니다.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from stomp_engine.domain.exceptions import MalformedDestinationError
from stomp_engine.presentation.adapters.request_adapter import RequestAdapter

if TYPE_CHECKING:
    from stomp_engine.application.common.ports import BrokerConnection, RequestHandler
    from stomp_engine.domain.entities import InboundFrame

logger = logging.getLogger(__name__)


class ConsumerAdapter:
    """Consumer 어댑터.

    요청을 애플리케이션으로 디스패칭하고,
    응답 전송 후 원본 프레임을 ack합니다.
    """

    def __init__(
        self,
        handler: "RequestHandler",
        request_adapter: RequestAdapter | None = None,
    ) -> None:
        """Initialize.

        Args:
            handler: 애플리케이션 요청 핸들러 (DI)
            request_adapter: 프레임 변환기
        """
        self._handler = handler
        self._request_adapter = request_adapter or RequestAdapter()
        self._processed = 0
        self._replied = 0
        self._dropped = 0

    def on_message(self, frame: "InboundFrame", connection: "BrokerConnection") -> None:
        """MESSAGE 프레임 처리.

        Args:
            frame: 수신 MESSAGE 프레임
            connection: 프레임을 수신한 연결
        """
        # 1. Frame → Request
        try:
            request = self._request_adapter.to_request(frame, broker=connection.describe())
        except MalformedDestinationError as e:
            # 디스패치할 route 없음 → 버림
            logger.error(
                "Malformed destination, dropping message",
                extra={"destination": e.destination, "message_id": frame.message_id},
            )
            connection.acknowledge(frame)
            self._dropped += 1
            return

        # 2. Dispatch to Application
        try:
            response = self._handler.handle(request)
        except Exception:
            logger.exception(
                "Request handler failed without a response",
                extra={"route": request.route, "message_id": frame.message_id},
            )
            connection.acknowledge(frame)
            self._dropped += 1
            return

        if not response.success:
            logger.debug(
                "Application error response",
                extra={"route": request.route, "message_id": frame.message_id},
            )

        # 3. Reply (헤더가 있을 때만)
        reply = self._request_adapter.to_reply_frame(response)
        if reply is not None:
            connection.send(reply.destination, reply.body, reply.headers)
            self._replied += 1

        # 4. ack (reply 이후)
        connection.acknowledge(frame)
        self._processed += 1

        logger.debug(
            "Message processed",
            extra={
                "route": request.route,
                "message_id": frame.message_id,
                "replied": reply is not None,
            },
        )

    @property
    def stats(self) -> dict[str, int]:
        """통계 반환."""
        return {
            "processed": self._processed,
            "replied": self._replied,
            "dropped": self._dropped,
        }
