"""Frame Dispatcher.

프레임 명령에 따라 처리 경로를 고릅니다. 프레임마다 독립적으로 라우팅합니다.

    MESSAGE → ConsumerAdapter.on_message
    ERROR   → message 헤더 로깅 (재시도/종료 없음)
    기타    → debug 로깅 후 버림
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from stomp_engine.domain.enums import FrameCommand

if TYPE_CHECKING:
    from stomp_engine.application.common.ports import BrokerConnection
    from stomp_engine.domain.entities import InboundFrame
    from stomp_engine.presentation.adapters.consumer_adapter import ConsumerAdapter

logger = logging.getLogger(__name__)


class FrameDispatcher:
    """STOMP 프레임 디스패처."""

    def __init__(self, consumer_adapter: "ConsumerAdapter") -> None:
        self._consumer_adapter = consumer_adapter

    def dispatch(self, frame: "InboundFrame", connection: "BrokerConnection") -> None:
        """프레임 라우팅."""
        if frame.command is FrameCommand.MESSAGE:
            self._consumer_adapter.on_message(frame, connection)
        elif frame.command is FrameCommand.ERROR:
            self._on_error(frame)
        else:
            logger.debug(
                "Got unknown STOMP command",
                extra={"command": frame.raw_command or frame.command.value},
            )

    def _on_error(self, frame: "InboundFrame") -> None:
        # 연결은 계속 사용 가능하다고 가정 (끊겼다면 다음 receive에서 ConnectionLost)
        logger.warning(
            "Got STOMP error frame",
            extra={"error_message": frame.error_message},
        )
