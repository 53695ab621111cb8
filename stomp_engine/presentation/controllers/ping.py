"""Ping Controller.

브로커 경유 헬스 체크용 컨트롤러입니다.

    /queue/ping ← {type: ping, reply_to: <token>}
    /remote-temp-queue/<token> → {status: PONG}
"""

from __future__ import annotations

from typing import Any, Mapping

from stomp_engine.application.dispatch.controller import MessageDrivenController, action
from stomp_engine.domain.entities import ApplicationRequest


class PingController(MessageDrivenController):
    """Ping 컨트롤러."""

    namespace = "ping"

    @action("ping")
    def ping(self, message: Mapping[str, Any], request: ApplicationRequest) -> dict[str, Any]:
        if message.get("type") != "ping":
            raise ValueError("not a ping request?")
        return {"status": "PONG"}
