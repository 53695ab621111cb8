"""Request Adapter.

STOMP 프레임 ↔ 애플리케이션 요청/응답 변환을 담당합니다.

큐 이름 규칙:
    구독:  /queue/<route>
    응답:  /remote-temp-queue/<X-Reply-Address 값>
"""

from __future__ import annotations

import re
from typing import Iterable

from stomp_engine.domain.entities import (
    ApplicationRequest,
    ApplicationResponse,
    InboundFrame,
    OutboundFrame,
)
from stomp_engine.domain.exceptions import MalformedDestinationError

QUEUE_PREFIX = "/queue/"
REPLY_QUEUE_PREFIX = "/remote-temp-queue/"

_QUEUE_PATTERN = re.compile(r"^/queue/(.+)$")


class RequestAdapter:
    """프레임/요청 어댑터.

    본문은 파싱하지 않습니다 (직렬화는 애플리케이션 책임).
    """

    @staticmethod
    def destinations(routes: Iterable[str]) -> list[str]:
        """route 목록에서 구독 destination 집합 생성.

        빈 route는 제외하고, 중복 route는 하나로 합칩니다.

        Args:
            routes: 애플리케이션에 등록된 route 이름

        Returns:
            정렬된 ``/queue/<route>`` 목록
        """
        return sorted({QUEUE_PREFIX + route for route in routes if route})

    def to_request(self, frame: InboundFrame, broker: str | None = None) -> ApplicationRequest:
        """MESSAGE 프레임 → ApplicationRequest.

        Args:
            frame: 수신 MESSAGE 프레임
            broker: 프레임을 전달한 브로커 (``host:port``)

        Returns:
            ApplicationRequest

        Raises:
            MalformedDestinationError: destination이 ``/queue/<route>`` 형식이 아님
        """
        destination = frame.destination
        match = _QUEUE_PATTERN.match(destination or "")
        if match is None:
            raise MalformedDestinationError(destination)

        return ApplicationRequest(
            route=match.group(1),
            body=frame.body,
            broker=broker,
            headers=dict(frame.headers),
        )

    def to_reply_frame(self, response: ApplicationResponse) -> OutboundFrame | None:
        """ApplicationResponse → 응답 프레임.

        reply 헤더가 없으면 응답이 필요 없으므로 None.
        """
        reply_to = response.reply_to
        if reply_to is None:
            return None

        return OutboundFrame(
            destination=REPLY_QUEUE_PREFIX + reply_to,
            body=response.body,
        )
