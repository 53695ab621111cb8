"""Request Handler Port.

엔진이 호출하는 애플리케이션 경계입니다.
"""

from __future__ import annotations

from typing import Protocol

from stomp_engine.domain.entities import ApplicationRequest, ApplicationResponse


class RequestHandler(Protocol):
    """요청 핸들러 인터페이스.

    구현체:
        - Application (application/dispatch/)

    애플리케이션 오류도 예외 대신 success=False 응답으로 반환합니다.
    """

    def handle(self, request: ApplicationRequest) -> ApplicationResponse:
        """요청 처리."""
        ...

    def routes(self) -> list[str]:
        """등록된 route 이름 목록."""
        ...
