"""Application.

route 이름 → 컨트롤러 매핑입니다. 시작 시 한 번 구성되고 이후 변경되지 않습니다.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from stomp_engine.application.dispatch.controller import MessageDrivenController, error_response
from stomp_engine.application.dispatch.serializer import Serializer, YamlSerializer
from stomp_engine.domain.entities import ApplicationRequest, ApplicationResponse
from stomp_engine.domain.exceptions import ConfigError, RouteNotFoundError

logger = logging.getLogger(__name__)


class Application:
    """RequestHandler 구현체.

    요청의 route로 컨트롤러를 찾아 처리를 위임합니다.
    """

    def __init__(
        self,
        controllers: Iterable[MessageDrivenController],
        serializer: Serializer | None = None,
    ) -> None:
        """Initialize.

        Args:
            controllers: 등록할 컨트롤러
            serializer: route를 찾지 못했을 때의 오류 응답 직렬화기

        Raises:
            ConfigError: 같은 namespace의 컨트롤러가 둘 이상
        """
        self._serializer = serializer or YamlSerializer()
        self._controllers: dict[str, MessageDrivenController] = {}
        for controller in controllers:
            if controller.namespace in self._controllers:
                raise ConfigError(f"Duplicate controller namespace: {controller.namespace!r}")
            self._controllers[controller.namespace] = controller

    def routes(self) -> list[str]:
        """구독할 route 목록 (빈 namespace 제외)."""
        return [namespace for namespace in self._controllers if namespace]

    def controller(self, route: str) -> MessageDrivenController | None:
        return self._controllers.get(route) if route else None

    def handle(self, request: ApplicationRequest) -> ApplicationResponse:
        """요청 처리."""
        controller = self.controller(request.route)
        if controller is None:
            logger.warning("No controller for route", extra={"route": request.route})
            return error_response(
                self._serializer,
                RouteNotFoundError(request.route),
                self._peek_reply_to(request.body),
            )
        return controller.handle(request)

    def _peek_reply_to(self, body: bytes) -> Any:
        # 처리할 수 없는 요청이라도 호출자에게 오류를 돌려주기 위해 reply_to만 읽음
        try:
            message = self._serializer.loads(body)
        except ValueError:
            return None
        if isinstance(message, Mapping):
            return message.get("reply_to")
        return None
