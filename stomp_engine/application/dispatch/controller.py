"""Message Driven Controller.

메시지의 ``type`` 값을 action으로 매핑하는 컨트롤러 기반 클래스입니다.

    class OrderController(MessageDrivenController):
        namespace = "order"          # → /queue/order 구독

        @action("create")
        def create(self, message, request):
            return {"type": "create_response", "id": ...}

action 테이블은 인스턴스 생성 시 한 번 만들어집니다.
action이 발생시킨 예외는 ``status: ERROR`` 응답으로 직렬화됩니다.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from stomp_engine.application.dispatch.serializer import Serializer, YamlSerializer
from stomp_engine.domain.entities import (
    REPLY_ADDRESS_HEADER,
    ApplicationRequest,
    ApplicationResponse,
)
from stomp_engine.domain.exceptions import ActionNotFoundError

logger = logging.getLogger(__name__)

ACTION_ATTR = "__stomp_action__"

ActionFunc = Callable[[Mapping[str, Any], ApplicationRequest], Mapping[str, Any] | None]


def action(name: str | None = None) -> Callable[[Callable], Callable]:
    """메서드를 메시지 type ``name``의 action으로 등록 (기본값: 메서드 이름)."""

    def decorator(func: Callable) -> Callable:
        setattr(func, ACTION_ATTR, name or func.__name__)
        return func

    return decorator


def error_body(error: BaseException) -> dict[str, Any]:
    """예외 → ERROR 응답 본문.

    예외가 ``to_dict()``를 제공하면 그 필드를 error에 포함합니다.
    """
    detail: dict[str, Any] = {
        "type": type(error).__name__,
        "message": str(error),
    }
    to_dict = getattr(error, "to_dict", None)
    if callable(to_dict):
        detail.update(to_dict())
    return {"status": "ERROR", "error": detail}


def error_response(
    serializer: Serializer,
    error: BaseException,
    reply_to: Any = None,
) -> ApplicationResponse:
    """예외 → 실패 ApplicationResponse."""
    return ApplicationResponse(
        body=serializer.dumps(error_body(error)),
        headers=reply_headers(reply_to),
        success=False,
    )


def reply_headers(reply_to: Any) -> dict[str, str]:
    """reply_to 값 → 응답 헤더."""
    if reply_to in (None, ""):
        return {}
    return {REPLY_ADDRESS_HEADER: str(reply_to)}


class MessageDrivenController:
    """메시지 기반 컨트롤러.

    Attributes:
        namespace: route 이름 (구독 큐 이름)
    """

    namespace: str = ""

    def __init__(self, serializer: Serializer | None = None) -> None:
        """Initialize.

        Args:
            serializer: 본문 직렬화기 (기본값 YAML)
        """
        self._serializer = serializer or YamlSerializer()
        self._actions = self._collect_actions()

    @property
    def actions(self) -> dict[str, ActionFunc]:
        """메시지 type → action."""
        return dict(self._actions)

    @property
    def serializer(self) -> Serializer:
        return self._serializer

    def _collect_actions(self) -> dict[str, ActionFunc]:
        actions: dict[str, ActionFunc] = {}
        for attr in dir(type(self)):
            member = getattr(type(self), attr, None)
            name = getattr(member, ACTION_ATTR, None)
            if name:
                actions[name] = getattr(self, attr)
        return actions

    def handle(self, request: ApplicationRequest) -> ApplicationResponse:
        """요청 처리.

        Args:
            request: 애플리케이션 요청

        Returns:
            ApplicationResponse (action 실패 시 success=False)
        """
        try:
            message = self._serializer.loads(request.body)
        except ValueError as e:
            logger.debug("Undecodable message", extra={"route": request.route, "error": str(e)})
            return error_response(self._serializer, e)

        if not isinstance(message, Mapping):
            return error_response(self._serializer, ValueError("Message has no type"))

        reply_to = message.get("reply_to")
        if "type" not in message:
            return error_response(self._serializer, ValueError("Message has no type"), reply_to)

        message_type = str(message["type"])

        try:
            func = self._actions.get(message_type)
            if func is None:
                raise ActionNotFoundError(self.namespace, message_type)
            result = func(message, request)
        except Exception as e:
            logger.debug(
                "Action raised an error",
                extra={
                    "route": request.route,
                    "type": message_type,
                    "error_type": type(e).__name__,
                    "error": str(e),
                },
            )
            return error_response(self._serializer, e, reply_to)

        try:
            body = self._serializer.dumps(dict(result) if result is not None else {})
        except Exception as e:
            logger.debug("Response serialization failed", extra={"error": str(e)})
            return error_response(self._serializer, e, reply_to)

        return ApplicationResponse(body=body, headers=reply_headers(reply_to))
