"""Application Dispatch.

route → 컨트롤러 → action 디스패치와 메시지 직렬화입니다.
"""

from stomp_engine.application.dispatch.controller import MessageDrivenController, action
from stomp_engine.application.dispatch.router import Application
from stomp_engine.application.dispatch.serializer import (
    JsonSerializer,
    Serializer,
    YamlSerializer,
    get_serializer,
)

__all__ = [
    "Application",
    "JsonSerializer",
    "MessageDrivenController",
    "Serializer",
    "YamlSerializer",
    "action",
    "get_serializer",
]
