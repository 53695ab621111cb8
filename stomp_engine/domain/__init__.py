"""STOMP Engine Domain Layer.

엔진 값 객체, enum, 예외를 정의합니다.
"""

from stomp_engine.domain.entities import (
    REPLY_ADDRESS_HEADER,
    ApplicationRequest,
    ApplicationResponse,
    EngineConfig,
    InboundFrame,
    OutboundFrame,
    RunState,
    ServerEndpoint,
)
from stomp_engine.domain.enums import AttemptStatus, EngineState, FrameCommand, LoopAction
from stomp_engine.domain.exceptions import (
    ActionNotFoundError,
    ConfigError,
    ConnectError,
    ConnectionLost,
    EngineError,
    MalformedDestinationError,
    RouteNotFoundError,
    SubscribeError,
)

__all__ = [
    "ActionNotFoundError",
    "REPLY_ADDRESS_HEADER",
    "ApplicationRequest",
    "ApplicationResponse",
    "AttemptStatus",
    "ConfigError",
    "ConnectError",
    "ConnectionLost",
    "EngineConfig",
    "EngineError",
    "EngineState",
    "FrameCommand",
    "InboundFrame",
    "LoopAction",
    "MalformedDestinationError",
    "OutboundFrame",
    "RouteNotFoundError",
    "RunState",
    "ServerEndpoint",
    "SubscribeError",
]
