"""Dependency Injection.

Composition Root입니다. 모든 의존성을 여기서 조립합니다.
"""

from __future__ import annotations

import importlib
from typing import Iterable

from stomp_engine.application.dispatch.controller import MessageDrivenController
from stomp_engine.application.dispatch.router import Application
from stomp_engine.application.dispatch.serializer import Serializer, get_serializer
from stomp_engine.application.engine.loop import EngineLoop
from stomp_engine.application.engine.stop_token import StopToken
from stomp_engine.application.roster.server_roster import ServerRoster
from stomp_engine.domain.entities import EngineConfig
from stomp_engine.domain.exceptions import ConfigError
from stomp_engine.infrastructure.messaging.stomp_connection import StompBrokerConnection
from stomp_engine.presentation.adapters.consumer_adapter import ConsumerAdapter
from stomp_engine.presentation.adapters.frame_dispatcher import FrameDispatcher
from stomp_engine.presentation.adapters.request_adapter import RequestAdapter
from stomp_engine.setup.config import Settings, get_settings


def load_controllers(paths: Iterable[str], serializer: Serializer) -> list[MessageDrivenController]:
    """``module:Class`` 경로의 컨트롤러를 import 후 생성.

    Raises:
        ConfigError: import 실패 또는 컨트롤러가 아님
    """
    controllers: list[MessageDrivenController] = []
    for path in paths:
        module_name, _, class_name = path.partition(":")
        try:
            controller_cls = getattr(importlib.import_module(module_name), class_name)
        except (ImportError, AttributeError, ValueError) as e:
            raise ConfigError(f"Cannot load controller {path!r}: {e}") from e

        if not (isinstance(controller_cls, type) and issubclass(controller_cls, MessageDrivenController)):
            raise ConfigError(f"{path!r} is not a MessageDrivenController")
        controllers.append(controller_cls(serializer))
    return controllers


def build_engine_config(settings: Settings, roster: ServerRoster) -> EngineConfig:
    """Settings → EngineConfig."""
    return EngineConfig(
        servers=roster.endpoints,
        tries_per_server=settings.tries_per_server,
        retry_delay_seconds=settings.connect_retry_delay,
        use_utf8_encoding=settings.utf8,
        subscribe_headers=dict(settings.subscribe_headers),
        login=settings.login,
        passcode=settings.passcode,
    )


class Container:
    """의존성 컨테이너.

    모든 의존성을 생성하고 관리합니다.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._stop_token = StopToken()
        self._engine_config: EngineConfig | None = None
        self._application: Application | None = None
        self._consumer_adapter: ConsumerAdapter | None = None
        self._engine: EngineLoop | None = None

    def init(self) -> None:
        """의존성 초기화.

        Raises:
            ConfigError: 서버 목록 / 컨트롤러 설정 오류
        """
        settings = self._settings

        roster = ServerRoster.from_config(
            servers=settings.servers,
            hostname=settings.hostname,
            port=settings.port,
        )
        self._engine_config = build_engine_config(settings, roster)

        # Application
        serializer = get_serializer(settings.serializer)
        self._application = Application(load_controllers(settings.controllers, serializer), serializer)

        # Presentation
        self._consumer_adapter = ConsumerAdapter(self._application, RequestAdapter())
        dispatcher = FrameDispatcher(self._consumer_adapter)

        self._engine = EngineLoop(
            roster=roster,
            config=self._engine_config,
            connection_factory=self._new_connection,
            dispatcher=dispatcher,
            routes=self._application.routes(),
            stop_token=self._stop_token,
            oneshot=settings.oneshot,
        )

    def _new_connection(self) -> StompBrokerConnection:
        if self._engine_config is None:
            raise RuntimeError("Container not initialized")
        return StompBrokerConnection(self._engine_config)

    @property
    def stop_token(self) -> StopToken:
        """종료 요청 토큰."""
        return self._stop_token

    @property
    def engine(self) -> EngineLoop:
        """Engine Loop."""
        if not self._engine:
            raise RuntimeError("Container not initialized")
        return self._engine

    @property
    def consumer_adapter(self) -> ConsumerAdapter:
        """Consumer Adapter."""
        if not self._consumer_adapter:
            raise RuntimeError("Container not initialized")
        return self._consumer_adapter

    @property
    def application(self) -> Application:
        """Application (route → 컨트롤러)."""
        if not self._application:
            raise RuntimeError("Container not initialized")
        return self._application
