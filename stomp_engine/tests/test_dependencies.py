"""Dependencies 테스트."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from stomp_engine.application.dispatch.serializer import JsonSerializer, YamlSerializer
from stomp_engine.application.roster.server_roster import ServerRoster
from stomp_engine.domain.exceptions import ConfigError
from stomp_engine.infrastructure.messaging.stomp_connection import StompBrokerConnection
from stomp_engine.presentation.controllers.ping import PingController
from stomp_engine.setup.config import Settings
from stomp_engine.setup.dependencies import Container, build_engine_config, load_controllers


class TestLoadControllers:
    """load_controllers 테스트."""

    def test_load(self) -> None:
        serializer = JsonSerializer()

        controllers = load_controllers(
            ["stomp_engine.presentation.controllers.ping:PingController"],
            serializer,
        )

        assert len(controllers) == 1
        assert isinstance(controllers[0], PingController)
        assert controllers[0].serializer is serializer

    @pytest.mark.parametrize(
        "path",
        [
            "stomp_engine.presentation.controllers.missing:PingController",
            "stomp_engine.presentation.controllers.ping:Missing",
            "stomp_engine.presentation.controllers.ping",
            "stomp_engine.setup.config:Settings",
        ],
    )
    def test_invalid_path(self, path: str) -> None:
        with pytest.raises(ConfigError):
            load_controllers([path], YamlSerializer())


class TestBuildEngineConfig:
    """build_engine_config 테스트."""

    def test_maps_settings(self) -> None:
        settings = Settings(
            hostname="legacy",
            tries_per_server=2,
            connect_retry_delay=3,
            utf8=True,
            subscribe_headers={"activemq.prefetchSize": "1"},
            login="engine",
            passcode="secret",
        )
        roster = ServerRoster.from_config(hostname="legacy", port=61613)

        config = build_engine_config(settings, roster)

        assert config.servers == roster.endpoints
        assert config.tries_per_server == 2
        assert config.retry_delay_seconds == 3
        assert config.use_utf8_encoding is True
        assert config.subscribe_headers == {"activemq.prefetchSize": "1"}
        assert config.login == "engine"
        assert config.passcode == "secret"


class TestContainer:
    """Container 테스트."""

    def test_container_properties_before_init(self) -> None:
        """init() 전에 속성 접근시 RuntimeError."""
        container = Container(Settings(hostname="localhost"))

        with pytest.raises(RuntimeError, match="Container not initialized"):
            _ = container.engine

        with pytest.raises(RuntimeError, match="Container not initialized"):
            _ = container.consumer_adapter

        with pytest.raises(RuntimeError, match="Container not initialized"):
            _ = container.application

    def test_container_init(self) -> None:
        """Container 초기화."""
        settings = Settings(
            servers=[{"hostname": "a"}, {"hostname": "b", "port": 61614}],
            oneshot=True,
        )
        container = Container(settings)
        container.init()

        assert container.application.routes() == ["ping"]
        assert container.engine.destinations == ["/queue/ping"]
        assert container.consumer_adapter.stats["processed"] == 0
        assert isinstance(container._new_connection(), StompBrokerConnection)

    def test_container_init_without_servers(self) -> None:
        """서버 설정 없음 → ConfigError (재시도 없이 시작 실패)."""
        with patch.dict(os.environ, {}, clear=True):
            container = Container(Settings())

        with pytest.raises(ConfigError):
            container.init()

    def test_stop_token_shared_with_engine(self) -> None:
        container = Container(Settings(hostname="localhost"))
        container.init()

        assert container.engine._stop_token is container.stop_token
