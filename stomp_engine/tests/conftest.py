"""stomp_engine 테스트 공통 Fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from typing import Callable

import pytest

from stomp_engine.domain.entities import (
    EngineConfig,
    InboundFrame,
    ServerEndpoint,
)
from stomp_engine.tests.fakes import make_message


@pytest.fixture
def endpoints() -> tuple[ServerEndpoint, ...]:
    """엔드포인트 3개."""
    return (
        ServerEndpoint("broker-a", 61613),
        ServerEndpoint("broker-b", 61613),
        ServerEndpoint("broker-c", 61614),
    )


@pytest.fixture
def engine_config(endpoints: tuple[ServerEndpoint, ...]) -> EngineConfig:
    """기본 엔진 설정."""
    return EngineConfig(servers=endpoints, tries_per_server=1, retry_delay_seconds=15)


@pytest.fixture
def message_factory() -> Callable[..., InboundFrame]:
    """MESSAGE 프레임 factory."""
    return make_message
