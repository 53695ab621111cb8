"""STOMP Engine Configuration."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

DEFAULT_CONTROLLERS = ["stomp_engine.presentation.controllers.ping:PingController"]


class Settings(BaseSettings):
    """STOMP 엔진 설정.

    ``STOMP_`` 접두사 환경 변수에서 로드됩니다.
    mapping/list 값은 JSON 문자열로 지정합니다.
    """

    # Brokers
    servers: dict[str, Any] | list[dict[str, Any]] | None = None
    hostname: str | None = None  # 구버전 flat 설정
    port: int = 61613
    login: str | None = None
    passcode: str | None = None

    # Engine
    tries_per_server: int = Field(default=1, ge=1)
    connect_retry_delay: int = Field(default=15, ge=0)
    utf8: bool = False
    subscribe_headers: dict[str, Any] = Field(default_factory=dict)
    oneshot: bool = Field(
        default=False,
        validation_alias=AliasChoices("STOMP_ONESHOT", "ENGINE_ONESHOT"),
    )

    # Application
    serializer: Literal["yaml", "json"] = "yaml"
    controllers: list[str] = Field(default_factory=lambda: list(DEFAULT_CONTROLLERS))

    # Logging
    log_level: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL"))
    service_name: str = Field(default="stomp-engine", validation_alias=AliasChoices("SERVICE_NAME"))
    service_version: str = Field(default="1.0.0", validation_alias=AliasChoices("SERVICE_VERSION"))
    environment: str = Field(default="dev", validation_alias=AliasChoices("ENVIRONMENT"))

    model_config = {"env_prefix": "STOMP_", "case_sensitive": False, "populate_by_name": True}


@lru_cache
def get_settings() -> Settings:
    """설정 싱글톤 반환."""
    return Settings()
