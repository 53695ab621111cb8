"""Server Roster.

브로커 엔드포인트 목록과 round-robin 커서를 관리합니다.

설정 형태 (생성 시 한 번만 정규화):
    servers = {"hostname": ..., "port": ...}          # 단일 서버
    servers = [{"hostname": ..., "port": ...}, ...]   # 서버 목록
    hostname = ..., port = ...                        # 구버전 flat 설정
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Sequence

from stomp_engine.domain.entities import ServerEndpoint
from stomp_engine.domain.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_STOMP_PORT = 61613


class ServerRoster:
    """엔드포인트 round-robin 목록.

    장애 이력은 보지 않고 순서만으로 다음 서버를 고릅니다.
    """

    def __init__(self, endpoints: Iterable[ServerEndpoint]) -> None:
        """Initialize.

        Args:
            endpoints: 정규화된 엔드포인트

        Raises:
            ConfigError: 엔드포인트가 하나도 없음
        """
        self._endpoints: tuple[ServerEndpoint, ...] = tuple(endpoints)
        if not self._endpoints:
            raise ConfigError("No STOMP servers configured")
        self._cursor = 0

    @classmethod
    def from_config(
        cls,
        servers: Any = None,
        hostname: str | None = None,
        port: int | str | None = None,
    ) -> ServerRoster:
        """설정 값에서 ServerRoster 생성.

        Args:
            servers: 단일 서버 mapping, 또는 mapping 목록
            hostname: 구버전 flat 설정 호스트 (servers가 없을 때만 사용)
            port: 구버전 flat 설정 포트

        Returns:
            ServerRoster 인스턴스

        Raises:
            ConfigError: 서버 목록이 비었거나 형식이 잘못됨
        """
        if servers is None:
            if not hostname:
                raise ConfigError("No STOMP servers configured")
            entries: Sequence[Any] = [{"hostname": hostname, "port": port}]
        elif isinstance(servers, (Mapping, ServerEndpoint)):
            entries = [servers]
        elif isinstance(servers, (list, tuple)):
            entries = servers
        else:
            raise ConfigError(
                f"servers must be a mapping or a list, got {type(servers).__name__}"
            )

        return cls(_to_endpoint(entry) for entry in entries)

    @property
    def endpoints(self) -> tuple[ServerEndpoint, ...]:
        """정규화된 엔드포인트 목록."""
        return self._endpoints

    @property
    def cursor(self) -> int:
        """다음 next() 호출이 반환할 인덱스."""
        return self._cursor

    def __len__(self) -> int:
        return len(self._endpoints)

    def next(self) -> ServerEndpoint:
        """다음 엔드포인트 반환 (마지막 다음은 0번)."""
        endpoint = self._endpoints[self._cursor]
        self._cursor = (self._cursor + 1) % len(self._endpoints)
        return endpoint


def _to_endpoint(entry: Any) -> ServerEndpoint:
    """설정 항목 하나를 ServerEndpoint로 변환."""
    if isinstance(entry, ServerEndpoint):
        return entry
    if not isinstance(entry, Mapping):
        raise ConfigError(f"Server entry must be a mapping, got {type(entry).__name__}")

    hostname = entry.get("hostname")
    if not hostname:
        raise ConfigError(f"Server entry has no hostname: {dict(entry)!r}")

    port = entry.get("port") or DEFAULT_STOMP_PORT
    try:
        port = int(port)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid port for {hostname}: {port!r}") from e

    return ServerEndpoint(
        hostname=str(hostname),
        port=port,
        subscribe_headers=entry.get("subscribe_headers"),
    )
