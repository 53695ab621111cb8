"""ServerRoster 테스트."""

from __future__ import annotations

import pytest

from stomp_engine.application.roster.server_roster import ServerRoster
from stomp_engine.domain.entities import ServerEndpoint
from stomp_engine.domain.exceptions import ConfigError


class TestFromConfig:
    """설정 정규화 테스트."""

    def test_single_server_mapping(self) -> None:
        """단일 서버 mapping."""
        roster = ServerRoster.from_config(servers={"hostname": "localhost", "port": "61613"})

        assert roster.endpoints == (ServerEndpoint("localhost", 61613),)

    def test_server_list_keeps_order(self) -> None:
        """서버 목록 순서 유지."""
        roster = ServerRoster.from_config(
            servers=[
                {"hostname": "a", "port": 61613},
                {"hostname": "b", "port": 61614, "subscribe_headers": {"prefetch": "1"}},
            ]
        )

        assert [e.describe() for e in roster.endpoints] == ["a:61613", "b:61614"]
        assert roster.endpoints[1].subscribe_headers == {"prefetch": "1"}

    def test_legacy_flat_config(self) -> None:
        """구버전 hostname/port 설정."""
        roster = ServerRoster.from_config(hostname="legacy", port=61000)

        assert roster.endpoints == (ServerEndpoint("legacy", 61000),)

    def test_servers_take_precedence_over_legacy(self) -> None:
        """servers가 있으면 flat 설정은 무시."""
        roster = ServerRoster.from_config(
            servers={"hostname": "new", "port": 1},
            hostname="legacy",
            port=2,
        )

        assert len(roster) == 1
        assert roster.endpoints[0].hostname == "new"

    def test_missing_port_uses_default(self) -> None:
        """포트 누락시 기본 STOMP 포트."""
        roster = ServerRoster.from_config(servers={"hostname": "localhost"})

        assert roster.endpoints[0].port == 61613

    def test_endpoint_instances_accepted(self) -> None:
        """ServerEndpoint 인스턴스 그대로 사용."""
        endpoint = ServerEndpoint("x", 1)

        assert ServerRoster.from_config(servers=[endpoint]).endpoints == (endpoint,)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {},
            {"servers": []},
            {"hostname": ""},
        ],
    )
    def test_empty_config_raises(self, kwargs: dict) -> None:
        """서버가 없으면 ConfigError."""
        with pytest.raises(ConfigError):
            ServerRoster.from_config(**kwargs)

    @pytest.mark.parametrize(
        "servers",
        [
            "localhost:61613",
            ["localhost"],
            [{"port": 61613}],
            [{"hostname": "a", "port": "not-a-port"}],
        ],
    )
    def test_malformed_config_raises(self, servers: object) -> None:
        """형식 오류시 ConfigError."""
        with pytest.raises(ConfigError):
            ServerRoster.from_config(servers=servers)


class TestNext:
    """round-robin 테스트."""

    def test_round_robin_wraps(self, endpoints: tuple[ServerEndpoint, ...]) -> None:
        """마지막 다음은 첫 번째 서버."""
        roster = ServerRoster(endpoints)

        visited = [roster.next() for _ in range(len(endpoints) * 2)]

        assert visited == list(endpoints) * 2

    def test_cursor_advances(self, endpoints: tuple[ServerEndpoint, ...]) -> None:
        """커서 이동 확인."""
        roster = ServerRoster(endpoints)
        assert roster.cursor == 0

        roster.next()
        roster.next()
        assert roster.cursor == 2

        roster.next()
        assert roster.cursor == 0

    def test_single_server_repeats(self) -> None:
        """서버가 하나면 항상 같은 서버."""
        roster = ServerRoster([ServerEndpoint("only", 61613)])

        assert roster.next() is roster.next()

    def test_empty_roster_raises(self) -> None:
        """빈 목록은 ConfigError."""
        with pytest.raises(ConfigError):
            ServerRoster([])
