"""Message Serializers.

메시지 본문 직렬화/역직렬화입니다. 기본 형식은 YAML입니다.
"""

from __future__ import annotations

import json
from typing import Any, Protocol

import yaml

from stomp_engine.domain.exceptions import ConfigError


class Serializer(Protocol):
    """직렬화 인터페이스.

    loads는 해석할 수 없는 본문에 대해 ValueError를 발생시킵니다.
    """

    name: str

    def loads(self, body: bytes | str) -> Any:
        ...

    def dumps(self, data: Any) -> str:
        ...


class YamlSerializer:
    """YAML 직렬화 (PyYAML safe loader/dumper)."""

    name = "yaml"

    def loads(self, body: bytes | str) -> Any:
        try:
            return yaml.safe_load(body)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML message: {e}") from e

    def dumps(self, data: Any) -> str:
        return yaml.safe_dump(data, allow_unicode=True, default_flow_style=False, sort_keys=False)


class JsonSerializer:
    """JSON 직렬화."""

    name = "json"

    def loads(self, body: bytes | str) -> Any:
        # json.JSONDecodeError는 ValueError 하위 클래스
        return json.loads(body)

    def dumps(self, data: Any) -> str:
        return json.dumps(data, ensure_ascii=False)


_SERIALIZERS: dict[str, type] = {
    YamlSerializer.name: YamlSerializer,
    JsonSerializer.name: JsonSerializer,
}


def get_serializer(name: str) -> Serializer:
    """이름으로 Serializer 생성.

    Raises:
        ConfigError: 알 수 없는 형식
    """
    try:
        return _SERIALIZERS[name.lower()]()
    except KeyError:
        raise ConfigError(f"Unknown serializer: {name}") from None
