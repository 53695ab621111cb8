"""Logging Configuration.

ECS 호환 JSON 로깅 설정입니다.
모든 레코드에 ``service`` 메타데이터가 붙고, stomp.py 내부 로그는 WARNING 이상만 남깁니다.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import ecs_logging

from stomp_engine.setup.config import Settings, get_settings

# stomp.py는 연결 시도/heartbeat마다 INFO 로그를 남김
QUIET_LOGGERS = ("stomp", "stomp.py")

_base_record_factory = logging.getLogRecordFactory()


def setup_logging(settings: Settings | None = None) -> None:
    """로깅 설정.

    여러 번 호출해도 handler와 record factory가 중복되지 않습니다.

    Args:
        settings: 로깅 설정 (기본값 get_settings())
    """
    settings = settings or get_settings()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ecs_logging.StdlibFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level.upper())
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    service = {
        "name": settings.service_name,
        "version": settings.service_version,
        "environment": settings.environment,
    }

    def record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
        record = _base_record_factory(*args, **kwargs)
        record.service = service
        return record

    logging.setLogRecordFactory(record_factory)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
