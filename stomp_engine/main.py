"""STOMP Engine Entry Point.

STOMP 큐 메시지를 애플리케이션 요청으로 바꿔 처리하고 응답을 돌려주는 워커입니다.

Architecture:
    STOMP Broker (/queue/<route>)
        │
        └── stomp-engine (이 모듈)
                │
                ├── EngineLoop (failover / retry)
                │       │
                │       └── FrameDispatcher → ConsumerAdapter
                │               │
                │               └── Application → Controller.action
                │
                └── /remote-temp-queue/<reply_to> 로 응답

단일 프로세스, 단일 스레드입니다. 동시 처리가 필요하면 인스턴스를 여러 개 띄우고
브로커가 같은 큐의 consumer 사이에서 부하를 나누도록 합니다.

Signals:
    SIGUSR1, SIGTERM  현재 메시지 처리 후 종료 (다시 받으면 기본 동작)

Run:
    python -m stomp_engine.main
"""

from __future__ import annotations

import logging
import signal
from types import FrameType

from stomp_engine.setup.config import get_settings
from stomp_engine.setup.dependencies import Container
from stomp_engine.setup.logging import setup_logging

logger = logging.getLogger(__name__)

SHUTDOWN_SIGNALS = (signal.SIGUSR1, signal.SIGTERM)


class StompWorker:
    """STOMP Worker."""

    def __init__(self) -> None:
        self._container = Container()

    def start(self) -> None:
        """워커 시작 (종료 체크포인트까지 블록)."""
        settings = get_settings()
        logger.info(
            "STOMP worker starting",
            extra={
                "service_name": settings.service_name,
                "service_version": settings.service_version,
                "env": settings.environment,
            },
        )

        # 의존성 초기화 (ConfigError는 그대로 전파)
        self._container.init()
        logger.info("Dependencies initialized")

        # 시그널 핸들러 등록
        for sig in SHUTDOWN_SIGNALS:
            signal.signal(sig, self._handle_shutdown)

        try:
            self._container.engine.run()
        finally:
            self._cleanup()

    def _handle_shutdown(self, signum: int, frame: FrameType | None) -> None:
        """Graceful shutdown 핸들러.

        메시지를 기다리며 블록 중이면 다음 프레임 처리 후에 종료됩니다.
        시그널 컨텍스트에서는 로깅하지 않습니다 (종료 로그는 EngineLoop가 남김).
        """
        self._container.stop_token.request_stop()
        signal.signal(signum, signal.SIG_DFL)

    def _cleanup(self) -> None:
        """종료 로깅."""
        logger.info("Shutting down", extra={"stats": self._container.consumer_adapter.stats})
        logger.info("STOMP worker stopped")


def main() -> None:
    """Entry point."""
    setup_logging()
    worker = StompWorker()
    worker.start()


if __name__ == "__main__":
    main()
