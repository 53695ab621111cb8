"""Engine Loop.

브로커 연결 수명주기와 서버 failover를 담당하는 최상위 루프입니다.

    SELECTING_SERVER ── roster.next(), try 카운터 초기화
          │
    CONNECTING ──────── subscribe 헤더 생성, connect, subscribe
          │                 실패 → decide_next() → RETRY / FAILOVER
    SUBSCRIBED
          │
    RECEIVING ◀──┐      receive_frame() (유일한 블로킹 지점)
          │      │
    DISPATCHING ─┘      FrameDispatcher → 종료 체크포인트
          │
    DISCONNECTING ───── 항상 disconnect 후 다음 행동

단일 스레드로 동작합니다. 종료 요청(StopToken)과 oneshot 모드는
프레임 하나의 처리가 끝난 뒤에만 확인합니다. 연결 실패로는 종료하지 않습니다.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping

from stomp_engine.application.common.result import AttemptResult
from stomp_engine.application.engine.policy import decide_next
from stomp_engine.domain.entities import RunState
from stomp_engine.domain.enums import EngineState, LoopAction
from stomp_engine.domain.exceptions import ConnectError, ConnectionLost, SubscribeError
from stomp_engine.presentation.adapters.request_adapter import RequestAdapter

if TYPE_CHECKING:
    from stomp_engine.application.common.ports import BrokerConnection
    from stomp_engine.application.engine.stop_token import StopToken
    from stomp_engine.application.roster.server_roster import ServerRoster
    from stomp_engine.domain.entities import EngineConfig, ServerEndpoint
    from stomp_engine.presentation.adapters.frame_dispatcher import FrameDispatcher

logger = logging.getLogger(__name__)


class EngineLoop:
    """STOMP 요청 엔진 루프."""

    def __init__(
        self,
        roster: "ServerRoster",
        config: "EngineConfig",
        connection_factory: Callable[[], "BrokerConnection"],
        dispatcher: "FrameDispatcher",
        routes: Iterable[str],
        stop_token: "StopToken",
        oneshot: bool = False,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize.

        Args:
            roster: 엔드포인트 round-robin 목록
            config: 엔진 설정
            connection_factory: 시도마다 새 BrokerConnection 생성
            dispatcher: 프레임 디스패처
            routes: 애플리케이션 route (구독 destination의 원천)
            stop_token: 종료 요청 토큰
            oneshot: 프레임 하나만 처리하고 종료 (테스트용)
            sleep: retry delay 대기 함수
        """
        self._roster = roster
        self._config = config
        self._connection_factory = connection_factory
        self._dispatcher = dispatcher
        self._destinations = RequestAdapter.destinations(routes)
        self._stop_token = stop_token
        self._oneshot = oneshot
        self._sleep = sleep
        self._state = RunState()

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def destinations(self) -> list[str]:
        """구독 destination (실행당 한 번 생성)."""
        return list(self._destinations)

    def run(self) -> None:
        """종료 체크포인트에 도달할 때까지 메시지 처리."""
        logger.info(
            "STOMP engine starting",
            extra={
                "servers": [endpoint.describe() for endpoint in self._roster.endpoints],
                "destinations": self._destinations,
                "tries_per_server": self._config.tries_per_server,
            },
        )

        while True:
            endpoint = self._select_server()

            while True:
                self._state.try_count += 1
                result = self._attempt(endpoint)
                action = decide_next(result, self._state.try_count, self._config.tries_per_server)

                if action is LoopAction.STOP:
                    self._state.state = EngineState.STOPPED
                    logger.info(
                        "STOMP engine stopped",
                        extra={"frames_handled": self._state.frames_handled},
                    )
                    return

                if action.sleeps:
                    logger.info(
                        "Unable to connect; sleeping before next retry",
                        extra={
                            "broker": endpoint.describe(),
                            "delay_seconds": self._config.retry_delay_seconds,
                        },
                    )
                    self._sleep(self._config.retry_delay_seconds)

                if action.fails_over:
                    break

    def _select_server(self) -> "ServerEndpoint":
        self._state.state = EngineState.SELECTING_SERVER
        self._state.server_index = self._roster.cursor
        self._state.try_count = 0
        return self._roster.next()

    def _attempt(self, endpoint: "ServerEndpoint") -> AttemptResult:
        """엔드포인트 연결 시도 1회 (connect → subscribe → receive loop).

        예외는 전파하지 않고 AttemptResult로 변환합니다.
        """
        self._state.state = EngineState.CONNECTING
        self._state.attempts += 1
        broker = endpoint.describe()
        connection = self._connection_factory()

        try:
            try:
                headers = self._subscribe_headers(endpoint)
                logger.info(
                    "Connecting to STOMP broker",
                    extra={"broker": broker, "try": self._state.try_count},
                )
                connection.connect(endpoint)
                connection.subscribe(self._destinations, headers)
            except SubscribeError as e:
                logger.error("Problem subscribing to STOMP broker", extra={"broker": broker, "error": e.message})
                return AttemptResult.subscribe_failed(e.message)
            except ConnectError as e:
                logger.error(
                    "Connection refused by STOMP broker" if e.refused else "Problem connecting to STOMP broker",
                    extra={"broker": broker, "error": e.message, "error_type": "ConnectError", "refused": e.refused},
                )
                if e.refused:
                    return AttemptResult.connect_refused(e.message)
                return AttemptResult.connect_failed(e.message)
            except ConnectionLost as e:
                logger.error(
                    "Connection lost while connecting to STOMP broker",
                    extra={"broker": broker, "error": e.message, "error_type": "ConnectionLost"},
                )
                return AttemptResult.connect_failed(e.message)
            except Exception as e:
                logger.exception("Unexpected error connecting to STOMP broker", extra={"broker": broker})
                return AttemptResult.connect_failed(str(e))

            self._state.state = EngineState.SUBSCRIBED
            logger.info(
                "Subscribed to STOMP broker",
                extra={"broker": broker, "destinations": self._destinations},
            )

            try:
                return self._receive_loop(connection)
            except ConnectionLost as e:
                logger.error("Lost connection to STOMP broker", extra={"broker": broker, "error": e.message})
                return AttemptResult.connection_lost(e.message)
            except Exception as e:
                logger.exception("Problem dealing with STOMP", extra={"broker": broker})
                return AttemptResult.connection_lost(str(e))
        finally:
            self._state.state = EngineState.DISCONNECTING
            connection.disconnect()

    def _receive_loop(self, connection: "BrokerConnection") -> AttemptResult:
        while True:
            self._state.state = EngineState.RECEIVING
            frame = connection.receive_frame()

            self._state.state = EngineState.DISPATCHING
            self._dispatcher.dispatch(frame, connection)
            self._state.frames_handled += 1

            # 종료 체크포인트 (reply + ack 이후)
            if self._stop_token.stop_requested:
                logger.info("Shutdown requested; stopping after current frame")
                return AttemptResult.stopped()
            if self._oneshot:
                return AttemptResult.stopped()

    def _subscribe_headers(self, endpoint: "ServerEndpoint") -> dict[str, Any]:
        """전역 + 엔드포인트 SUBSCRIBE 헤더 병합 (엔드포인트 우선).

        Raises:
            SubscribeError: 헤더 설정이 mapping이 아님
        """
        headers: dict[str, Any] = {}
        for source in (self._config.subscribe_headers, endpoint.subscribe_headers):
            if source is None:
                continue
            if not isinstance(source, Mapping):
                raise SubscribeError("subscribe_headers config must be a mapping")
            headers.update(source)
        return headers
