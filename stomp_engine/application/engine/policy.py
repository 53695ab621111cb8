"""Retry / Failover Policy.

연결 시도 결과로부터 다음 행동을 결정하는 순수 함수입니다.

| 결과              | try < tries_per_server | try == tries_per_server |
|-------------------|------------------------|-------------------------|
| STOPPED           | STOP                   | STOP                    |
| CONNECT_FAILED    | RETRY                  | FAILOVER                |
| SUBSCRIBE_FAILED  | RETRY                  | FAILOVER                |
| CONNECT_REFUSED   | RETRY_AFTER_DELAY      | FAILOVER_AFTER_DELAY    |
| CONNECTION_LOST   | FAILOVER               | FAILOVER                |
"""

from __future__ import annotations

from stomp_engine.application.common.result import AttemptResult
from stomp_engine.domain.enums import LoopAction


def decide_next(result: AttemptResult, try_count: int, tries_per_server: int) -> LoopAction:
    """다음 행동 결정.

    Args:
        result: 방금 끝난 시도의 결과
        try_count: 현재 엔드포인트에서 시도한 횟수 (방금 시도 포함)
        tries_per_server: 엔드포인트당 최대 시도 횟수

    Returns:
        LoopAction
    """
    if result.is_stopped:
        return LoopAction.STOP

    if result.is_connection_lost:
        return LoopAction.FAILOVER

    exhausted = try_count >= tries_per_server

    if result.is_refused:
        return LoopAction.FAILOVER_AFTER_DELAY if exhausted else LoopAction.RETRY_AFTER_DELAY

    return LoopAction.FAILOVER if exhausted else LoopAction.RETRY
