"""Stop Token.

시그널 핸들러와 EngineLoop가 공유하는 종료 플래그입니다.
루프는 프레임 하나의 처리(reply + ack)가 끝난 뒤에만 확인합니다.
"""

from __future__ import annotations

import threading


class StopToken:
    """종료 요청 토큰."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def request_stop(self) -> None:
        """종료 요청 (시그널 핸들러에서 호출)."""
        self._event.set()

    @property
    def stop_requested(self) -> bool:
        """종료 요청 여부."""
        return self._event.is_set()
