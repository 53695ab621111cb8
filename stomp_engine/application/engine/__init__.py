"""Engine Loop."""

from stomp_engine.application.engine.loop import EngineLoop
from stomp_engine.application.engine.policy import decide_next
from stomp_engine.application.engine.stop_token import StopToken

__all__ = ["EngineLoop", "StopToken", "decide_next"]
