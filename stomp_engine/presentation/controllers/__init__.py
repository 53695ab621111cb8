"""기본 제공 컨트롤러."""

from stomp_engine.presentation.controllers.ping import PingController

__all__ = ["PingController"]
