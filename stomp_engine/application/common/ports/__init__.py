"""Ports (Interfaces).

Infrastructure / 애플리케이션과의 계약을 정의하는 인터페이스입니다.
"""

from stomp_engine.application.common.ports.broker_connection import BrokerConnection
from stomp_engine.application.common.ports.request_handler import RequestHandler

__all__ = ["BrokerConnection", "RequestHandler"]
