"""Messaging Infrastructure.

메시지 브로커 연결을 담당합니다.
- StompBrokerConnection: STOMP 연결/구독/수신/ack (Infrastructure)
- FrameDispatcher, ConsumerAdapter: 라우팅/dispatch/reply/ack (Presentation)
"""

from stomp_engine.infrastructure.messaging.stomp_connection import StompBrokerConnection

__all__ = ["StompBrokerConnection"]
