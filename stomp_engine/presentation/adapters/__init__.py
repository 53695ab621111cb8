"""Presentation Adapters."""

from stomp_engine.presentation.adapters.consumer_adapter import ConsumerAdapter
from stomp_engine.presentation.adapters.frame_dispatcher import FrameDispatcher
from stomp_engine.presentation.adapters.request_adapter import RequestAdapter

__all__ = ["ConsumerAdapter", "FrameDispatcher", "RequestAdapter"]
