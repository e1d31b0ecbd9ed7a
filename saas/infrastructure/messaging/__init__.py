"""Messaging: external event bus clients."""

from saas.infrastructure.messaging.eventbridge import EventBridgeEventBus

__all__ = ["EventBridgeEventBus"]
