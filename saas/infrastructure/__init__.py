"""Infrastructure: persistence (SQLAlchemy) and messaging (EventBridge)."""
