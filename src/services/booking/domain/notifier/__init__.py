from .event_notifier import EventNotifier, EventPublishError

__all__ = ["EventNotifier", "EventPublishError"]
