from abc import ABC, abstractmethod

from services.booking.domain.event import BookingEvent


class EventPublishError(Exception):
    """イベントの発行に失敗した"""


class EventNotifier(ABC):
    """予約ライフサイクルイベントの発行（fire-and-forget）"""

    @abstractmethod
    def publish(self, event: BookingEvent) -> None:
        """イベントを発行する。失敗時は EventPublishError"""
        raise NotImplementedError
