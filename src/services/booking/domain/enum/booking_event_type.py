from enum import Enum


class BookingEventType(str, Enum):
    """予約ライフサイクルイベントの種別"""

    CREATED = "CREATED"
    CANCELLED = "CANCELLED"

    @property
    def detail_type(self) -> str:
        """EventBridge の DetailType"""
        return f"Booking{self.value.capitalize()}"
