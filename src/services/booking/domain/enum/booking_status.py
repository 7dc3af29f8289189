from enum import Enum


class BookingStatus(str, Enum):
    """予約ステータス（BOOKED → CANCELLED の一方向のみ）"""

    BOOKED = "BOOKED"
    CANCELLED = "CANCELLED"
