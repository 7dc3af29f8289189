from __future__ import annotations

from dataclasses import dataclass

from services.booking.domain.enum import BookingEventType
from services.shared.domain import IsoDateTime


@dataclass(frozen=True)
class BookingEvent:
    """予約ライフサイクルイベント（作成・キャンセル）

    下流への配信は at-least-once・順序保証なし。
    """

    event_type: BookingEventType
    pnr: str
    flight_id: str
    booker_email: str
    occurred_at: IsoDateTime

    def to_dict(self) -> dict:
        return {
            "event_type": self.event_type.value,
            "pnr": self.pnr,
            "flight_id": self.flight_id,
            "booker_email": self.booker_email,
            "occurred_at": str(self.occurred_at),
        }
