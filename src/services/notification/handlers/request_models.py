from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class BookingEventDetail(BaseModel):
    """EventBridge の detail に載る予約イベント"""

    event_type: Literal["CREATED", "CANCELLED"]
    pnr: str
    flight_id: str
    booker_email: str
    occurred_at: datetime
