from __future__ import annotations

import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class BookingReference:
    """座席確保・解放の相関ID

    在庫サービスへの reserve / release 呼び出しで同じ値を使う。
    例: BR-9F8E7D6C
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("BookingReference cannot be empty")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> BookingReference:
        return cls(value=f"BR-{uuid.uuid4().hex[:8].upper()}")
