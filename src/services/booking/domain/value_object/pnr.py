from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class Pnr:
    """顧客向け予約番号（PNR）

    例: PNR-1A2B3C4D5E
    在庫サービスとの相関に使う BookingReference とは別物。
    """

    value: str

    PREFIX: ClassVar[str] = "PNR-"
    PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^PNR-[0-9A-Z]{4,16}$")

    def __post_init__(self) -> None:
        normalized = self.value.strip().upper()
        if not self.PATTERN.match(normalized):
            raise ValueError(f"Invalid PNR format: {self.value}")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> Pnr:
        """新しい PNR を採番する（UUID4 由来の 40bit）"""
        return cls(value=f"{cls.PREFIX}{uuid.uuid4().hex[:10].upper()}")
