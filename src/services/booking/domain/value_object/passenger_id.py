from __future__ import annotations

from dataclasses import dataclass

from .pnr import Pnr


@dataclass(frozen=True)
class PassengerId:
    """搭乗者ID

    例: "PNR-1A2B3C4D5E#001"
    """

    value: str

    def __str__(self) -> str:
        return self.value

    @classmethod
    def for_booking(cls, pnr: Pnr, index: int) -> PassengerId:
        """PNR と予約内の連番から決定的に生成する"""
        return cls(value=f"{pnr}#{index:03d}")

    @property
    def index(self) -> int:
        return int(self.value.rsplit("#", 1)[1])
