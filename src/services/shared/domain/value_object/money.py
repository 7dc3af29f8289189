from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from .currency import Currency


@dataclass(frozen=True)
class Money:
    """金額（通貨情報含む）"""

    amount: Decimal
    currency: Currency

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    def add(self, other: Money) -> Money:
        """金額を加算する"""
        if self.currency != other.currency:
            raise ValueError("Cannot add money with different currencies")
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def multiply(self, quantity: int) -> Money:
        """数量を掛けた金額を返す（座席単価 × 人数など）"""
        if quantity < 0:
            raise ValueError("Quantity cannot be negative")
        return Money(amount=self.amount * quantity, currency=self.currency)

    @classmethod
    def of(cls, amount: Decimal | int | str, currency_code: str) -> Money:
        """プリミティブ値から Money を生成"""
        return cls(amount=Decimal(str(amount)), currency=Currency(currency_code))
