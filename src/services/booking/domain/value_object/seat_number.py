from dataclasses import dataclass


@dataclass(frozen=True)
class SeatNumber:
    """座席番号

    前後の空白を除去し、大文字に正規化する。
    例: " a1 " -> "A1"
    """

    value: str

    def __post_init__(self) -> None:
        normalized = self.value.strip().upper()
        if not normalized:
            raise ValueError("Seat number cannot be empty")
        if len(normalized) > 8:
            raise ValueError(f"Seat number is too long: {self.value}")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value
