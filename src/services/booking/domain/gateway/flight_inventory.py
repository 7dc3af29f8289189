from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable

from services.shared.domain import Money


@dataclass(frozen=True)
class FlightSnapshot:
    """在庫サービスから取得したフライト情報（取得時点のスナップショット）"""

    flight_id: str
    price: Money
    available_seats: int
    source: str
    destination: str
    airline_name: str


@dataclass(frozen=True)
class SeatReservationRequest:
    """座席確保・解放リクエスト

    reference は reserve と release で同一の値を使う。
    seat_numbers は座席未指定なら空。
    """

    reference: str
    count: int
    seat_numbers: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class SeatReservationResult:
    """座席確保の結果"""

    success: bool
    message: str = ""


@dataclass(frozen=True)
class SeatReleaseResult:
    """座席解放の結果"""

    success: bool
    message: str = ""


class FlightInventoryError(Exception):
    """在庫サービスがエラーを返した（再試行しない）"""


class FlightInventoryTransportError(FlightInventoryError):
    """通信エラー・5xx（再試行対象）"""


class FlightInventoryClient(ABC):
    """フライト在庫サービスのクライアント"""

    @abstractmethod
    def get_flight(self, flight_id: str) -> FlightSnapshot:
        """フライト情報を取得する"""
        raise NotImplementedError

    @abstractmethod
    def reserve_seats(
        self, flight_id: str, request: SeatReservationRequest
    ) -> SeatReservationResult:
        """座席を確保する（座席割り当ての唯一の権限は在庫サービス側）"""
        raise NotImplementedError

    @abstractmethod
    def release_seats(
        self, flight_id: str, request: SeatReservationRequest
    ) -> SeatReleaseResult:
        """確保済みの座席を解放する"""
        raise NotImplementedError

    def bind_remaining_time(self, remaining_time: Callable[[], float]) -> None:
        """呼び出し元の残り実行時間（秒）を返す関数を受け取る

        期限を考慮しない実装では何もしない。
        """
