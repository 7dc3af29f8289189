from abc import ABC, abstractmethod

from services.booking.domain.entity import Passenger
from services.booking.domain.value_object import Pnr, SeatNumber


class PassengerRepository(ABC):
    """搭乗者レポジトリ（参照のみ。保存は BookingRepository.save で予約と同時に行う）"""

    @abstractmethod
    def find_by_pnr(self, pnr: Pnr) -> list[Passenger]:
        """PNR で検索（予約内の連番順）"""
        raise NotImplementedError

    @abstractmethod
    def find_by_flight_and_seat_numbers(
        self, flight_id: str, seat_numbers: list[SeatNumber]
    ) -> list[Passenger]:
        """同一フライトで指定座席を持つ搭乗者を検索（予約ステータスは問わない）"""
        raise NotImplementedError
