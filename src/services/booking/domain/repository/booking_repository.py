from abc import abstractmethod

from services.booking.domain.entity import Booking, Passenger
from services.booking.domain.enum import BookingStatus
from services.booking.domain.value_object import Pnr
from services.shared.domain import Repository


class BookingRepository(Repository[Booking, Pnr]):
    """予約レポジトリ"""

    @abstractmethod
    def save(self, booking: Booking, passengers: list[Passenger]) -> None:
        """予約と搭乗者を1つのトランザクションで新規に永続化する

        すべて保存されるか、何も保存されないかのどちらか。
        PNR 重複時は DuplicateResourceException。
        """
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, pnr: Pnr) -> Booking | None:
        """PNR で検索"""
        raise NotImplementedError

    @abstractmethod
    def find_by_booker_email(self, booker_email: str) -> list[Booking]:
        """予約者メールアドレスで検索（予約日時の降順）"""
        raise NotImplementedError

    @abstractmethod
    def update(
        self, booking: Booking, expected_status: BookingStatus | None = None
    ) -> None:
        """ステータスを更新する（期待値と異なれば OptimisticLockException）"""
        raise NotImplementedError
