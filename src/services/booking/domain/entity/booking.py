from datetime import timedelta

from services.booking.domain.enum import BookingEventType, BookingStatus, TripType
from services.booking.domain.event import BookingEvent
from services.booking.domain.exception import (
    BookingAlreadyCancelledException,
    CancellationWindowExpiredException,
)
from services.booking.domain.value_object import Pnr
from services.shared.domain import AggregateRoot, IsoDateTime, Money
from services.shared.domain.exception import BusinessRuleViolationException


class Booking(AggregateRoot[Pnr]):
    """航空券予約（集約ルート）

    搭乗者は pnr で逆参照されるが、集約ルートはこの Booking。
    """

    CANCELLATION_WINDOW = timedelta(hours=24)

    def __init__(
        self,
        id: Pnr,
        flight_id: str,
        booker_email: str,
        total_amount: Money,
        booked_at: IsoDateTime,
        seats_booked: int,
        trip_type: TripType = TripType.ONE_WAY,
        status: BookingStatus = BookingStatus.BOOKED,
    ) -> None:
        super().__init__(id)

        self._flight_id = flight_id
        self._booker_email = booker_email
        self._total_amount = total_amount
        self._booked_at = booked_at
        self._seats_booked = seats_booked
        self._trip_type = trip_type
        self._status = status

        self._validate_seats()

    def _validate_seats(self) -> None:
        """1席以上"""
        if self._seats_booked < 1:
            raise BusinessRuleViolationException("A booking must hold at least one seat")

    @property
    def pnr(self) -> Pnr:
        return self._id

    @property
    def flight_id(self) -> str:
        return self._flight_id

    @property
    def booker_email(self) -> str:
        return self._booker_email

    @property
    def total_amount(self) -> Money:
        return self._total_amount

    @property
    def booked_at(self) -> IsoDateTime:
        return self._booked_at

    @property
    def seats_booked(self) -> int:
        return self._seats_booked

    @property
    def trip_type(self) -> TripType:
        return self._trip_type

    @property
    def status(self) -> BookingStatus:
        return self._status

    @property
    def is_active(self) -> bool:
        return self._status == BookingStatus.BOOKED

    def record_created(self) -> None:
        """作成イベントを記録する"""
        self.add_domain_event(self._event(BookingEventType.CREATED, self._booked_at))

    def cancel(self, now: IsoDateTime) -> None:
        """予約をキャンセルする

        二重キャンセルは冪等に扱わずエラーとする。
        予約から24時間ちょうど以降はキャンセル不可。
        """
        if self._status == BookingStatus.CANCELLED:
            raise BookingAlreadyCancelledException(str(self._id))

        if self._booked_at.elapsed_until(now) >= self.CANCELLATION_WINDOW:
            raise CancellationWindowExpiredException(str(self._id))

        self._status = BookingStatus.CANCELLED
        self.add_domain_event(self._event(BookingEventType.CANCELLED, now))

    def _event(self, event_type: BookingEventType, at: IsoDateTime) -> BookingEvent:
        return BookingEvent(
            event_type=event_type,
            pnr=str(self._id),
            flight_id=self._flight_id,
            booker_email=self._booker_email,
            occurred_at=at,
        )
