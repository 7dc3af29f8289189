from datetime import timedelta

import pytest

from services.booking.domain.enum import BookingEventType, BookingStatus
from services.booking.domain.exception import (
    BookingAlreadyCancelledException,
    CancellationWindowExpiredException,
)
from services.shared.domain import IsoDateTime
from services.shared.domain.exception import (
    BusinessRuleViolationException,
    ConflictException,
    PolicyViolationException,
)


def _after(dt: IsoDateTime, **delta) -> IsoDateTime:
    return IsoDateTime(value=dt.value + timedelta(**delta))


class TestBooking:
    """Booking Entity のテスト"""

    def test_cancel_within_window(self, create_booking, booked_at):
        """予約から24時間以内ならキャンセルでき、イベントが記録される"""
        booking = create_booking()

        booking.cancel(_after(booked_at, hours=23, minutes=59, seconds=59))

        assert booking.status == BookingStatus.CANCELLED
        assert not booking.is_active
        events = booking.flush_domain_events()
        assert [e.event_type for e in events] == [BookingEventType.CANCELLED]
        assert events[0].pnr == str(booking.pnr)

    def test_cancel_at_exactly_24_hours_is_rejected(self, create_booking, booked_at):
        """ちょうど24時間でキャンセル期限切れ"""
        booking = create_booking()

        with pytest.raises(CancellationWindowExpiredException) as exc_info:
            booking.cancel(_after(booked_at, hours=24))

        assert isinstance(exc_info.value, PolicyViolationException)
        assert booking.status == BookingStatus.BOOKED
        assert booking.flush_domain_events() == []

    def test_cancel_after_25_hours_is_rejected(self, create_booking, booked_at):
        booking = create_booking()

        with pytest.raises(CancellationWindowExpiredException):
            booking.cancel(_after(booked_at, hours=25))

        assert booking.status == BookingStatus.BOOKED

    def test_cancel_twice_is_a_conflict(self, create_booking, booked_at):
        """二重キャンセルは冪等ではなくエラー"""
        booking = create_booking(status=BookingStatus.CANCELLED)

        with pytest.raises(BookingAlreadyCancelledException) as exc_info:
            booking.cancel(_after(booked_at, hours=1))

        assert isinstance(exc_info.value, ConflictException)

    def test_already_cancelled_takes_precedence_over_window(
        self, create_booking, booked_at
    ):
        booking = create_booking(status=BookingStatus.CANCELLED)

        with pytest.raises(BookingAlreadyCancelledException):
            booking.cancel(_after(booked_at, hours=48))

    def test_record_created(self, create_booking, booked_at):
        booking = create_booking()

        booking.record_created()

        events = booking.flush_domain_events()
        assert len(events) == 1
        assert events[0].event_type == BookingEventType.CREATED
        assert events[0].occurred_at == booked_at
        assert booking.flush_domain_events() == []

    def test_zero_seats_raises_error(self, create_booking):
        with pytest.raises(BusinessRuleViolationException):
            create_booking(seats_booked=0)

    def test_equality_is_based_on_pnr(self, create_booking):
        assert create_booking() == create_booking(total_amount="999")
        assert create_booking() != create_booking(pnr="PNR-OTHER00001")
