from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from services.booking.applications import BookingOrchestrator
from services.booking.domain.entity import Booking, Passenger
from services.booking.domain.enum import BookingStatus, TripType
from services.booking.domain.factory import BookingFactory
from services.booking.domain.gateway import (
    FlightSnapshot,
    SeatReleaseResult,
    SeatReservationResult,
)
from services.booking.domain.value_object import (
    BookingReference,
    PassengerId,
    Pnr,
    SeatNumber,
)
from services.shared.domain import Currency, IsoDateTime, Money

BOOKED_AT = "2025-01-01T10:00:00+00:00"
PNR = "PNR-TEST000001"
REFERENCE = "BR-TEST0001"


@pytest.fixture
def booked_at():
    return IsoDateTime.from_string(BOOKED_AT)


@pytest.fixture
def create_flight():
    """FlightSnapshot を生成する Factory fixture"""

    def _factory(
        flight_id: str = "FL1",
        price_amount: str = "100",
        available_seats: int = 10,
        currency: str = "INR",
    ) -> FlightSnapshot:
        return FlightSnapshot(
            flight_id=flight_id,
            price=Money(amount=Decimal(price_amount), currency=Currency(currency)),
            available_seats=available_seats,
            source="DEL",
            destination="BOM",
            airline_name="IndiGo",
        )

    return _factory


@pytest.fixture
def create_booking():
    """Booking を生成する Factory fixture（Factories as fixtures パターン）"""

    def _factory(
        pnr: str = PNR,
        flight_id: str = "FL1",
        booker_email: str = "asha@example.com",
        total_amount: str = "200",
        booked_at: str = BOOKED_AT,
        seats_booked: int = 2,
        trip_type: TripType = TripType.ONE_WAY,
        status: BookingStatus = BookingStatus.BOOKED,
    ) -> Booking:
        return Booking(
            id=Pnr(pnr),
            flight_id=flight_id,
            booker_email=booker_email,
            total_amount=Money(amount=Decimal(total_amount), currency=Currency.inr()),
            booked_at=IsoDateTime.from_string(booked_at),
            seats_booked=seats_booked,
            trip_type=trip_type,
            status=status,
        )

    return _factory


@pytest.fixture
def create_passenger():
    """Passenger を生成する Factory fixture"""

    def _factory(
        pnr: str = PNR,
        index: int = 1,
        flight_id: str = "FL1",
        name: str = "Asha Rao",
        age: int = 34,
        gender: str = "FEMALE",
        seat_number: str | None = "A1",
        meal_type: str | None = None,
    ) -> Passenger:
        return Passenger(
            id=PassengerId.for_booking(Pnr(pnr), index),
            pnr=Pnr(pnr),
            flight_id=flight_id,
            name=name,
            age=age,
            gender=gender,
            seat_number=SeatNumber(seat_number) if seat_number else None,
            meal_type=meal_type,
        )

    return _factory


@pytest.fixture
def create_booking_details():
    """予約リクエスト（BookingDetails）を生成する Factory fixture"""

    def _factory(
        seat_numbers: list[str | None] | None = None,
        booker_email: str = "asha@example.com",
        trip_type: str | None = None,
    ) -> dict:
        seats = seat_numbers if seat_numbers is not None else ["A1", "A2"]
        return {
            "booker_email": booker_email,
            "trip_type": trip_type,
            "passengers": [
                {
                    "name": f"Passenger {i}",
                    "age": 30 + i,
                    "gender": "FEMALE",
                    "seat_number": seat,
                    "meal_type": "VEG",
                }
                for i, seat in enumerate(seats, start=1)
            ],
        }

    return _factory


@pytest.fixture
def flight_inventory(create_flight):
    """在庫サービスのモック（デフォルトはすべて成功）"""
    inventory = MagicMock()
    inventory.get_flight.return_value = create_flight()
    inventory.reserve_seats.return_value = SeatReservationResult(success=True)
    inventory.release_seats.return_value = SeatReleaseResult(success=True)
    return inventory


@pytest.fixture
def booking_repository():
    repository = MagicMock()
    repository.find_by_id.return_value = None
    repository.find_by_booker_email.return_value = []
    return repository


@pytest.fixture
def passenger_repository():
    repository = MagicMock()
    repository.find_by_pnr.return_value = []
    repository.find_by_flight_and_seat_numbers.return_value = []
    return repository


@pytest.fixture
def event_notifier():
    return MagicMock()


@pytest.fixture
def clock(booked_at):
    """テストから現在時刻を差し替えられる時計"""

    class FixedClock:
        def __init__(self) -> None:
            self.now = booked_at

        def __call__(self) -> IsoDateTime:
            return self.now

    return FixedClock()


@pytest.fixture
def orchestrator(
    flight_inventory, booking_repository, passenger_repository, event_notifier, clock
):
    return BookingOrchestrator(
        flight_inventory=flight_inventory,
        booking_repository=booking_repository,
        passenger_repository=passenger_repository,
        event_notifier=event_notifier,
        factory=BookingFactory(pnr_generator=lambda: Pnr(PNR)),
        clock=clock,
        reference_generator=lambda: BookingReference(REFERENCE),
    )
