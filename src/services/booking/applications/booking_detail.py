from __future__ import annotations

from dataclasses import dataclass

from services.booking.domain.entity import Booking, Passenger
from services.booking.domain.gateway import FlightSnapshot


@dataclass(frozen=True)
class PassengerDetail:
    """搭乗者の参照モデル"""

    name: str
    age: int
    gender: str
    seat_number: str | None
    meal_type: str | None

    @classmethod
    def from_entity(cls, passenger: Passenger) -> PassengerDetail:
        return cls(
            name=passenger.name,
            age=passenger.age,
            gender=passenger.gender,
            seat_number=str(passenger.seat_number) if passenger.seat_number else None,
            meal_type=passenger.meal_type,
        )


@dataclass(frozen=True)
class BookingDetail:
    """予約の参照モデル（予約 + フライトの路線・航空会社 + 搭乗者）"""

    pnr: str
    flight_id: str
    status: str
    trip_type: str
    total_amount: str
    currency: str
    booked_at: str
    booker_email: str
    seats_booked: int
    source: str
    destination: str
    airline_name: str
    passengers: list[PassengerDetail]

    @classmethod
    def assemble(
        cls, booking: Booking, flight: FlightSnapshot, passengers: list[Passenger]
    ) -> BookingDetail:
        return cls(
            pnr=str(booking.pnr),
            flight_id=booking.flight_id,
            status=booking.status.value,
            trip_type=booking.trip_type.value,
            total_amount=str(booking.total_amount.amount),
            currency=str(booking.total_amount.currency),
            booked_at=str(booking.booked_at),
            booker_email=booking.booker_email,
            seats_booked=booking.seats_booked,
            source=flight.source,
            destination=flight.destination,
            airline_name=flight.airline_name,
            passengers=[PassengerDetail.from_entity(p) for p in passengers],
        )
