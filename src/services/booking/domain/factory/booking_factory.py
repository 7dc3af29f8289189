from typing import Callable, NotRequired, TypedDict

from services.booking.domain.entity import Booking, Passenger
from services.booking.domain.enum import TripType
from services.booking.domain.gateway import FlightSnapshot
from services.booking.domain.value_object import PassengerId, Pnr, SeatNumber
from services.shared.domain import IsoDateTime


class PassengerDetails(TypedDict):
    """搭乗者の入力データ構造"""

    name: str
    age: int
    gender: str
    seat_number: NotRequired[str | None]
    meal_type: NotRequired[str | None]


class BookingDetails(TypedDict):
    """予約リクエストの入力データ構造"""

    booker_email: str
    trip_type: NotRequired[str | None]
    passengers: list[PassengerDetails]


def normalize_seat_numbers(passengers: list[PassengerDetails]) -> list[SeatNumber]:
    """指定された座席番号を正規化する（重複は除去しない）"""
    return [
        SeatNumber(p["seat_number"])
        for p in passengers
        if p.get("seat_number") and p["seat_number"].strip()
    ]


class BookingFactory:
    """予約・搭乗者エンティティのファクトリ

    - PNR の採番
    - 合計金額の算出（単価 × 人数）
    - 旅程種別のデフォルト（ONE_WAY）
    """

    def __init__(self, pnr_generator: Callable[[], Pnr] = Pnr.generate) -> None:
        self._pnr_generator = pnr_generator

    def create(
        self,
        flight: FlightSnapshot,
        booking_details: BookingDetails,
        booked_at: IsoDateTime,
    ) -> tuple[Booking, list[Passenger]]:
        """新規予約（BOOKED）と搭乗者を生成する

        Args:
            flight: 在庫サービスから取得したフライト情報
            booking_details: 予約者・搭乗者情報
            booked_at: 予約日時

        Returns:
            (Booking, 搭乗者のリスト)
        """
        pnr = self._pnr_generator()
        passenger_details = booking_details["passengers"]
        trip_type = booking_details.get("trip_type")

        booking = Booking(
            id=pnr,
            flight_id=flight.flight_id,
            booker_email=booking_details["booker_email"],
            total_amount=flight.price.multiply(len(passenger_details)),
            booked_at=booked_at,
            seats_booked=len(passenger_details),
            trip_type=TripType(trip_type) if trip_type else TripType.ONE_WAY,
        )
        passengers = [
            self._create_passenger(pnr, flight.flight_id, index, details)
            for index, details in enumerate(passenger_details, start=1)
        ]
        return booking, passengers

    def _create_passenger(
        self, pnr: Pnr, flight_id: str, index: int, details: PassengerDetails
    ) -> Passenger:
        seat = details.get("seat_number")
        return Passenger(
            id=PassengerId.for_booking(pnr, index),
            pnr=pnr,
            flight_id=flight_id,
            name=details["name"],
            age=details["age"],
            gender=details["gender"],
            seat_number=SeatNumber(seat) if seat and seat.strip() else None,
            meal_type=details.get("meal_type"),
        )
