from __future__ import annotations

from pydantic import BaseModel

from services.booking.applications import BookingDetail


class PassengerData(BaseModel):
    """搭乗者データのレスポンスモデル"""

    name: str
    age: int
    gender: str
    seat_number: str | None = None
    meal_type: str | None = None


class BookingData(BaseModel):
    """予約データのレスポンスモデル"""

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
    passengers: list[PassengerData]


class SuccessResponse(BaseModel):
    """成功レスポンスモデル"""

    status: str = "success"
    data: BookingData


class BookingListResponse(BaseModel):
    """予約履歴のレスポンスモデル"""

    status: str = "success"
    data: list[BookingData]
    count: int


class CreatedData(BaseModel):
    """予約作成で返すデータ"""

    pnr: str


class CreatedResponse(BaseModel):
    """予約作成のレスポンスモデル（PNR のみ返す）"""

    status: str = "success"
    data: CreatedData


class MessageResponse(BaseModel):
    """メッセージのみのレスポンスモデル"""

    status: str = "success"
    message: str


def to_booking_data(detail: BookingDetail) -> BookingData:
    """BookingDetail をレスポンスモデルに変換する"""
    return BookingData(
        pnr=detail.pnr,
        flight_id=detail.flight_id,
        status=detail.status,
        trip_type=detail.trip_type,
        total_amount=detail.total_amount,
        currency=detail.currency,
        booked_at=detail.booked_at,
        booker_email=detail.booker_email,
        seats_booked=detail.seats_booked,
        source=detail.source,
        destination=detail.destination,
        airline_name=detail.airline_name,
        passengers=[
            PassengerData(
                name=p.name,
                age=p.age,
                gender=p.gender,
                seat_number=p.seat_number,
                meal_type=p.meal_type,
            )
            for p in detail.passengers
        ],
    )


def to_response(detail: BookingDetail) -> dict:
    return SuccessResponse(data=to_booking_data(detail)).model_dump()


def to_list_response(details: list[BookingDetail]) -> dict:
    return BookingListResponse(
        data=[to_booking_data(d) for d in details], count=len(details)
    ).model_dump()


def to_created_response(detail: BookingDetail) -> dict:
    return CreatedResponse(data=CreatedData(pnr=detail.pnr)).model_dump()
