from pydantic import BaseModel, ConfigDict, Field

from services.booking.domain.enum import TripType
from services.booking.domain.factory import BookingDetails, PassengerDetails


class PassengerRequest(BaseModel):
    """搭乗者の入力スキーマ"""

    # 空白だけの名前・性別は min_length で弾く
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100, examples=["Asha Rao"])
    age: int = Field(..., ge=0, le=150, examples=[34])
    gender: str = Field(..., min_length=1, max_length=20, examples=["FEMALE"])
    seat_number: str | None = Field(
        default=None,
        max_length=8,
        description="座席番号（未指定なら在庫サービス側で割り当て）",
        examples=["12A"],
    )
    meal_type: str | None = Field(default=None, max_length=20, examples=["VEG"])


class CreateBookingRequest(BaseModel):
    """予約作成リクエストスキーマ"""

    booker_email: str = Field(
        ...,
        pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$",
        description="予約者のメールアドレス",
        examples=["asha@example.com"],
    )
    trip_type: TripType | None = Field(
        default=None, description="旅程種別（未指定なら ONE_WAY）"
    )
    passengers: list[PassengerRequest] = Field(..., min_length=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "booker_email": "asha@example.com",
                    "trip_type": "ONE_WAY",
                    "passengers": [
                        {
                            "name": "Asha Rao",
                            "age": 34,
                            "gender": "FEMALE",
                            "seat_number": "12A",
                            "meal_type": "VEG",
                        }
                    ],
                }
            ]
        }
    }

    def to_booking_details(self) -> BookingDetails:
        """リクエストから BookingDetails を構築する"""
        passengers: list[PassengerDetails] = [
            {
                "name": p.name,
                "age": p.age,
                "gender": p.gender,
                "seat_number": p.seat_number,
                "meal_type": p.meal_type,
            }
            for p in self.passengers
        ]
        return {
            "booker_email": self.booker_email,
            "trip_type": self.trip_type.value if self.trip_type else None,
            "passengers": passengers,
        }
