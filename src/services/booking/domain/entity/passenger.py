from services.booking.domain.value_object import PassengerId, Pnr, SeatNumber
from services.shared.domain import Entity


class Passenger(Entity[PassengerId]):
    """搭乗者

    作成後は変更しない。座席番号は任意（未指定の場合は在庫側で割り当て）。
    """

    def __init__(
        self,
        id: PassengerId,
        pnr: Pnr,
        flight_id: str,
        name: str,
        age: int,
        gender: str,
        seat_number: SeatNumber | None = None,
        meal_type: str | None = None,
    ) -> None:
        super().__init__(id)

        if not name or not name.strip():
            raise ValueError("Passenger name cannot be empty")
        if age < 0:
            raise ValueError("Passenger age cannot be negative")

        self._pnr = pnr
        self._flight_id = flight_id
        self._name = name
        self._age = age
        self._gender = gender
        self._seat_number = seat_number
        self._meal_type = meal_type

    @property
    def pnr(self) -> Pnr:
        return self._pnr

    @property
    def flight_id(self) -> str:
        return self._flight_id

    @property
    def name(self) -> str:
        return self._name

    @property
    def age(self) -> int:
        return self._age

    @property
    def gender(self) -> str:
        return self._gender

    @property
    def seat_number(self) -> SeatNumber | None:
        return self._seat_number

    @property
    def meal_type(self) -> str | None:
        return self._meal_type
