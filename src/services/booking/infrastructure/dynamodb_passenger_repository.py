import os

import boto3
from boto3.dynamodb.conditions import Key

from services.booking.domain.entity import Passenger
from services.booking.domain.repository import PassengerRepository
from services.booking.domain.value_object import PassengerId, Pnr, SeatNumber


def passenger_to_item(passenger: Passenger) -> dict:
    """搭乗者を DynamoDB アイテムに変換する（座席指定ありのみ GSI2 に載せる）"""
    item = {
        "PK": f"BOOKING#{passenger.pnr}",
        "SK": f"PASSENGER#{passenger.id.index:03d}",
        "entity_type": "PASSENGER",
        "passenger_id": str(passenger.id),
        "pnr": str(passenger.pnr),
        "flight_id": passenger.flight_id,
        "name": passenger.name,
        "age": passenger.age,
        "gender": passenger.gender,
    }
    if passenger.meal_type:
        item["meal_type"] = passenger.meal_type
    if passenger.seat_number is not None:
        item["seat_number"] = str(passenger.seat_number)
        item["GSI2PK"] = f"FLIGHT#{passenger.flight_id}"
        item["GSI2SK"] = f"SEAT#{passenger.seat_number}"
    return item


class DynamoDBPassengerRepository(PassengerRepository):
    """DynamoDBを使用したPassengerRepository の具象実装

    - PK: BOOKING#{pnr} / SK: PASSENGER#{連番}
    - GSI2（座席指定ありのみ）: FLIGHT#{flight_id} / SEAT#{seat}

    書き込みは予約と同一トランザクションで DynamoDBBookingRepository.save が行う。
    """

    def __init__(self, table_name: str | None = None, table=None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        if table is None:
            self.dynamodb = boto3.resource("dynamodb")
            table = self.dynamodb.Table(self.table_name)
        self.table = table

    def find_by_pnr(self, pnr: Pnr) -> list[Passenger]:
        """PNR で搭乗者を検索する"""
        response = self.table.query(
            KeyConditionExpression=Key("PK").eq(f"BOOKING#{pnr}")
            & Key("SK").begins_with("PASSENGER#"),
            ConsistentRead=True,
        )
        return [self._to_entity(item) for item in response.get("Items", [])]

    def find_by_flight_and_seat_numbers(
        self, flight_id: str, seat_numbers: list[SeatNumber]
    ) -> list[Passenger]:
        """同一フライトで指定座席を持つ搭乗者を検索する"""
        passengers: list[Passenger] = []
        for seat in dict.fromkeys(str(s) for s in seat_numbers):
            response = self.table.query(
                IndexName="GSI2",
                KeyConditionExpression=Key("GSI2PK").eq(f"FLIGHT#{flight_id}")
                & Key("GSI2SK").eq(f"SEAT#{seat}"),
            )
            passengers.extend(self._to_entity(item) for item in response.get("Items", []))
        return passengers

    def _to_entity(self, item: dict) -> Passenger:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        seat = item.get("seat_number")
        return Passenger(
            id=PassengerId(value=item["passenger_id"]),
            pnr=Pnr(value=item["pnr"]),
            flight_id=item["flight_id"],
            name=item["name"],
            age=int(item["age"]),
            gender=item["gender"],
            seat_number=SeatNumber(seat) if seat else None,
            meal_type=item.get("meal_type"),
        )
