import os
from decimal import Decimal

import boto3
from boto3.dynamodb.conditions import Attr, Key
from boto3.dynamodb.types import TypeSerializer
from botocore.exceptions import ClientError

from services.booking.domain.entity import Booking, Passenger
from services.booking.domain.enum import BookingStatus, TripType
from services.booking.domain.repository import BookingRepository
from services.booking.domain.value_object import Pnr
from services.booking.infrastructure.dynamodb_passenger_repository import (
    passenger_to_item,
)
from services.shared.domain import Currency, IsoDateTime, Money
from services.shared.domain.exception.exceptions import (
    DuplicateResourceException,
    OptimisticLockException,
)

# TransactWriteItems の1リクエストあたりの上限
MAX_TRANSACT_ITEMS = 100

_serializer = TypeSerializer()


class DynamoDBBookingRepository(BookingRepository):
    """DynamoDBを使用したBookingRepository の具象実装

    - PK/SK: BOOKING#{pnr}
    - GSI1: BOOKER#{email} / BOOKED_AT#{iso}（予約履歴を日時降順で取得）
    """

    def __init__(self, table_name: str | None = None, table=None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        if table is None:
            self.dynamodb = boto3.resource("dynamodb")
            table = self.dynamodb.Table(self.table_name)
        self.table = table

    def save(self, booking: Booking, passengers: list[Passenger]) -> None:
        """予約と搭乗者を TransactWriteItems で一括保存する

        予約アイテムに attribute_not_exists(PK) の条件を付ける。
        いずれかの書き込みが失敗した場合はどのアイテムも保存されない。
        """
        items = [self._to_item(booking)] + [passenger_to_item(p) for p in passengers]
        if len(items) > MAX_TRANSACT_ITEMS:
            raise ValueError(
                f"Too many passengers for one booking: {len(passengers)} "
                f"(max {MAX_TRANSACT_ITEMS - 1})"
            )

        booking_put = {
            "Put": {
                "TableName": self.table.name,
                "Item": self._serialize(items[0]),
                "ConditionExpression": "attribute_not_exists(PK)",
            }
        }
        passenger_puts = [
            {"Put": {"TableName": self.table.name, "Item": self._serialize(item)}}
            for item in items[1:]
        ]
        try:
            self.table.meta.client.transact_write_items(
                TransactItems=[booking_put, *passenger_puts]
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "TransactionCanceledException":
                reasons = e.response.get("CancellationReasons") or [{}]
                if reasons[0].get("Code") == "ConditionalCheckFailed":
                    raise DuplicateResourceException(
                        f"Booking already exists: {booking.pnr}"
                    ) from e
            raise

    def find_by_id(self, pnr: Pnr) -> Booking | None:
        """PNR で検索"""
        response = self.table.get_item(
            Key={"PK": f"BOOKING#{pnr}", "SK": f"BOOKING#{pnr}"},
            ConsistentRead=True,
        )
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def find_by_booker_email(self, booker_email: str) -> list[Booking]:
        """予約者メールアドレスで検索する（予約日時の降順）"""
        kwargs: dict = {
            "IndexName": "GSI1",
            "KeyConditionExpression": Key("GSI1PK").eq(f"BOOKER#{booker_email}")
            & Key("GSI1SK").begins_with("BOOKED_AT#"),
            "ScanIndexForward": False,
        }
        items: list[dict] = []
        while True:
            response = self.table.query(**kwargs)
            items.extend(response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break
            kwargs["ExclusiveStartKey"] = last_key
        return [self._to_entity(item) for item in items]

    def update(
        self, booking: Booking, expected_status: BookingStatus | None = None
    ) -> None:
        """予約のステータスを更新する"""
        kwargs: dict = {
            "Key": {
                "PK": f"BOOKING#{booking.pnr}",
                "SK": f"BOOKING#{booking.pnr}",
            },
            "UpdateExpression": "SET #status = :status",
            "ExpressionAttributeNames": {"#status": "status"},
            "ExpressionAttributeValues": {":status": booking.status.value},
        }

        if expected_status is not None:
            kwargs["ConditionExpression"] = Attr("status").eq(expected_status.value)

        try:
            self.table.update_item(**kwargs)
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise OptimisticLockException(
                    f"Booking status conflict: "
                    f"expected {expected_status.value}, "
                    f"pnr={booking.pnr}"
                ) from e
            raise

    def _to_item(self, booking: Booking) -> dict:
        return {
            "PK": f"BOOKING#{booking.pnr}",
            "SK": f"BOOKING#{booking.pnr}",
            "entity_type": "BOOKING",
            "pnr": str(booking.pnr),
            "flight_id": booking.flight_id,
            "booker_email": booking.booker_email,
            "status": booking.status.value,
            "trip_type": booking.trip_type.value,
            "total_amount": str(booking.total_amount.amount),
            "currency": str(booking.total_amount.currency),
            "booked_at": str(booking.booked_at),
            "seats_booked": booking.seats_booked,
            "GSI1PK": f"BOOKER#{booking.booker_email}",
            "GSI1SK": f"BOOKED_AT#{booking.booked_at}",
        }

    @staticmethod
    def _serialize(item: dict) -> dict:
        """低レベル API 用に DynamoDB の型表現へ変換する"""
        return {key: _serializer.serialize(value) for key, value in item.items()}

    def _to_entity(self, item: dict) -> Booking:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        return Booking(
            id=Pnr(value=item["pnr"]),
            flight_id=item["flight_id"],
            booker_email=item["booker_email"],
            total_amount=Money(
                amount=Decimal(item["total_amount"]),
                currency=Currency(item["currency"]),
            ),
            booked_at=IsoDateTime.from_string(item["booked_at"]),
            seats_booked=int(item["seats_booked"]),
            trip_type=TripType(item["trip_type"]),
            status=BookingStatus(item["status"]),
        )
