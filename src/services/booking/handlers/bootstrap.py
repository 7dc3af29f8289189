import os
from functools import lru_cache
from typing import Callable

import boto3
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.applications import BookingOrchestrator
from services.booking.infrastructure import (
    DynamoDBBookingRepository,
    DynamoDBPassengerRepository,
    EventBridgeEventNotifier,
    HttpFlightInventoryClient,
    ResilientFlightInventoryClient,
)
from services.shared.resilience import ResiliencePolicy


# =============================================================================
# 依存関係の組み立て（Composition Root）
# =============================================================================
@lru_cache(maxsize=1)
def build_orchestrator() -> BookingOrchestrator:
    """実行環境ごとに1度だけ組み立てる

    サーキットブレーカーの状態はウォームスタート間で引き継がれる。
    """
    table = boto3.resource("dynamodb").Table(os.environ["TABLE_NAME"])
    http_client = HttpFlightInventoryClient()
    flight_inventory = ResilientFlightInventoryClient(
        client=http_client,
        policy=ResiliencePolicy.from_env(),
        attempt_timeout=http_client.attempt_timeout_seconds,
    )
    return BookingOrchestrator(
        flight_inventory=flight_inventory,
        booking_repository=DynamoDBBookingRepository(table=table),
        passenger_repository=DynamoDBPassengerRepository(table=table),
        event_notifier=EventBridgeEventNotifier(),
    )


def remaining_seconds(context: LambdaContext) -> Callable[[], float]:
    """Lambda の残り実行時間を秒で返す関数"""
    return lambda: context.get_remaining_time_in_millis() / 1000
