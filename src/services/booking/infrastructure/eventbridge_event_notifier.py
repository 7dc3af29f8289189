import json
import os

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from services.booking.domain.event import BookingEvent
from services.booking.domain.notifier import EventNotifier, EventPublishError

EVENT_SOURCE = "booking-service"

# 発行でリクエストを長時間ブロックしないよう短めに設定
_CLIENT_CONFIG = Config(
    connect_timeout=1,
    read_timeout=2,
    retries={"max_attempts": 2, "mode": "standard"},
)


class EventBridgeEventNotifier(EventNotifier):
    """EventBridge へ予約イベントを発行する EventNotifier の具象実装"""

    def __init__(self, event_bus_name: str | None = None, client=None) -> None:
        self.event_bus_name = event_bus_name or os.getenv("EVENT_BUS_NAME", "default")
        self.client = client or boto3.client("events", config=_CLIENT_CONFIG)

    def publish(self, event: BookingEvent) -> None:
        """イベントを1件発行する"""
        entry = {
            "Source": EVENT_SOURCE,
            "DetailType": event.event_type.detail_type,
            "Detail": json.dumps(event.to_dict()),
            "EventBusName": self.event_bus_name,
        }
        try:
            response = self.client.put_events(Entries=[entry])
        except (BotoCoreError, ClientError) as e:
            raise EventPublishError(
                f"Failed to publish {event.event_type.value}: {e}"
            ) from e

        if response.get("FailedEntryCount", 0) > 0:
            failed = response.get("Entries", [{}])[0]
            raise EventPublishError(
                f"EventBridge rejected {event.event_type.value} for {event.pnr}: "
                f"{failed.get('ErrorCode')} {failed.get('ErrorMessage')}"
            )
