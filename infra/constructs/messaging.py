from aws_cdk import aws_events as events
from aws_cdk import aws_events_targets as targets
from aws_cdk import aws_lambda as _lambda
from constructs import Construct

BOOKING_EVENT_SOURCE = "booking-service"
BOOKING_DETAIL_TYPES = ["BookingCreated", "BookingCancelled"]


class Messaging(Construct):
    """予約イベント用の EventBridge バスと購読ルール"""

    def __init__(self, scope: Construct, id: str) -> None:
        super().__init__(scope, id)

        self.event_bus = events.EventBus(
            self, "BookingEventBus", event_bus_name="booking-events"
        )

    def subscribe(self, id: str, listener: _lambda.IFunction) -> events.Rule:
        """予約ライフサイクルイベントを listener へ配信するルールを追加する"""
        return events.Rule(
            self,
            id,
            event_bus=self.event_bus,
            event_pattern=events.EventPattern(
                source=[BOOKING_EVENT_SOURCE],
                detail_type=BOOKING_DETAIL_TYPES,
            ),
            targets=[targets.LambdaFunction(listener, retry_attempts=2)],
        )
