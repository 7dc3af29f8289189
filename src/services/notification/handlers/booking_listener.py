from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.parser import envelopes, event_parser
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.notification.handlers.request_models import BookingEventDetail

logger = Logger()


@logger.inject_lambda_context
@event_parser(model=BookingEventDetail, envelope=envelopes.EventBridgeEnvelope)
def lambda_handler(event: BookingEventDetail, context: LambdaContext) -> dict:
    """予約イベントの購読 Lambda ハンドラ

    予約サービスが発行した BookingCreated / BookingCancelled を受け取り記録する。
    配信は at-least-once のため、同じイベントを複数回受け取ることがある。
    """
    logger.append_keys(pnr=event.pnr, event_type=event.event_type)
    logger.info(
        "Booking event received",
        extra={
            "flight_id": event.flight_id,
            "occurred_at": event.occurred_at.isoformat(),
        },
    )
    return {"status": "success", "pnr": event.pnr, "event_type": event.event_type}
