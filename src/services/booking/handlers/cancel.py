from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.handlers.bootstrap import build_orchestrator, remaining_seconds
from services.booking.handlers.response_models import MessageResponse
from services.shared.domain import DomainException
from services.shared.utils import (
    api_response,
    bad_request_response,
    error_response,
    internal_error_response,
)

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """予約キャンセル Lambda Handler

    DELETE /bookings/{pnr}
    座席解放に失敗した場合は 502（予約自体はキャンセル済み）を返す。
    """
    pnr = (event.path_parameters or {}).get("pnr")
    if not pnr:
        return bad_request_response("pnr is required")

    logger.info("Received cancel booking request", extra={"pnr": pnr})

    try:
        orchestrator = build_orchestrator()
        orchestrator.bind_remaining_time(remaining_seconds(context))
        message = orchestrator.cancel_booking(pnr)
    except DomainException as e:
        logger.warning(
            "Cancel booking failed", extra={"pnr": pnr, "error_code": e.error_code}
        )
        return error_response(e)
    except Exception:
        logger.exception("Failed to cancel booking")
        return internal_error_response()

    return api_response(200, MessageResponse(message=message).model_dump())
