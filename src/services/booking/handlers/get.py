from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.handlers.bootstrap import build_orchestrator, remaining_seconds
from services.booking.handlers.response_models import to_response
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
    """予約詳細取得 Lambda Handler"""

    pnr = (event.path_parameters or {}).get("pnr")
    if not pnr:
        return bad_request_response("pnr is required")

    logger.info("Fetching booking details", extra={"pnr": pnr})

    try:
        orchestrator = build_orchestrator()
        orchestrator.bind_remaining_time(remaining_seconds(context))
        detail = orchestrator.get_booking_by_pnr(pnr)
    except DomainException as e:
        return error_response(e)
    except Exception:
        logger.exception("Failed to fetch booking details")
        return internal_error_response()

    return api_response(200, to_response(detail))
