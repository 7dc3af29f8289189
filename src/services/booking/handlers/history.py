from urllib.parse import unquote

from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.handlers.bootstrap import build_orchestrator, remaining_seconds
from services.booking.handlers.response_models import to_list_response
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
    """予約履歴取得 Lambda Handler

    GET /bookers/{email}/bookings
    履歴が空の場合は 404 を返す。
    """

    email = (event.path_parameters or {}).get("email")
    if not email:
        return bad_request_response("email is required")
    email = unquote(email)

    logger.info("Listing booking history")

    try:
        orchestrator = build_orchestrator()
        orchestrator.bind_remaining_time(remaining_seconds(context))
        details = orchestrator.get_booking_history(email)
    except DomainException as e:
        return error_response(e)
    except Exception:
        logger.exception("Failed to list booking history")
        return internal_error_response()

    return api_response(200, to_list_response(details))
