from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from services.booking.handlers.bootstrap import build_orchestrator, remaining_seconds
from services.booking.handlers.request_models import CreateBookingRequest
from services.booking.handlers.response_models import to_created_response
from services.shared.domain import DomainException
from services.shared.utils import (
    api_response,
    bad_request_response,
    error_response,
    internal_error_response,
    validation_error_response,
)

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """予約作成 Lambda Handler

    POST /flights/{flight_id}/bookings
    座席を確保して予約を作成し、PNR を 201 で返す。
    """
    flight_id = (event.path_parameters or {}).get("flight_id")
    if not flight_id:
        return bad_request_response("flight_id is required")

    logger.info("Received create booking request", extra={"flight_id": flight_id})

    try:
        request = CreateBookingRequest.model_validate(event.json_body or {})
    except ValidationError as e:
        return validation_error_response(e)
    except ValueError:
        return bad_request_response("Request body must be valid JSON")

    try:
        orchestrator = build_orchestrator()
        orchestrator.bind_remaining_time(remaining_seconds(context))
        detail = orchestrator.create_booking(
            flight_id, request.to_booking_details()
        )
    except DomainException as e:
        logger.warning(
            "Create booking rejected",
            extra={"flight_id": flight_id, "error_code": e.error_code},
        )
        return error_response(e)
    except Exception:
        logger.exception("Failed to create booking")
        return internal_error_response()

    return api_response(201, to_created_response(detail))
