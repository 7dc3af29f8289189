import json
from unittest.mock import patch

import pytest

from services.booking.applications import (
    CANCELLED_MESSAGE,
    BookingDetail,
    PassengerDetail,
)
from services.booking.domain.exception import (
    BookingAlreadyCancelledException,
    BookingHistoryNotFoundException,
    BookingNotFoundException,
    CancellationWindowExpiredException,
    CompensationFailedException,
    FlightUnavailableException,
    InsufficientSeatsException,
    SeatReleaseFailedException,
)
from services.booking.handlers import cancel, create, get, history


def _api_event(
    method: str, path: str, path_parameters: dict, body: str | None = None
) -> dict:
    return {
        "resource": path,
        "path": path,
        "httpMethod": method,
        "headers": {"Content-Type": "application/json"},
        "pathParameters": path_parameters,
        "queryStringParameters": None,
        "requestContext": {"requestId": "req-1", "stage": "prod"},
        "body": body,
        "isBase64Encoded": False,
    }


def _body(response: dict) -> dict:
    return json.loads(response["body"])


@pytest.fixture
def booking_detail():
    return BookingDetail(
        pnr="PNR-TEST000001",
        flight_id="FL1",
        status="BOOKED",
        trip_type="ONE_WAY",
        total_amount="200",
        currency="INR",
        booked_at="2025-01-01T10:00:00+00:00",
        booker_email="asha@example.com",
        seats_booked=2,
        source="DEL",
        destination="BOM",
        airline_name="IndiGo",
        passengers=[
            PassengerDetail(
                name="Asha Rao",
                age=34,
                gender="FEMALE",
                seat_number="A1",
                meal_type="VEG",
            ),
            PassengerDetail(
                name="Ravi Rao", age=36, gender="MALE", seat_number=None, meal_type=None
            ),
        ],
    )


class TestCreateBookingHandler:
    """POST /flights/{flight_id}/bookings"""

    @pytest.fixture
    def orchestrator(self):
        with patch("services.booking.handlers.create.build_orchestrator") as build:
            yield build.return_value

    def _event(self, payload) -> dict:
        body = payload if isinstance(payload, str) else json.dumps(payload)
        return _api_event(
            "POST", "/flights/FL1/bookings", {"flight_id": "FL1"}, body=body
        )

    @pytest.fixture
    def payload(self):
        return {
            "booker_email": "asha@example.com",
            "passengers": [
                {"name": "Asha Rao", "age": 34, "gender": "FEMALE", "seat_number": "a1"},
                {"name": "Ravi Rao", "age": 36, "gender": "MALE"},
            ],
        }

    def test_created(self, orchestrator, payload, booking_detail, lambda_context):
        orchestrator.create_booking.return_value = booking_detail

        response = create.lambda_handler(self._event(payload), lambda_context)

        assert response["statusCode"] == 201
        assert _body(response) == {"status": "success", "data": {"pnr": "PNR-TEST000001"}}
        flight_id, details = orchestrator.create_booking.call_args[0]
        assert flight_id == "FL1"
        assert details["booker_email"] == "asha@example.com"
        assert details["trip_type"] is None
        assert details["passengers"][0]["seat_number"] == "a1"
        assert details["passengers"][1]["seat_number"] is None

    def test_remaining_time_is_bound_in_seconds(
        self, orchestrator, payload, booking_detail, lambda_context
    ):
        orchestrator.create_booking.return_value = booking_detail

        create.lambda_handler(self._event(payload), lambda_context)

        (remaining_time,) = orchestrator.bind_remaining_time.call_args[0]
        assert remaining_time() == 20.0

    def test_empty_passengers_is_validation_error(
        self, orchestrator, payload, lambda_context
    ):
        payload["passengers"] = []

        response = create.lambda_handler(self._event(payload), lambda_context)

        assert response["statusCode"] == 400
        assert _body(response)["error_code"] == "VALIDATION_ERROR"
        orchestrator.create_booking.assert_not_called()

    def test_invalid_email_is_validation_error(
        self, orchestrator, payload, lambda_context
    ):
        payload["booker_email"] = "not-an-email"

        response = create.lambda_handler(self._event(payload), lambda_context)

        assert response["statusCode"] == 400
        assert _body(response)["details"][0]["loc"] == ["booker_email"]

    def test_blank_passenger_name_is_validation_error(
        self, orchestrator, payload, lambda_context
    ):
        payload["passengers"][0]["name"] = "   "

        response = create.lambda_handler(self._event(payload), lambda_context)

        assert response["statusCode"] == 400
        assert _body(response)["details"][0]["loc"] == ["passengers", 0, "name"]
        orchestrator.create_booking.assert_not_called()

    def test_passenger_fields_are_stripped(
        self, orchestrator, payload, booking_detail, lambda_context
    ):
        orchestrator.create_booking.return_value = booking_detail
        payload["passengers"][0]["name"] = "  Asha Rao "

        create.lambda_handler(self._event(payload), lambda_context)

        _, details = orchestrator.create_booking.call_args[0]
        assert details["passengers"][0]["name"] == "Asha Rao"

    def test_malformed_json_is_bad_request(self, orchestrator, lambda_context):
        response = create.lambda_handler(self._event("{not json"), lambda_context)

        assert response["statusCode"] == 400
        assert _body(response)["error_code"] == "BAD_REQUEST"

    @pytest.mark.parametrize(
        ("exc", "status_code", "error_code"),
        [
            (InsufficientSeatsException(2, 1), 400, "INSUFFICIENT_SEATS"),
            (FlightUnavailableException("FL1", "circuit open"), 503, "FLIGHT_SERVICE_UNAVAILABLE"),
            (CompensationFailedException("FL1", "BR-1", "timeout"), 500, "COMPENSATION_FAILED"),
        ],
    )
    def test_domain_errors(
        self, orchestrator, payload, lambda_context, exc, status_code, error_code
    ):
        orchestrator.create_booking.side_effect = exc

        response = create.lambda_handler(self._event(payload), lambda_context)

        assert response["statusCode"] == status_code
        assert _body(response)["error_code"] == error_code

    def test_unexpected_error_is_internal_error(
        self, orchestrator, payload, lambda_context
    ):
        orchestrator.create_booking.side_effect = RuntimeError("boom")

        response = create.lambda_handler(self._event(payload), lambda_context)

        assert response["statusCode"] == 500
        assert _body(response) == {
            "status": "error",
            "error_code": "INTERNAL_ERROR",
            "message": "Internal server error",
        }


class TestGetBookingHandler:
    """GET /bookings/{pnr}"""

    @pytest.fixture
    def orchestrator(self):
        with patch("services.booking.handlers.get.build_orchestrator") as build:
            yield build.return_value

    def test_found(self, orchestrator, booking_detail, lambda_context):
        orchestrator.get_booking_by_pnr.return_value = booking_detail
        event = _api_event("GET", "/bookings/PNR-TEST000001", {"pnr": "PNR-TEST000001"})

        response = get.lambda_handler(event, lambda_context)

        body = _body(response)
        assert response["statusCode"] == 200
        assert body["data"]["pnr"] == "PNR-TEST000001"
        assert body["data"]["total_amount"] == "200"
        assert body["data"]["passengers"][0]["seat_number"] == "A1"
        orchestrator.get_booking_by_pnr.assert_called_once_with("PNR-TEST000001")

    def test_not_found(self, orchestrator, lambda_context):
        orchestrator.get_booking_by_pnr.side_effect = BookingNotFoundException("PNR-NONE0001")
        event = _api_event("GET", "/bookings/PNR-NONE0001", {"pnr": "PNR-NONE0001"})

        response = get.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 404
        assert _body(response)["error_code"] == "BOOKING_NOT_FOUND"


class TestBookingHistoryHandler:
    """GET /bookers/{email}/bookings"""

    @pytest.fixture
    def orchestrator(self):
        with patch("services.booking.handlers.history.build_orchestrator") as build:
            yield build.return_value

    def test_history(self, orchestrator, booking_detail, lambda_context):
        orchestrator.get_booking_history.return_value = [booking_detail]
        event = _api_event(
            "GET",
            "/bookers/asha%40example.com/bookings",
            {"email": "asha%40example.com"},
        )

        response = history.lambda_handler(event, lambda_context)

        body = _body(response)
        assert response["statusCode"] == 200
        assert body["count"] == 1
        assert body["data"][0]["pnr"] == "PNR-TEST000001"
        orchestrator.get_booking_history.assert_called_once_with("asha@example.com")

    def test_empty_history(self, orchestrator, lambda_context):
        orchestrator.get_booking_history.side_effect = BookingHistoryNotFoundException(
            "nobody@example.com"
        )
        event = _api_event(
            "GET", "/bookers/nobody@example.com/bookings", {"email": "nobody@example.com"}
        )

        response = history.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 404


class TestCancelBookingHandler:
    """DELETE /bookings/{pnr}"""

    @pytest.fixture
    def orchestrator(self):
        with patch("services.booking.handlers.cancel.build_orchestrator") as build:
            yield build.return_value

    @pytest.fixture
    def event(self):
        return _api_event("DELETE", "/bookings/PNR-TEST000001", {"pnr": "PNR-TEST000001"})

    def test_cancelled(self, orchestrator, event, lambda_context):
        orchestrator.cancel_booking.return_value = CANCELLED_MESSAGE

        response = cancel.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 200
        assert _body(response) == {
            "status": "success",
            "message": "Booking cancelled successfully",
        }

    @pytest.mark.parametrize(
        ("exc", "status_code"),
        [
            (CancellationWindowExpiredException("PNR-TEST000001"), 400),
            (BookingAlreadyCancelledException("PNR-TEST000001"), 409),
            (BookingNotFoundException("PNR-TEST000001"), 404),
        ],
    )
    def test_rejected(self, orchestrator, event, lambda_context, exc, status_code):
        orchestrator.cancel_booking.side_effect = exc

        response = cancel.lambda_handler(event, lambda_context)

        assert response["statusCode"] == status_code

    def test_seat_release_failure_reports_cancelled_booking(
        self, orchestrator, event, lambda_context
    ):
        """座席解放に失敗しても予約がキャンセル済みであることを伝える"""
        orchestrator.cancel_booking.side_effect = SeatReleaseFailedException(
            "PNR-TEST000001", "timeout"
        )

        response = cancel.lambda_handler(event, lambda_context)

        body = _body(response)
        assert response["statusCode"] == 502
        assert body["error_code"] == "SEAT_RELEASE_FAILED"
        assert body["details"] == [
            {"pnr": "PNR-TEST000001", "booking_status": "CANCELLED"}
        ]
