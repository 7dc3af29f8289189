from decimal import Decimal
from unittest.mock import MagicMock

import pytest
import requests

from services.booking.domain.exception import FlightNotFoundException
from services.booking.domain.gateway import (
    FlightInventoryError,
    FlightInventoryTransportError,
    SeatReservationRequest,
)
from services.booking.infrastructure import HttpFlightInventoryClient
from services.shared.domain import Currency


def _response(status_code: int, body=None, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.text = text
    if body is None:
        response.json.side_effect = ValueError("No JSON body")
    else:
        response.json.return_value = body
    return response


class TestHttpFlightInventoryClient:
    """HttpFlightInventoryClient のテスト"""

    @pytest.fixture
    def session(self):
        return MagicMock()

    @pytest.fixture
    def client(self, session):
        return HttpFlightInventoryClient(
            base_url="http://inventory.local/",
            connect_timeout=0.5,
            read_timeout=1.5,
            currency="INR",
            session=session,
        )

    @pytest.fixture
    def request_body(self):
        return SeatReservationRequest(
            reference="BR-TEST0001", count=2, seat_numbers=("A1", "A2")
        )

    def test_get_flight(self, client, session):
        session.request.return_value = _response(
            200,
            {
                "price": 4999.5,
                "availableSeats": 12,
                "source": "DEL",
                "destination": "BOM",
                "airlineName": "IndiGo",
            },
        )

        flight = client.get_flight("FL1")

        session.request.assert_called_once_with(
            "GET", "http://inventory.local/api/flights/FL1", timeout=(0.5, 1.5)
        )
        assert flight.flight_id == "FL1"
        assert flight.price.amount == Decimal("4999.5")
        assert flight.price.currency == Currency.inr()
        assert flight.available_seats == 12
        assert flight.airline_name == "IndiGo"

    def test_get_flight_uses_currency_from_payload(self, client, session):
        session.request.return_value = _response(
            200, {"price": "120", "availableSeats": 1, "currency": "USD"}
        )

        assert client.get_flight("FL1").price.currency == Currency.usd()

    def test_get_flight_not_found(self, client, session):
        session.request.return_value = _response(404, text="not found")

        with pytest.raises(FlightNotFoundException):
            client.get_flight("FL404")

    def test_server_error_is_transport_error(self, client, session):
        """5xx は再試行対象の通信エラー"""
        session.request.return_value = _response(503, text="unavailable")

        with pytest.raises(FlightInventoryTransportError):
            client.get_flight("FL1")

    def test_connection_error_is_transport_error(self, client, session):
        session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(FlightInventoryTransportError):
            client.get_flight("FL1")

    def test_malformed_payload_is_inventory_error(self, client, session):
        session.request.return_value = _response(200, {"price": "free"})

        with pytest.raises(FlightInventoryError) as exc_info:
            client.get_flight("FL1")

        assert not isinstance(exc_info.value, FlightInventoryTransportError)

    @pytest.mark.parametrize(
        "body",
        [
            {"price": "120", "availableSeats": 1, "currency": "GBP"},
            {"price": "-1", "availableSeats": 1},
        ],
    )
    def test_unusable_price_is_inventory_error(self, client, session, body):
        """未対応の通貨・負の価格は型付きの在庫エラーとして返す"""
        session.request.return_value = _response(200, body)

        with pytest.raises(FlightInventoryError, match="Malformed flight payload"):
            client.get_flight("FL1")

    def test_reserve_seats_sends_correlation_reference(
        self, client, session, request_body
    ):
        session.request.return_value = _response(200, {"success": True})

        result = client.reserve_seats("FL1", request_body)

        assert result.success is True
        session.request.assert_called_once_with(
            "POST",
            "http://inventory.local/api/flights/FL1/reserve",
            timeout=(0.5, 1.5),
            json={
                "bookingReference": "BR-TEST0001",
                "count": 2,
                "seatNumbers": ["A1", "A2"],
            },
        )

    def test_reserve_seats_rejected_is_a_result(self, client, session, request_body):
        """在庫サービスの業務的な拒否は例外ではなく失敗結果"""
        session.request.return_value = _response(
            409, {"success": False, "message": "Seat A1 already reserved"}
        )

        result = client.reserve_seats("FL1", request_body)

        assert result.success is False
        assert result.message == "Seat A1 already reserved"

    def test_reserve_seats_server_error(self, client, session, request_body):
        session.request.return_value = _response(500, {"success": False})

        with pytest.raises(FlightInventoryTransportError):
            client.reserve_seats("FL1", request_body)

    def test_release_seats(self, client, session, request_body):
        session.request.return_value = _response(200, {"success": True})

        result = client.release_seats("FL1", request_body)

        assert result.success is True
        assert session.request.call_args[0][1].endswith("/api/flights/FL1/release")

    def test_release_seats_client_error(self, client, session, request_body):
        session.request.return_value = _response(400, text="bad reference")

        with pytest.raises(FlightInventoryError, match="bad reference"):
            client.release_seats("FL1", request_body)

    def test_default_timeouts(self, monkeypatch):
        monkeypatch.delenv("FLIGHT_INVENTORY_CONNECT_TIMEOUT_SECONDS", raising=False)
        monkeypatch.delenv("FLIGHT_INVENTORY_READ_TIMEOUT_SECONDS", raising=False)

        client = HttpFlightInventoryClient(
            base_url="http://inventory.local", session=MagicMock()
        )

        assert client.timeout == (0.5, 1.5)
        assert client.attempt_timeout_seconds == 2.0

    def test_timeouts_from_env(self, monkeypatch):
        monkeypatch.setenv("FLIGHT_INVENTORY_CONNECT_TIMEOUT_SECONDS", "1")
        monkeypatch.setenv("FLIGHT_INVENTORY_READ_TIMEOUT_SECONDS", "4")

        client = HttpFlightInventoryClient(
            base_url="http://inventory.local", session=MagicMock()
        )

        assert client.attempt_timeout_seconds == 5.0
