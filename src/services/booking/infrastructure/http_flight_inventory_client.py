import os
from decimal import Decimal

import requests
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from services.booking.domain.exception import FlightNotFoundException
from services.booking.domain.gateway import (
    FlightInventoryClient,
    FlightInventoryError,
    FlightInventoryTransportError,
    FlightSnapshot,
    SeatReleaseResult,
    SeatReservationRequest,
    SeatReservationResult,
)
from services.shared.domain import Money
from services.shared.utils.validators import to_decimal

DEFAULT_CONNECT_TIMEOUT_SECONDS = 0.5
DEFAULT_READ_TIMEOUT_SECONDS = 1.5


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FlightPayload(_CamelModel):
    """GET /api/flights/{id} のレスポンス"""

    price: Decimal
    available_seats: int
    source: str = ""
    destination: str = ""
    airline_name: str = ""
    currency: str | None = None

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return to_decimal(v)


class SeatsPayload(_CamelModel):
    """reserve / release のリクエストボディ"""

    booking_reference: str
    count: int
    seat_numbers: list[str]


class ReserveSeatsPayload(_CamelModel):
    """POST /api/flights/{id}/reserve のレスポンス"""

    success: bool
    message: str | None = None


class HttpFlightInventoryClient(FlightInventoryClient):
    """HTTP(JSON) で在庫サービスを呼び出すクライアント

    通信のみを担当し、業務ロジックは持たない。
    - 接続エラー・タイムアウト・5xx は FlightInventoryTransportError（再試行対象）
    - 404 は FlightNotFoundException
    - それ以外の 4xx は FlightInventoryError
    """

    def __init__(
        self,
        base_url: str | None = None,
        connect_timeout: float | None = None,
        read_timeout: float | None = None,
        currency: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = (base_url or os.environ["FLIGHT_INVENTORY_BASE_URL"]).rstrip("/")
        connect_timeout = connect_timeout or float(
            os.getenv(
                "FLIGHT_INVENTORY_CONNECT_TIMEOUT_SECONDS",
                str(DEFAULT_CONNECT_TIMEOUT_SECONDS),
            )
        )
        read_timeout = read_timeout or float(
            os.getenv(
                "FLIGHT_INVENTORY_READ_TIMEOUT_SECONDS",
                str(DEFAULT_READ_TIMEOUT_SECONDS),
            )
        )
        # requests の (connect, read) 形式
        self.timeout = (connect_timeout, read_timeout)
        self.currency = currency or os.getenv("FLIGHT_INVENTORY_CURRENCY", "INR")
        self.session = session or requests.Session()

    @property
    def attempt_timeout_seconds(self) -> float:
        """1回の呼び出しにかかり得る最大秒数（接続 + 読み取り）"""
        connect, read = self.timeout
        return connect + read

    def get_flight(self, flight_id: str) -> FlightSnapshot:
        """フライト情報を取得する"""
        response = self._send("GET", f"/api/flights/{flight_id}")
        if response.status_code == 404:
            raise FlightNotFoundException(flight_id)
        self._raise_for_error(response)

        # 未対応の通貨・負の価格も不正なペイロードとして扱う
        try:
            payload = FlightPayload.model_validate(response.json())
            return FlightSnapshot(
                flight_id=flight_id,
                price=Money.of(payload.price, payload.currency or self.currency),
                available_seats=payload.available_seats,
                source=payload.source,
                destination=payload.destination,
                airline_name=payload.airline_name,
            )
        except (ValueError, ValidationError) as e:
            raise FlightInventoryError(f"Malformed flight payload: {e}") from e

    def reserve_seats(
        self, flight_id: str, request: SeatReservationRequest
    ) -> SeatReservationResult:
        """座席を確保する

        在庫サービスが success=false を返した場合（4xx を含む）は例外ではなく
        失敗結果として返す。
        """
        response = self._send(
            "POST", f"/api/flights/{flight_id}/reserve", json=self._body(request)
        )
        if response.status_code == 404:
            raise FlightNotFoundException(flight_id)
        if response.status_code >= 500:
            raise FlightInventoryTransportError(
                f"Flight inventory returned HTTP {response.status_code}"
            )

        try:
            payload = ReserveSeatsPayload.model_validate(response.json())
        except (ValueError, ValidationError):
            self._raise_for_error(response)
            raise FlightInventoryError("Malformed reservation payload")

        return SeatReservationResult(
            success=payload.success and response.ok,
            message=payload.message or "",
        )

    def release_seats(
        self, flight_id: str, request: SeatReservationRequest
    ) -> SeatReleaseResult:
        """座席を解放する"""
        response = self._send(
            "POST", f"/api/flights/{flight_id}/release", json=self._body(request)
        )
        self._raise_for_error(response)
        return SeatReleaseResult(success=True)

    def _send(self, method: str, path: str, **kwargs) -> requests.Response:
        try:
            return self.session.request(
                method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs
            )
        except requests.RequestException as e:
            raise FlightInventoryTransportError(
                f"{method} {path} failed: {e}"
            ) from e

    @staticmethod
    def _raise_for_error(response: requests.Response) -> None:
        if response.status_code >= 500:
            raise FlightInventoryTransportError(
                f"Flight inventory returned HTTP {response.status_code}"
            )
        if response.status_code >= 400:
            raise FlightInventoryError(
                f"Flight inventory returned HTTP {response.status_code}: "
                f"{response.text}"
            )

    @staticmethod
    def _body(request: SeatReservationRequest) -> dict:
        return SeatsPayload(
            booking_reference=request.reference,
            count=request.count,
            seat_numbers=list(request.seat_numbers),
        ).model_dump(by_alias=True)
