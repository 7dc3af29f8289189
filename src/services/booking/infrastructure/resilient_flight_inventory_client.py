from typing import Callable, TypeVar

from aws_lambda_powertools import Logger

from services.booking.domain.exception import FlightUnavailableException
from services.booking.domain.gateway import (
    FlightInventoryClient,
    FlightInventoryError,
    FlightInventoryTransportError,
    FlightSnapshot,
    SeatReleaseResult,
    SeatReservationRequest,
    SeatReservationResult,
)
from services.shared.resilience import (
    CallNotPermittedError,
    CircuitBreaker,
    DeadlineExceededError,
    ResiliencePolicy,
    Retry,
    RetryExhaustedError,
)

logger = Logger(child=True)

T = TypeVar("T")

RESERVE_FALLBACK_MESSAGE = (
    "Fallback: seat reservation failed because the flight inventory service "
    "is unavailable"
)

_FALLBACK_ERRORS = (CallNotPermittedError, DeadlineExceededError, RetryExhaustedError)


class ResilientFlightInventoryClient(FlightInventoryClient):
    """リトライ・サーキットブレーカー・フォールバック付きの在庫クライアント

    Retry(CircuitBreaker(call)) の順で合成する。ブレーカーは3操作で共有。
    再試行・失敗記録の対象は FlightInventoryTransportError のみ。

    bind_remaining_time で呼び出しの残り時間を渡すと、期限までに完了しない
    試行は行わず DeadlineExceededError としてフォールバックする。

    フォールバック方針（リトライ枯渇・サーキットオープン・期限切れ時）:
    - get_flight: FlightUnavailableException を送出（架空のフライトは返さない）
    - reserve_seats: success=False の結果を返す（成功を偽装しない）
    - release_seats: ログを出して success=False の結果を返す（例外は伝播しない）
    """

    def __init__(
        self,
        client: FlightInventoryClient,
        policy: ResiliencePolicy | None = None,
        circuit_breaker: CircuitBreaker | None = None,
        retry: Retry | None = None,
        attempt_timeout: float = 0.0,
    ) -> None:
        policy = policy or ResiliencePolicy()
        self._client = client
        self._circuit_breaker = circuit_breaker or CircuitBreaker(
            name="flight-inventory",
            failure_rate_threshold=policy.failure_rate_threshold,
            sliding_window_size=policy.sliding_window_size,
            minimum_number_of_calls=policy.minimum_number_of_calls,
            wait_duration_in_open_state=policy.wait_duration_in_open_state_seconds,
            permitted_calls_in_half_open_state=policy.permitted_calls_in_half_open_state,
            record_on=(FlightInventoryTransportError,),
        )
        self._retry = retry or Retry(
            name="flight-inventory",
            max_attempts=policy.max_attempts,
            wait_duration=policy.wait_duration_seconds,
            backoff_multiplier=policy.backoff_multiplier,
            retry_on=(FlightInventoryTransportError,),
            attempt_timeout=attempt_timeout,
            deadline_margin=policy.deadline_margin_seconds,
        )

    def bind_remaining_time(self, remaining_time: Callable[[], float]) -> None:
        self._retry.remaining_time = remaining_time

    @property
    def circuit_breaker(self) -> CircuitBreaker:
        return self._circuit_breaker

    def get_flight(self, flight_id: str) -> FlightSnapshot:
        try:
            return self._execute(self._client.get_flight, flight_id)
        except _FALLBACK_ERRORS as e:
            logger.error(
                "Flight inventory unavailable; get_flight fallback invoked",
                extra={"flight_id": flight_id, "error": str(e)},
            )
            raise FlightUnavailableException(flight_id, str(e)) from e

    def reserve_seats(
        self, flight_id: str, request: SeatReservationRequest
    ) -> SeatReservationResult:
        try:
            return self._execute(self._client.reserve_seats, flight_id, request)
        except _FALLBACK_ERRORS as e:
            logger.error(
                "Reserve fallback invoked",
                extra={
                    "flight_id": flight_id,
                    "reference": request.reference,
                    "error": str(e),
                },
            )
            return SeatReservationResult(
                success=False, message=f"{RESERVE_FALLBACK_MESSAGE}: {e}"
            )

    def release_seats(
        self, flight_id: str, request: SeatReservationRequest
    ) -> SeatReleaseResult:
        try:
            return self._execute(self._client.release_seats, flight_id, request)
        except (*_FALLBACK_ERRORS, FlightInventoryError) as e:
            logger.error(
                "Release fallback invoked",
                extra={
                    "flight_id": flight_id,
                    "reference": request.reference,
                    "count": request.count,
                    "error": str(e),
                },
            )
            return SeatReleaseResult(success=False, message=str(e))

    def _execute(self, func: Callable[..., T], *args) -> T:
        return self._retry.call(self._circuit_breaker.call, func, *args)
