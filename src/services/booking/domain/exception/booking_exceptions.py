from services.shared.domain.exception import (
    BusinessRuleViolationException,
    ConflictException,
    PartialFailureException,
    PersistenceException,
    PolicyViolationException,
    ResourceNotFoundException,
    ServiceUnavailableException,
    UnrecoverableException,
)


class BookingNotFoundException(ResourceNotFoundException):
    """PNR に対応する予約が存在しない"""

    error_code = "BOOKING_NOT_FOUND"

    def __init__(self, pnr: str) -> None:
        super().__init__(f"Booking not found: {pnr}")
        self.pnr = pnr


class BookingHistoryNotFoundException(ResourceNotFoundException):
    """予約者の予約が1件も存在しない"""

    error_code = "BOOKING_HISTORY_NOT_FOUND"

    def __init__(self, booker_email: str) -> None:
        super().__init__(f"No bookings found for email: {booker_email}")
        self.booker_email = booker_email


class FlightNotFoundException(ResourceNotFoundException):
    """在庫サービスにフライトが存在しない"""

    error_code = "FLIGHT_NOT_FOUND"

    def __init__(self, flight_id: str) -> None:
        super().__init__(f"Flight not found: {flight_id}")
        self.flight_id = flight_id


class InsufficientSeatsException(BusinessRuleViolationException):
    """空席数が搭乗者数に満たない"""

    error_code = "INSUFFICIENT_SEATS"

    def __init__(self, requested: int, available: int) -> None:
        super().__init__(
            f"Not enough seats available: requested {requested}, available {available}"
        )
        self.requested = requested
        self.available = available


class SeatConflictException(BusinessRuleViolationException):
    """指定座席が有効な予約の搭乗者に割り当て済み"""

    error_code = "SEAT_CONFLICT"

    def __init__(self, taken_seats: list[str]) -> None:
        super().__init__(
            f"Seat(s) already taken: {', '.join(taken_seats)}", details=taken_seats
        )
        self.taken_seats = taken_seats


class ReservationFailedException(BusinessRuleViolationException):
    """在庫サービスでの座席確保に失敗した"""

    error_code = "RESERVATION_FAILED"

    def __init__(self, reason: str) -> None:
        super().__init__(f"Seat reservation failed: {reason}")
        self.reason = reason


class BookingAlreadyCancelledException(ConflictException):
    """キャンセル済みの予約を再度キャンセルしようとした"""

    error_code = "BOOKING_ALREADY_CANCELLED"

    def __init__(self, pnr: str) -> None:
        super().__init__(f"Booking already cancelled: {pnr}")
        self.pnr = pnr


class CancellationWindowExpiredException(PolicyViolationException):
    """予約から24時間以上経過している"""

    error_code = "CANCELLATION_WINDOW_EXPIRED"

    def __init__(self, pnr: str) -> None:
        super().__init__(
            f"Cancellation allowed only within 24 hours of booking: {pnr}"
        )
        self.pnr = pnr


class FlightUnavailableException(ServiceUnavailableException):
    """フライト情報を取得できない（在庫サービス障害）"""

    error_code = "FLIGHT_SERVICE_UNAVAILABLE"

    def __init__(self, flight_id: str, reason: str) -> None:
        super().__init__(f"Flight service unavailable for {flight_id}: {reason}")
        self.flight_id = flight_id
        self.reason = reason


class BookingPersistenceFailedException(PersistenceException):
    """予約の保存に失敗した（座席は解放済み）"""

    error_code = "BOOKING_PERSISTENCE_FAILED"


class PassengerPersistenceFailedException(PersistenceException):
    """予約・搭乗者の一括保存に失敗した（何も保存されず、座席は解放済み）"""

    error_code = "PASSENGER_PERSISTENCE_FAILED"

    def __init__(self, pnr: str, reason: str) -> None:
        super().__init__(f"Failed to save booking and passengers for {pnr}: {reason}")
        self.pnr = pnr


class SeatReleaseFailedException(PartialFailureException):
    """ローカルのキャンセルはコミット済みだが、座席解放に失敗した"""

    error_code = "SEAT_RELEASE_FAILED"

    def __init__(self, pnr: str, reason: str) -> None:
        super().__init__(
            f"Booking cancelled locally but releasing seats failed: {reason}",
            details=[{"pnr": pnr, "booking_status": "CANCELLED"}],
        )
        self.pnr = pnr
        self.booking_status = "CANCELLED"


class CompensationFailedException(UnrecoverableException):
    """永続化失敗後の座席解放（補償）も失敗した"""

    error_code = "COMPENSATION_FAILED"

    def __init__(self, flight_id: str, reference: str, reason: str) -> None:
        super().__init__(
            "Failed to save booking and seat-release compensation failed: "
            f"{reason}",
            details=[{"flight_id": flight_id, "reference": reference}],
        )
        self.flight_id = flight_id
        self.reference = reference
