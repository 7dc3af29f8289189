from typing import Callable

from aws_lambda_powertools import Logger

from services.booking.applications.booking_detail import BookingDetail
from services.booking.domain.entity import Booking, Passenger
from services.booking.domain.exception import (
    BookingAlreadyCancelledException,
    BookingHistoryNotFoundException,
    BookingNotFoundException,
    BookingPersistenceFailedException,
    CompensationFailedException,
    FlightNotFoundException,
    FlightUnavailableException,
    InsufficientSeatsException,
    PassengerPersistenceFailedException,
    ReservationFailedException,
    SeatConflictException,
    SeatReleaseFailedException,
)
from services.booking.domain.factory import (
    BookingDetails,
    BookingFactory,
    normalize_seat_numbers,
)
from services.booking.domain.gateway import (
    FlightInventoryClient,
    FlightInventoryError,
    FlightSnapshot,
    SeatReleaseResult,
    SeatReservationRequest,
)
from services.booking.domain.notifier import EventNotifier
from services.booking.domain.repository import (
    BookingRepository,
    PassengerRepository,
)
from services.booking.domain.value_object import BookingReference, Pnr, SeatNumber
from services.shared.domain import IsoDateTime
from services.shared.domain.exception import (
    BusinessRuleViolationException,
    DuplicateResourceException,
    OptimisticLockException,
)

logger = Logger(child=True)

CANCELLED_MESSAGE = "Booking cancelled successfully"


class BookingOrchestrator:
    """予約サガのオーケストレーター

    予約サービス（ローカル）と在庫サービス（リモート）をまたぐ座席予約を
    reserve → commit、失敗時は release（補償）で調整する。

    - 在庫サービス呼び出しは注入された FlightInventoryClient（通常はリトライ・
      サーキットブレーカー付きのラッパー）経由
    - ローカルとリモートをまたぐトランザクションはない。補償自体が失敗した場合は
      CompensationFailedException として必ず呼び出し元へ返す
    - イベント発行はコミット後のベストエフォート
    """

    def __init__(
        self,
        flight_inventory: FlightInventoryClient,
        booking_repository: BookingRepository,
        passenger_repository: PassengerRepository,
        event_notifier: EventNotifier,
        factory: BookingFactory | None = None,
        clock: Callable[[], IsoDateTime] = IsoDateTime.now,
        reference_generator: Callable[[], BookingReference] = BookingReference.generate,
    ) -> None:
        self._flight_inventory = flight_inventory
        self._booking_repository = booking_repository
        self._passenger_repository = passenger_repository
        self._event_notifier = event_notifier
        self._factory = factory or BookingFactory()
        self._clock = clock
        self._reference_generator = reference_generator

    def bind_remaining_time(self, remaining_time: Callable[[], float]) -> None:
        """呼び出しの残り実行時間を在庫クライアントに伝える"""
        self._flight_inventory.bind_remaining_time(remaining_time)

    # -------------------------------------------------------------------------
    # コマンド
    # -------------------------------------------------------------------------
    def create_booking(
        self, flight_id: str, booking_details: BookingDetails
    ) -> BookingDetail:
        """座席を確保して予約を作成する"""
        passenger_details = booking_details["passengers"]
        if not passenger_details:
            raise BusinessRuleViolationException("At least one passenger is required")
        passenger_count = len(passenger_details)

        flight = self._fetch_flight(flight_id)

        # 空席数は取得時点のスナップショットに対する事前チェック
        if flight.available_seats < passenger_count:
            raise InsufficientSeatsException(passenger_count, flight.available_seats)

        seat_numbers = normalize_seat_numbers(passenger_details)
        self._check_seat_conflicts(flight_id, seat_numbers)

        booking, passengers = self._factory.create(
            flight, booking_details, self._clock()
        )

        reservation = SeatReservationRequest(
            reference=str(self._reference_generator()),
            count=passenger_count,
            seat_numbers=tuple(str(seat) for seat in seat_numbers),
        )
        self._reserve_seats(flight_id, reservation)

        self._persist(booking, passengers, reservation)

        logger.info(
            "Booking created",
            extra={
                "pnr": str(booking.pnr),
                "flight_id": flight_id,
                "reference": reservation.reference,
                "seats": passenger_count,
            },
        )
        booking.record_created()
        self._publish_events(booking)
        return BookingDetail.assemble(booking, flight, passengers)

    def cancel_booking(self, pnr: str) -> str:
        """予約をキャンセルし、座席を解放する

        ローカルのステータス更新を先にコミットする。座席解放に失敗した場合は
        SeatReleaseFailedException（予約はキャンセル済み）を返す。
        """
        booking = self._find_booking(pnr)
        expected_status = booking.status
        booking.cancel(self._clock())

        try:
            self._booking_repository.update(booking, expected_status=expected_status)
        except OptimisticLockException as e:
            raise BookingAlreadyCancelledException(str(booking.pnr)) from e

        self._publish_events(booking)

        passengers = self._passenger_repository.find_by_pnr(booking.pnr)
        release = SeatReservationRequest(
            reference=str(booking.pnr),
            count=len(passengers),
            seat_numbers=tuple(
                str(p.seat_number) for p in passengers if p.seat_number is not None
            ),
        )
        result = self._release_seats(booking.flight_id, release)
        if not result.success:
            logger.error(
                "Booking cancelled locally but seat release failed; "
                "reconciliation required",
                extra={
                    "pnr": str(booking.pnr),
                    "flight_id": booking.flight_id,
                    "reason": result.message,
                },
            )
            raise SeatReleaseFailedException(str(booking.pnr), result.message)

        logger.info("Booking cancelled", extra={"pnr": str(booking.pnr)})
        return CANCELLED_MESSAGE

    # -------------------------------------------------------------------------
    # クエリ
    # -------------------------------------------------------------------------
    def get_booking_by_pnr(self, pnr: str) -> BookingDetail:
        """PNR で予約詳細を取得する"""
        booking = self._find_booking(pnr)
        return self._to_detail(booking)

    def get_booking_history(self, booker_email: str) -> list[BookingDetail]:
        """予約者の予約履歴を新しい順に取得する

        履歴が空の場合は BookingHistoryNotFoundException。
        いずれかのフライト取得に失敗した場合は全体を失敗とする。
        """
        bookings = self._booking_repository.find_by_booker_email(booker_email)
        if not bookings:
            raise BookingHistoryNotFoundException(booker_email)
        return [self._to_detail(booking) for booking in bookings]

    # -------------------------------------------------------------------------
    # 内部処理
    # -------------------------------------------------------------------------
    def _find_booking(self, pnr: str) -> Booking:
        try:
            key = Pnr(pnr)
        except ValueError as e:
            raise BookingNotFoundException(pnr) from e

        booking = self._booking_repository.find_by_id(key)
        if booking is None:
            raise BookingNotFoundException(pnr)
        return booking

    def _to_detail(self, booking: Booking) -> BookingDetail:
        flight = self._fetch_flight(booking.flight_id)
        passengers = self._passenger_repository.find_by_pnr(booking.pnr)
        return BookingDetail.assemble(booking, flight, passengers)

    def _fetch_flight(self, flight_id: str) -> FlightSnapshot:
        try:
            return self._flight_inventory.get_flight(flight_id)
        except (FlightNotFoundException, FlightUnavailableException):
            raise
        except FlightInventoryError as e:
            raise FlightUnavailableException(flight_id, str(e)) from e

    def _check_seat_conflicts(
        self, flight_id: str, seat_numbers: list[SeatNumber]
    ) -> None:
        """有効な予約の搭乗者が保持している座席との重複をチェックする

        ローカルの楽観的チェックのみ。座席割り当ての最終判断は在庫サービス。
        """
        if not seat_numbers:
            return

        holders = self._passenger_repository.find_by_flight_and_seat_numbers(
            flight_id, seat_numbers
        )
        active_by_pnr: dict[Pnr, bool] = {}
        taken: list[str] = []
        for passenger in holders:
            if passenger.pnr not in active_by_pnr:
                booking = self._booking_repository.find_by_id(passenger.pnr)
                active_by_pnr[passenger.pnr] = booking is not None and booking.is_active
            seat = str(passenger.seat_number)
            if active_by_pnr[passenger.pnr] and seat not in taken:
                taken.append(seat)

        if taken:
            raise SeatConflictException(taken)

    def _reserve_seats(self, flight_id: str, request: SeatReservationRequest) -> None:
        try:
            result = self._flight_inventory.reserve_seats(flight_id, request)
        except (FlightInventoryError, FlightNotFoundException) as e:
            raise ReservationFailedException(str(e)) from e

        if not result.success:
            raise ReservationFailedException(
                result.message or "Unknown reservation failure"
            )

    def _release_seats(
        self, flight_id: str, request: SeatReservationRequest
    ) -> SeatReleaseResult:
        try:
            return self._flight_inventory.release_seats(flight_id, request)
        except FlightInventoryError as e:
            return SeatReleaseResult(success=False, message=str(e))

    def _persist(
        self,
        booking: Booking,
        passengers: list[Passenger],
        reservation: SeatReservationRequest,
    ) -> None:
        """予約と搭乗者を一括で保存する。失敗時は確保済み座席を解放する

        保存はすべてか無しかのどちらかで、失敗時に予約行は残らない。
        """
        try:
            self._booking_repository.save(booking, passengers)
        except DuplicateResourceException as e:
            self._compensate(booking, reservation, e)
            raise BookingPersistenceFailedException(
                f"Failed to save booking {booking.pnr}: {e}"
            ) from e
        except Exception as e:
            self._compensate(booking, reservation, e)
            raise PassengerPersistenceFailedException(str(booking.pnr), str(e)) from e

    def _compensate(
        self,
        booking: Booking,
        reservation: SeatReservationRequest,
        cause: Exception,
    ) -> None:
        """確保済み座席を同じ相関IDで解放する"""
        logger.warning(
            "Releasing reserved seats after persistence failure",
            extra={
                "pnr": str(booking.pnr),
                "flight_id": booking.flight_id,
                "reference": reservation.reference,
                "error": str(cause),
            },
        )
        result = self._release_seats(booking.flight_id, reservation)
        if not result.success:
            logger.error(
                "Seat-release compensation failed; booking and reservation are "
                "in an indeterminate state",
                extra={
                    "pnr": str(booking.pnr),
                    "flight_id": booking.flight_id,
                    "reference": reservation.reference,
                    "reason": result.message,
                },
            )
            raise CompensationFailedException(
                booking.flight_id, reservation.reference, result.message
            ) from cause

    def _publish_events(self, booking: Booking) -> None:
        """コミット済みのドメインイベントを発行する（失敗しても処理は継続）"""
        for event in booking.flush_domain_events():
            try:
                self._event_notifier.publish(event)
            except Exception:
                logger.exception(
                    "Failed to publish booking event",
                    extra={"pnr": event.pnr, "event_type": event.event_type.value},
                )
