from .booking_exceptions import (
    BookingAlreadyCancelledException,
    BookingHistoryNotFoundException,
    BookingNotFoundException,
    BookingPersistenceFailedException,
    CancellationWindowExpiredException,
    CompensationFailedException,
    FlightNotFoundException,
    FlightUnavailableException,
    InsufficientSeatsException,
    PassengerPersistenceFailedException,
    ReservationFailedException,
    SeatConflictException,
    SeatReleaseFailedException,
)

__all__ = [
    "BookingAlreadyCancelledException",
    "BookingHistoryNotFoundException",
    "BookingNotFoundException",
    "BookingPersistenceFailedException",
    "CancellationWindowExpiredException",
    "CompensationFailedException",
    "FlightNotFoundException",
    "FlightUnavailableException",
    "InsufficientSeatsException",
    "PassengerPersistenceFailedException",
    "ReservationFailedException",
    "SeatConflictException",
    "SeatReleaseFailedException",
]
