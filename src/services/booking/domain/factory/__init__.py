from .booking_factory import (
    BookingDetails,
    BookingFactory,
    PassengerDetails,
    normalize_seat_numbers,
)

__all__ = [
    "BookingDetails",
    "BookingFactory",
    "PassengerDetails",
    "normalize_seat_numbers",
]
