from .booking_reference import BookingReference
from .passenger_id import PassengerId
from .pnr import Pnr
from .seat_number import SeatNumber

__all__ = ["BookingReference", "PassengerId", "Pnr", "SeatNumber"]
