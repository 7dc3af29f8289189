from .booking import Booking
from .passenger import Passenger

__all__ = ["Booking", "Passenger"]
