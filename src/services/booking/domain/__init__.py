from .entity import Booking as Booking
from .entity import Passenger as Passenger
from .enum import BookingEventType as BookingEventType
from .enum import BookingStatus as BookingStatus
from .enum import TripType as TripType
from .event import BookingEvent as BookingEvent
from .factory import BookingDetails as BookingDetails
from .factory import BookingFactory as BookingFactory
from .factory import PassengerDetails as PassengerDetails
from .repository import BookingRepository as BookingRepository
from .repository import PassengerRepository as PassengerRepository
from .value_object import BookingReference as BookingReference
from .value_object import PassengerId as PassengerId
from .value_object import Pnr as Pnr
from .value_object import SeatNumber as SeatNumber
