from .booking_event_type import BookingEventType
from .booking_status import BookingStatus
from .trip_type import TripType

__all__ = ["BookingStatus", "TripType", "BookingEventType"]
