from .booking_event import BookingEvent

__all__ = ["BookingEvent"]
