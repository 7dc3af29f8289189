from .booking_detail import BookingDetail, PassengerDetail
from .booking_orchestrator import CANCELLED_MESSAGE, BookingOrchestrator

__all__ = ["BookingDetail", "PassengerDetail", "BookingOrchestrator", "CANCELLED_MESSAGE"]
