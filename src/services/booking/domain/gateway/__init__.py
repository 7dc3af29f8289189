from .flight_inventory import (
    FlightInventoryClient,
    FlightInventoryError,
    FlightInventoryTransportError,
    FlightSnapshot,
    SeatReleaseResult,
    SeatReservationRequest,
    SeatReservationResult,
)

__all__ = [
    "FlightInventoryClient",
    "FlightInventoryError",
    "FlightInventoryTransportError",
    "FlightSnapshot",
    "SeatReleaseResult",
    "SeatReservationRequest",
    "SeatReservationResult",
]
