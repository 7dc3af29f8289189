from .dynamodb_booking_repository import DynamoDBBookingRepository
from .dynamodb_passenger_repository import DynamoDBPassengerRepository
from .eventbridge_event_notifier import EventBridgeEventNotifier
from .http_flight_inventory_client import HttpFlightInventoryClient
from .resilient_flight_inventory_client import ResilientFlightInventoryClient

__all__ = [
    "DynamoDBBookingRepository",
    "DynamoDBPassengerRepository",
    "EventBridgeEventNotifier",
    "HttpFlightInventoryClient",
    "ResilientFlightInventoryClient",
]
