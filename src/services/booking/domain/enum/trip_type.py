from enum import Enum


class TripType(str, Enum):
    """旅程種別"""

    ONE_WAY = "ONE_WAY"
    ROUND_TRIP = "ROUND_TRIP"
