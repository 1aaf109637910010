from enum import Enum


class FlightStatus(str, Enum):
    """運航ステータス"""

    ON_TIME = "On Time"
    DELAYED = "Delayed"
    BOARDING = "Boarding"
    CANCELLED = "Cancelled"
    DEPARTED = "Departed"
    ARRIVED = "Arrived"
