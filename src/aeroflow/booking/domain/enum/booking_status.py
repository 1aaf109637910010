from enum import Enum


class BookingStatus(str, Enum):
    """予約ステータス"""

    DRAFT = "Draft"
    CONFIRMED = "Confirmed"
    CANCELLED = "Cancelled"
    COMPLETED = "Completed"
