from enum import Enum


class BookingEvent(str, Enum):
    """予約ステートマシンのイベント"""

    PAYMENT_SUCCEEDED = "PAYMENT_SUCCEEDED"
    CANCEL_REQUESTED = "CANCEL_REQUESTED"
    DEPARTED = "DEPARTED"
