from enum import Enum


class BookingPaymentStatus(str, Enum):
    """予約に記録する支払い状況"""

    PAID = "Paid"
    REFUNDED = "Refunded"
    FAILED = "Failed"
