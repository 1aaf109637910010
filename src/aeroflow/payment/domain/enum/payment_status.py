from enum import Enum


class PaymentStatus(str, Enum):
    """決済ステータス"""

    SUCCESS = "Success"
    REFUNDED = "Refunded"
    FAILED = "Failed"
