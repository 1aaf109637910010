from enum import Enum


class SeatClass(str, Enum):
    """座席クラス"""

    ECONOMY = "Economy"
    PREMIUM_ECONOMY = "Premium Economy"
    BUSINESS = "Business"
    FIRST = "First"
