from decimal import Decimal
from enum import Enum


class ExtraService(str, Enum):
    """追加サービス（1予約につき1回課金）"""

    EXTRA_LEGROOM = "legroom"
    PRIORITY_BOARDING = "priority"

    @property
    def price(self) -> Decimal:
        return _EXTRA_PRICES[self]


_EXTRA_PRICES: dict[ExtraService, Decimal] = {
    ExtraService.EXTRA_LEGROOM: Decimal("35"),
    ExtraService.PRIORITY_BOARDING: Decimal("20"),
}
