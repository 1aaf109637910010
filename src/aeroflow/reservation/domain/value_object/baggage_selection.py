from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from aeroflow.shared.domain import Currency, Money

DEFAULT_COST_PER_BAG = Decimal("50")


@dataclass(frozen=True)
class BaggageSelection:
    """追加の受託手荷物（0〜5個）"""

    MAX_BAGS = 5

    bags: int
    total: Money

    def __post_init__(self) -> None:
        if not 0 <= self.bags <= self.MAX_BAGS:
            raise ValueError(f"Additional bags must be between 0 and {self.MAX_BAGS}")

    @classmethod
    def none(cls, currency: Currency) -> BaggageSelection:
        return cls(bags=0, total=Money.zero(currency))

    def add(self, count: int, cost_per_bag: Money) -> BaggageSelection:
        """手荷物を count 個追加する"""
        if count < 0:
            raise ValueError("Bag count cannot be negative")
        return BaggageSelection(
            bags=self.bags + count,
            total=self.total.add(cost_per_bag.multiply(count)),
        )
