from __future__ import annotations

from dataclasses import dataclass

from aeroflow.shared.domain import Money
from aeroflow.shared.domain.exception import CapacityExceededException


@dataclass(frozen=True)
class Cabin:
    """座席クラスごとの総席数・空席数・運賃

    不変条件: 0 <= available <= total
    """

    total: int
    available: int
    price: Money

    def __post_init__(self) -> None:
        if self.total < 0:
            raise ValueError("Total seats cannot be negative")
        if not 0 <= self.available <= self.total:
            raise CapacityExceededException(
                f"Available seats out of range: {self.available}/{self.total}"
            )

    @property
    def booked(self) -> int:
        return self.total - self.available

    def allocate(self, count: int) -> Cabin:
        """空席を count 席減らす"""
        if self.available - count < 0:
            raise CapacityExceededException(
                f"Cannot allocate {count} seats, only {self.available} available"
            )
        return Cabin(total=self.total, available=self.available - count, price=self.price)

    def deallocate(self, count: int) -> Cabin:
        """空席を count 席戻す"""
        if self.available + count > self.total:
            raise CapacityExceededException(
                f"Cannot release {count} seats, capacity is {self.total}"
            )
        return Cabin(total=self.total, available=self.available + count, price=self.price)
