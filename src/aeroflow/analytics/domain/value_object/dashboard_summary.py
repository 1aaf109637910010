from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from aeroflow.inventory.domain.enum import SeatClass
from aeroflow.shared.domain import Money

ONE_DECIMAL = Decimal("0.1")


def percentage(part: int, whole: int) -> Decimal:
    """part / whole を百分率（小数第1位で四捨五入）で返す。whole が 0 なら 0"""
    if whole <= 0:
        return Decimal("0")
    return (Decimal(part) * 100 / Decimal(whole)).quantize(ONE_DECIMAL, ROUND_HALF_UP)


@dataclass(frozen=True)
class ClassUtilization:
    """座席クラス別の利用率"""

    seat_class: SeatClass
    total: int
    booked: int

    @property
    def utilization(self) -> Decimal:
        return percentage(self.booked, self.total)


@dataclass(frozen=True)
class RouteSummary:
    """路線別の予約数と売上"""

    origin: str
    destination: str
    bookings: int
    revenue: Money

    @property
    def route(self) -> str:
        return f"{self.origin}-{self.destination}"


@dataclass(frozen=True)
class DashboardSummary:
    """管理画面ダッシュボードの集計結果"""

    total_revenue: Money
    total_bookings: int
    bookings_by_status: dict[str, int]
    unique_customers: int
    repeat_customers: int
    seat_utilization: tuple[ClassUtilization, ...]
    top_routes: tuple[RouteSummary, ...]
    flights_by_status: dict[str, int] = field(default_factory=dict)
    average_lead_time_days: Decimal = Decimal("0")

    @property
    def cancellation_rate(self) -> Decimal:
        return percentage(self.bookings_by_status.get("Cancelled", 0), self.total_bookings)

    @property
    def repeat_rate(self) -> Decimal:
        return percentage(self.repeat_customers, self.unique_customers)

    @property
    def average_booking_value(self) -> Money:
        if self.total_bookings == 0:
            return Money.zero(self.total_revenue.currency)
        amount = (self.total_revenue.amount / self.total_bookings).quantize(
            Decimal("0.01"), ROUND_HALF_UP
        )
        return Money(amount, self.total_revenue.currency)

    @property
    def load_factor(self) -> Decimal:
        total = sum(u.total for u in self.seat_utilization)
        booked = sum(u.booked for u in self.seat_utilization)
        return percentage(booked, total)
