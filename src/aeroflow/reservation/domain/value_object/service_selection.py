from __future__ import annotations

from dataclasses import dataclass, field

from aeroflow.reservation.domain.enum import ExtraService, MealOption
from aeroflow.shared.domain import Currency, Money


@dataclass(frozen=True)
class ServiceSelection:
    """機内サービスの選択

    機内食は座席1つにつき1食まで。追加サービスは予約全体で1回だけ課金する。
    """

    meals: tuple[MealOption, ...] = ()
    extras: frozenset[ExtraService] = field(default_factory=frozenset)

    def add(
        self,
        meals: list[MealOption],
        extras: list[ExtraService],
        seat_count: int,
    ) -> ServiceSelection:
        combined = self.meals + tuple(meals)
        if len(combined) > seat_count:
            raise ValueError(
                f"Only one meal per seat is allowed ({seat_count} seats selected)"
            )
        return ServiceSelection(meals=combined, extras=self.extras | frozenset(extras))

    def limit_to(self, seat_count: int) -> ServiceSelection:
        """座席数が減った場合に超過分の機内食を外す"""
        return ServiceSelection(meals=self.meals[:seat_count], extras=self.extras)

    def total(self, currency: Currency) -> Money:
        total = Money.zero(currency)
        for meal in self.meals:
            total = total.add(Money(meal.price, currency))
        for extra in sorted(self.extras):
            total = total.add(Money(extra.price, currency))
        return total
