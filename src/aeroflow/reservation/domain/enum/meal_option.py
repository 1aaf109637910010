from decimal import Decimal
from enum import Enum


class MealOption(str, Enum):
    """機内食メニュー"""

    STANDARD = "standard"
    PREMIUM = "premium"
    CHICKEN = "chicken"
    HALAL = "halal"
    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"
    GLUTEN_FREE = "glutenfree"
    KOSHER = "kosher"

    @property
    def price(self) -> Decimal:
        return _MEAL_PRICES[self]


_MEAL_PRICES: dict[MealOption, Decimal] = {
    MealOption.STANDARD: Decimal("0"),
    MealOption.PREMIUM: Decimal("25"),
    MealOption.CHICKEN: Decimal("12"),
    MealOption.HALAL: Decimal("18"),
    MealOption.VEGETARIAN: Decimal("15"),
    MealOption.VEGAN: Decimal("15"),
    MealOption.GLUTEN_FREE: Decimal("18"),
    MealOption.KOSHER: Decimal("20"),
}
