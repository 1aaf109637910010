from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from aeroflow.inventory.domain.enum import SeatClass
from aeroflow.reservation.domain.enum import ExtraService, MealOption
from aeroflow.shared.utils import to_decimal


class StartSessionRequest(BaseModel):
    """予約セッション開始リクエスト"""

    user_id: str = Field(..., min_length=1)
    flight_id: str = Field(..., min_length=1)
    seat_class: SeatClass = SeatClass.ECONOMY


class SelectSeatsRequest(BaseModel):
    """座席選択リクエスト（件数の上限チェックはユースケース側で行う）"""

    seat_ids: list[str] = Field(..., description="座席ID（座席表の seat_id）")


class AddBaggageRequest(BaseModel):
    additional_bags: int = Field(..., ge=0, le=5)
    cost_per_bag: Decimal | None = Field(default=None, gt=0)

    @field_validator("cost_per_bag", mode="before")
    @classmethod
    def convert_cost_to_decimal(cls, v):
        if v is None:
            return v
        return to_decimal(v)


class AddServicesRequest(BaseModel):
    """機内サービス追加リクエスト"""

    meals: list[MealOption] = Field(default_factory=list)
    extras: list[ExtraService] = Field(default_factory=list)


class PassengerRequest(BaseModel):
    """搭乗者情報リクエスト"""

    full_name: str = Field(..., min_length=2)
    email: str = Field(..., pattern=r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
    phone: str = Field(..., pattern=r"^[\d\s+()-]{10,}$")
    passport_number: str = Field(..., min_length=6)
