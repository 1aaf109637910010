from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator, model_validator

from aeroflow.inventory.domain.enum import FlightStatus, SeatClass
from aeroflow.shared.utils import to_decimal


class RegisterFlightRequest(BaseModel):
    """フライト登録リクエストスキーマ"""

    flight_number: str = Field(
        ...,
        min_length=3,
        max_length=6,
        description="フライト番号",
        examples=["DL123", "AA1234"],
    )
    airline: str = Field(..., min_length=1, max_length=60, examples=["Delta"])
    origin: str = Field(..., pattern="^[A-Za-z]{3}$", examples=["JFK"])
    destination: str = Field(..., pattern="^[A-Za-z]{3}$", examples=["LAX"])
    departure_time: str = Field(
        ...,
        description="出発時刻（ISO 8601形式）",
        examples=["2025-01-01T10:00:00Z"],
    )
    arrival_time: str = Field(
        ...,
        description="到着時刻（ISO 8601形式）",
        examples=["2025-01-01T16:00:00Z"],
    )
    prices: dict[SeatClass, Decimal] = Field(
        ...,
        min_length=1,
        description="座席クラスごとの運賃",
        examples=[{"Economy": 199, "Business": 597}],
    )
    currency: str = Field(default="USD", pattern="^[A-Z]{3}$")

    @field_validator("prices", mode="before")
    @classmethod
    def convert_prices_to_decimal(cls, v):
        if not isinstance(v, dict):
            return v
        return {k: to_decimal(price) for k, price in v.items()}

    @model_validator(mode="after")
    def check_positive_prices(self):
        if any(price <= 0 for price in self.prices.values()):
            raise ValueError("prices must be greater than 0")
        return self


class SearchFlightsRequest(BaseModel):
    """フライト検索リクエスト（クエリ文字列）"""

    origin: str = Field(..., pattern="^[A-Za-z]{3}$")
    destination: str = Field(..., pattern="^[A-Za-z]{3}$")
    departure_date: date
    seat_class: SeatClass = SeatClass.ECONOMY
    sort_by: str = Field(default="departure", pattern="^(price|departure|duration)$")


class UpdateFlightStatusRequest(BaseModel):
    """運航ステータス更新リクエスト"""

    status: FlightStatus
