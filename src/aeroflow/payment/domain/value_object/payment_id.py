from __future__ import annotations

from dataclasses import dataclass

from aeroflow.shared.domain import BookingId


@dataclass(frozen=True)
class PaymentId:
    """決済ID

    例: "payment_for_booking_for_0b6f..."
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("PaymentId cannot be empty")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_booking_id(cls, booking_id: BookingId) -> PaymentId:
        """BookingId から冪等な PaymentId を生成（予約と決済は1対1）"""
        return cls(value=f"payment_for_{booking_id}")
