from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BookingId:
    """予約ID

    例: "booking_for_0b6f..."（予約セッションIDから導出）
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("BookingId cannot be empty")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_session_id(cls, session_id: str) -> BookingId:
        """予約セッションIDから冪等な BookingId を生成"""
        return cls(value=f"booking_for_{session_id}")
