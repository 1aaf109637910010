from __future__ import annotations

from dataclasses import dataclass

from .flight_id import FlightId


@dataclass(frozen=True)
class SeatId:
    """座席ID

    例: "0b6f...-12A"（フライトID + 座席番号）
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("SeatId cannot be empty")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def for_seat(cls, flight_id: FlightId, seat_number: str) -> SeatId:
        """フライトと座席番号から一意な SeatId を生成"""
        return cls(value=f"{flight_id}-{seat_number}")
