from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from aeroflow.inventory.domain.enum import SeatClass

from .flight_id import FlightId

if TYPE_CHECKING:
    from aeroflow.inventory.domain.entity.seat import Seat


@dataclass(frozen=True)
class SeatWrite:
    """書き込む座席の新状態と、書き込み前に期待するバージョン"""

    seat: Seat
    expected_version: int


@dataclass(frozen=True)
class InventoryChange:
    """座席状態と空席カウンタの変更をひとまとめにしたもの

    リポジトリはこれを 1 トランザクションで書き込む。
    counter_delta が負なら確保、正なら解放。
    """

    flight_id: FlightId
    seat_class: SeatClass
    counter_delta: int
    cabin_total: int
    seat_writes: tuple[SeatWrite, ...]

    @property
    def is_empty(self) -> bool:
        return not self.seat_writes and self.counter_delta == 0

    @property
    def seats(self) -> list[Seat]:
        return [write.seat for write in self.seat_writes]
