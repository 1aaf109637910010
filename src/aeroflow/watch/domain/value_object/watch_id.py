from dataclasses import dataclass

from aeroflow.inventory.domain.value_object import FlightId
from aeroflow.shared.domain import UserId


@dataclass(frozen=True)
class WatchId:
    """ウォッチID（利用者 × フライトで一意）"""

    user_id: UserId
    flight_id: FlightId

    def __str__(self) -> str:
        return f"{self.user_id}#{self.flight_id}"
