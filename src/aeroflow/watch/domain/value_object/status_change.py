from dataclasses import dataclass

from aeroflow.inventory.domain.enum import FlightStatus
from aeroflow.inventory.domain.value_object import FlightId, FlightNumber
from aeroflow.shared.domain import UserId

WARNING_STATUSES = frozenset({FlightStatus.DELAYED, FlightStatus.CANCELLED})


@dataclass(frozen=True)
class StatusChange:
    """利用者に通知する運航ステータスの変化"""

    user_id: UserId
    flight_id: FlightId
    flight_number: FlightNumber
    previous: FlightStatus
    current: FlightStatus

    @property
    def severity(self) -> str:
        return "warning" if self.current in WARNING_STATUSES else "info"

    @property
    def message(self) -> str:
        return f"Flight {self.flight_number} is now {self.current.value}"
