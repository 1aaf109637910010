from aeroflow.inventory.domain.entity import Flight
from aeroflow.inventory.domain.enum import FlightStatus
from aeroflow.shared.domain import AggregateRoot, IsoDateTime
from aeroflow.watch.domain.value_object import StatusChange, WatchId


class FlightWatch(AggregateRoot[WatchId]):
    """フライトの運航ステータス監視（最後に通知したステータスを保持する）"""

    def __init__(
        self,
        id: WatchId,
        last_known_status: FlightStatus,
        created_at: IsoDateTime,
    ) -> None:
        super().__init__(id)
        self._last_known_status = last_known_status
        self._created_at = created_at

    @property
    def last_known_status(self) -> FlightStatus:
        return self._last_known_status

    @property
    def created_at(self) -> IsoDateTime:
        return self._created_at

    def observe(self, flight: Flight) -> StatusChange | None:
        """フライトの現在のステータスを反映する。変化があれば通知内容を返す"""
        if flight.status == self._last_known_status:
            return None
        change = StatusChange(
            user_id=self.id.user_id,
            flight_id=flight.id,
            flight_number=flight.flight_number,
            previous=self._last_known_status,
            current=flight.status,
        )
        self._last_known_status = flight.status
        return change
