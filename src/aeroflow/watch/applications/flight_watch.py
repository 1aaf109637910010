from collections.abc import Callable

from aws_lambda_powertools import Logger

from aeroflow.inventory.applications.flight_inventory import FlightInventoryService
from aeroflow.inventory.domain.entity import Flight
from aeroflow.inventory.domain.value_object import FlightId
from aeroflow.shared.domain import IsoDateTime, UserId
from aeroflow.watch.domain.entity import FlightWatch
from aeroflow.watch.domain.repository import FlightWatchRepository
from aeroflow.watch.domain.value_object import StatusChange, WatchId

logger = Logger(child=True)


class FlightWatchService:
    """フライトの運航ステータス監視ユースケース"""

    def __init__(
        self,
        repository: FlightWatchRepository,
        inventory: FlightInventoryService,
        clock: Callable[[], IsoDateTime] = IsoDateTime.now,
    ) -> None:
        self._repository = repository
        self._inventory = inventory
        self._clock = clock

    def watch(self, user_id: UserId, flight_id: FlightId) -> FlightWatch:
        """監視を開始する（現在のステータスを既知のステータスとして記録）"""
        flight = self._inventory.get_flight(flight_id)
        watch = FlightWatch(
            id=WatchId(user_id=user_id, flight_id=flight_id),
            last_known_status=flight.status,
            created_at=self._clock(),
        )
        self._repository.save(watch)
        return watch

    def unwatch(self, user_id: UserId, flight_id: FlightId) -> None:
        self._repository.delete(WatchId(user_id=user_id, flight_id=flight_id))

    def list_for_user(self, user_id: UserId) -> list[FlightWatch]:
        return self._repository.list_by_user(user_id)

    def notify_status_change(self, flight: Flight) -> list[StatusChange]:
        """ステータスが変わったウォッチごとに通知内容を返し、既知のステータスを更新する"""
        changes = []
        for watch in self._repository.list_by_flight(flight.id):
            change = watch.observe(flight)
            if change is None:
                continue
            self._repository.save(watch)
            changes.append(change)
            logger.info(
                "Flight status change notified",
                extra={
                    "user_id": str(change.user_id),
                    "flight_id": str(flight.id),
                    "status": change.current.value,
                    "severity": change.severity,
                },
            )
        return changes
