from aws_lambda_powertools import Logger

from aeroflow.inventory.domain.entity import Flight
from aeroflow.inventory.domain.enum import FlightStatus
from aeroflow.inventory.domain.repository import InventoryRepository
from aeroflow.inventory.domain.value_object import FlightId
from aeroflow.shared.domain.exception import ResourceNotFoundException

logger = Logger(child=True)


class UpdateFlightStatusService:
    """運航ステータス更新ユースケース（管理画面用）"""

    def __init__(self, repository: InventoryRepository) -> None:
        self._repository = repository

    def update(self, flight_id: FlightId, status: FlightStatus) -> tuple[Flight, bool]:
        """ステータスを更新する。戻り値の bool は変化があったかどうか"""
        flight = self._repository.find_by_id(flight_id)
        if flight is None:
            raise ResourceNotFoundException(f"Flight not found: {flight_id}")

        expected_status = flight.status
        if not flight.change_status(status):
            return flight, False

        self._repository.update_status(flight, expected_status=expected_status)
        logger.info(
            "Flight status changed",
            extra={
                "flight_id": str(flight_id),
                "from": expected_status.value,
                "to": status.value,
            },
        )
        return flight, True
