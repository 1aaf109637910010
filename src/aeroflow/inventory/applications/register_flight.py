from aeroflow.inventory.domain.entity import Flight
from aeroflow.inventory.domain.factory import FlightDetails, FlightFactory
from aeroflow.inventory.domain.repository import InventoryRepository


class RegisterFlightService:
    """フライト登録ユースケース（座席表も同時に生成する）"""

    def __init__(self, repository: InventoryRepository, factory: FlightFactory) -> None:
        self._repository = repository
        self._factory = factory

    def register(self, details: FlightDetails) -> Flight:
        flight, seats = self._factory.create(details)
        self._repository.save(flight)
        self._repository.save_seats(seats)
        return flight
