from aeroflow.inventory.applications.flight_inventory import FlightInventoryService
from aeroflow.inventory.infrastructure.dynamodb_inventory_repository import (
    DynamoDBInventoryRepository,
)
from aeroflow.shared.utils import Settings
from aeroflow.watch.applications.flight_watch import FlightWatchService
from aeroflow.watch.infrastructure.dynamodb_flight_watch_repository import (
    DynamoDBFlightWatchRepository,
)


def build_watch_service(settings: Settings) -> FlightWatchService:
    """環境変数の設定から FlightWatchService を組み立てる"""
    return FlightWatchService(
        repository=DynamoDBFlightWatchRepository(settings.table_name),
        inventory=FlightInventoryService(
            repository=DynamoDBInventoryRepository(table_name=settings.table_name)
        ),
    )
