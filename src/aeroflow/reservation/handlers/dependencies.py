from datetime import timedelta

from aeroflow.inventory.applications.flight_inventory import FlightInventoryService
from aeroflow.inventory.infrastructure.dynamodb_inventory_repository import (
    DynamoDBInventoryRepository,
)
from aeroflow.reservation.applications.reservation_session import (
    ReservationSessionService,
)
from aeroflow.reservation.domain.factory import ReservationSessionFactory
from aeroflow.reservation.infrastructure.dynamodb_reservation_session_repository import (
    DynamoDBReservationSessionRepository,
)
from aeroflow.shared.utils import Settings


def build_session_service(
    settings: Settings,
    repository: DynamoDBReservationSessionRepository | None = None,
) -> ReservationSessionService:
    """環境変数の設定から ReservationSessionService を組み立てる"""
    ttl = timedelta(minutes=settings.session_ttl_minutes)
    if repository is None:
        repository = DynamoDBReservationSessionRepository(
            settings.table_name, max_attempts=settings.transaction_max_attempts
        )
    inventory = FlightInventoryService(
        repository=DynamoDBInventoryRepository(
            table_name=settings.table_name,
            max_attempts=settings.transaction_max_attempts,
        )
    )
    return ReservationSessionService(
        repository=repository,
        inventory=inventory,
        factory=ReservationSessionFactory(ttl=ttl),
        ttl=ttl,
        max_seats=settings.max_seats_per_booking,
    )
