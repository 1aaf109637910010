from aeroflow.booking.applications.booking_ledger import BookingLedgerService
from aeroflow.booking.domain.factory import BookingFactory
from aeroflow.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from aeroflow.inventory.applications.flight_inventory import FlightInventoryService
from aeroflow.inventory.infrastructure.dynamodb_inventory_repository import (
    DynamoDBInventoryRepository,
)
from aeroflow.payment.domain.factory import PaymentFactory
from aeroflow.payment.infrastructure.dynamodb_payment_repository import (
    DynamoDBPaymentRepository,
)
from aeroflow.reservation.handlers.dependencies import build_session_service
from aeroflow.shared.utils import Settings


def build_ledger_service(settings: Settings) -> BookingLedgerService:
    """環境変数の設定から BookingLedgerService を組み立てる"""
    inventory = FlightInventoryService(
        repository=DynamoDBInventoryRepository(
            table_name=settings.table_name,
            max_attempts=settings.transaction_max_attempts,
        )
    )
    return BookingLedgerService(
        repository=DynamoDBBookingRepository(
            table_name=settings.table_name,
            max_attempts=settings.transaction_max_attempts,
        ),
        payment_repository=DynamoDBPaymentRepository(settings.table_name),
        sessions=build_session_service(settings),
        inventory=inventory,
        factory=BookingFactory(),
        payment_factory=PaymentFactory(),
    )
