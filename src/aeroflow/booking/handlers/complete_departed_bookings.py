from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import EventBridgeEvent, event_source
from aws_lambda_powertools.utilities.typing import LambdaContext

from aeroflow.booking.applications.complete_departed_bookings import (
    CompleteDepartedBookingsService,
)
from aeroflow.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from aeroflow.shared.domain import IsoDateTime

logger = Logger()

repository = DynamoDBBookingRepository()
service = CompleteDepartedBookingsService(repository=repository)


@logger.inject_lambda_context
@event_source(data_class=EventBridgeEvent)
def lambda_handler(event: EventBridgeEvent, context: LambdaContext) -> dict:
    """出発済み予約の完了処理（EventBridge スケジュール、毎時）"""
    now = IsoDateTime.from_string(event.time) if event.time else IsoDateTime.now()
    completed = service.complete(now)
    return {
        "status": "success",
        "completed_bookings": [str(booking.id) for booking in completed],
    }
