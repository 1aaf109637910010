from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import EventBridgeEvent, event_source
from aws_lambda_powertools.utilities.typing import LambdaContext

from aeroflow.reservation.applications.expire_sessions import ExpireSessionsService
from aeroflow.reservation.handlers.dependencies import build_session_service
from aeroflow.reservation.infrastructure.dynamodb_reservation_session_repository import (
    DynamoDBReservationSessionRepository,
)
from aeroflow.shared.domain import IsoDateTime
from aeroflow.shared.utils import Settings

logger = Logger()

settings = Settings.from_env()
repository = DynamoDBReservationSessionRepository(
    settings.table_name, max_attempts=settings.transaction_max_attempts
)
service = ExpireSessionsService(
    repository=repository,
    sessions=build_session_service(settings, repository=repository),
)


@logger.inject_lambda_context
@event_source(data_class=EventBridgeEvent)
def lambda_handler(event: EventBridgeEvent, context: LambdaContext) -> dict:
    """期限切れ予約セッションの掃除（EventBridge スケジュール、毎分）"""
    now = IsoDateTime.from_string(event.time) if event.time else IsoDateTime.now()
    expired = service.sweep(now)
    return {
        "status": "success",
        "expired_sessions": [str(session_id) for session_id in expired],
    }
