from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from aeroflow.booking.domain.enum import BookingStatus
from aeroflow.booking.handlers.dependencies import build_ledger_service
from aeroflow.booking.handlers.response_models import to_list_response
from aeroflow.shared.utils import Settings, api_response

logger = Logger()

service = build_ledger_service(Settings.from_env())


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """予約一覧 Lambda Handler（管理画面用、?status= で絞り込み）"""
    status_param = (event.query_string_parameters or {}).get("status")

    status = None
    if status_param:
        try:
            status = BookingStatus(status_param)
        except ValueError:
            return api_response(
                400, {"status": "error", "message": f"Unknown status: {status_param}"}
            )

    bookings = service.list_bookings(status)
    return api_response(200, to_list_response(bookings))
