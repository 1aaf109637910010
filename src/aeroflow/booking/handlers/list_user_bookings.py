from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from aeroflow.booking.handlers.dependencies import build_ledger_service
from aeroflow.booking.handlers.response_models import to_list_response
from aeroflow.shared.domain import UserId
from aeroflow.shared.utils import Settings, api_response

logger = Logger()

service = build_ledger_service(Settings.from_env())


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """利用者の予約一覧 Lambda Handler"""
    user_id = (event.path_parameters or {}).get("user_id")
    if not user_id:
        return api_response(400, {"message": "user_id is required"})

    bookings = service.list_for_user(UserId(value=user_id))
    return api_response(200, to_list_response(bookings))
