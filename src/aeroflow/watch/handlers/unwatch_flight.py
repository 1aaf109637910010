from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from aeroflow.inventory.domain.value_object import FlightId
from aeroflow.shared.domain import UserId
from aeroflow.shared.utils import Settings, api_response
from aeroflow.watch.handlers.dependencies import build_watch_service

logger = Logger()

service = build_watch_service(Settings.from_env())


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """フライト監視解除 Lambda Handler"""
    params = event.path_parameters or {}
    flight_id = params.get("flight_id")
    user_id = params.get("user_id")
    if not flight_id or not user_id:
        return api_response(400, {"message": "flight_id and user_id are required"})

    service.unwatch(UserId(value=user_id), FlightId(value=flight_id))
    return api_response(200, {"status": "success"})
