from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from aeroflow.inventory.domain.value_object import FlightId
from aeroflow.shared.domain import DomainException, UserId
from aeroflow.shared.utils import (
    Settings,
    api_response,
    domain_error_response,
    parse_body,
    validation_error_response,
)
from aeroflow.watch.handlers.dependencies import build_watch_service
from aeroflow.watch.handlers.request_models import WatchFlightRequest
from aeroflow.watch.handlers.response_models import to_response

logger = Logger()

service = build_watch_service(Settings.from_env())


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """フライト監視開始 Lambda Handler"""
    flight_id = (event.path_parameters or {}).get("flight_id")
    if not flight_id:
        return api_response(400, {"message": "flight_id is required"})

    try:
        request = parse_body(event.body, WatchFlightRequest)
    except ValidationError as e:
        return validation_error_response(e)

    try:
        watch = service.watch(UserId(value=request.user_id), FlightId(value=flight_id))
    except DomainException as e:
        return domain_error_response(e)

    return api_response(201, to_response(watch))
