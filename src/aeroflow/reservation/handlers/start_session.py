from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from aeroflow.inventory.domain.value_object import FlightId
from aeroflow.reservation.handlers.dependencies import build_session_service
from aeroflow.reservation.handlers.request_models import StartSessionRequest
from aeroflow.reservation.handlers.response_models import to_response
from aeroflow.shared.domain import DomainException, UserId
from aeroflow.shared.utils import (
    Settings,
    api_response,
    domain_error_response,
    parse_body,
    validation_error_response,
)

logger = Logger()

service = build_session_service(Settings.from_env())


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """予約セッション開始 Lambda Handler"""
    logger.info("Received start session request")

    try:
        request = parse_body(event.body, StartSessionRequest)
    except ValidationError as e:
        return validation_error_response(e)

    try:
        session = service.start(
            user_id=UserId(value=request.user_id),
            flight_id=FlightId(value=request.flight_id),
            seat_class=request.seat_class,
        )
    except DomainException as e:
        logger.warning("Failed to start session", extra={"error": str(e)})
        return domain_error_response(e)

    return api_response(201, to_response(session))
