from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from aeroflow.reservation.domain.value_object import SessionId
from aeroflow.reservation.handlers.dependencies import build_session_service
from aeroflow.reservation.handlers.request_models import AddBaggageRequest
from aeroflow.reservation.handlers.response_models import to_response
from aeroflow.shared.domain import Currency, DomainException, Money
from aeroflow.shared.utils import (
    Settings,
    api_response,
    domain_error_response,
    parse_body,
    validation_error_response,
)

logger = Logger()

settings = Settings.from_env()
service = build_session_service(settings)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """追加手荷物 Lambda Handler"""
    session_id = (event.path_parameters or {}).get("session_id")
    if not session_id:
        return api_response(400, {"message": "session_id is required"})

    try:
        request = parse_body(event.body, AddBaggageRequest)
    except ValidationError as e:
        return validation_error_response(e)

    cost_per_bag = None
    if request.cost_per_bag is not None:
        cost_per_bag = Money(request.cost_per_bag, Currency(settings.currency))

    try:
        session = service.add_baggage(
            SessionId(value=session_id), request.additional_bags, cost_per_bag
        )
    except DomainException as e:
        return domain_error_response(e)

    return api_response(200, to_response(session))
