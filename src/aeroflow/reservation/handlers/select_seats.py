from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from aeroflow.inventory.domain.value_object import SeatId
from aeroflow.reservation.domain.value_object import SessionId
from aeroflow.reservation.handlers.dependencies import build_session_service
from aeroflow.reservation.handlers.request_models import SelectSeatsRequest
from aeroflow.reservation.handlers.response_models import to_response
from aeroflow.shared.domain import DomainException
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
    """座席選択 Lambda Handler

    競合に負けた場合は 409 (SeatUnavailableException) と埋まっていた座席IDを返す。
    """
    session_id = (event.path_parameters or {}).get("session_id")
    if not session_id:
        return api_response(400, {"message": "session_id is required"})

    try:
        request = parse_body(event.body, SelectSeatsRequest)
    except ValidationError as e:
        return validation_error_response(e)

    logger.append_keys(session_id=session_id)
    try:
        session = service.select_seats(
            SessionId(value=session_id),
            [SeatId(value=seat_id) for seat_id in request.seat_ids],
        )
    except ValueError as e:
        return api_response(400, {"status": "error", "message": str(e)})
    except DomainException as e:
        logger.warning("Seat selection failed", extra={"error": str(e)})
        return domain_error_response(e)

    return api_response(200, to_response(session))
