from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from aeroflow.reservation.domain.value_object import SessionId
from aeroflow.reservation.handlers.dependencies import build_session_service
from aeroflow.reservation.handlers.response_models import to_response
from aeroflow.shared.domain import DomainException
from aeroflow.shared.utils import Settings, api_response, domain_error_response

logger = Logger()

service = build_session_service(Settings.from_env())


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """予約セッション取得 Lambda Handler"""
    session_id = (event.path_parameters or {}).get("session_id")
    if not session_id:
        return api_response(400, {"message": "session_id is required"})

    try:
        session = service.refresh(SessionId(value=session_id))
    except DomainException as e:
        return domain_error_response(e)

    return api_response(200, to_response(session))
