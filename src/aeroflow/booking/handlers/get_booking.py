from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from aeroflow.booking.domain.value_object import BookingReference
from aeroflow.booking.handlers.dependencies import build_ledger_service
from aeroflow.booking.handlers.response_models import to_response
from aeroflow.shared.domain import BookingId, DomainException
from aeroflow.shared.utils import Settings, api_response, domain_error_response

logger = Logger()

service = build_ledger_service(Settings.from_env())


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """予約取得 Lambda Handler（予約ID または予約番号 AFRS-... で検索）"""
    key = (event.path_parameters or {}).get("booking_id")
    if not key:
        return api_response(400, {"message": "booking_id is required"})

    try:
        if BookingReference.PATTERN.match(key):
            booking = service.get_by_reference(BookingReference(value=key))
        else:
            booking = service.get(BookingId(value=key))
    except DomainException as e:
        return domain_error_response(e)

    return api_response(200, to_response(booking))
