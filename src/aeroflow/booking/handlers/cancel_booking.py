from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from aeroflow.booking.handlers.dependencies import build_ledger_service
from aeroflow.booking.handlers.response_models import to_response
from aeroflow.shared.domain import BookingId, DomainException
from aeroflow.shared.utils import Settings, api_response, domain_error_response

logger = Logger()

service = build_ledger_service(Settings.from_env())


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """予約キャンセル Lambda Handler

    キャンセル済みの予約に対する再実行はエラーにせず、そのままの予約を返す。
    """
    booking_id = (event.path_parameters or {}).get("booking_id")
    if not booking_id:
        return api_response(400, {"message": "booking_id is required"})

    logger.info("Received cancel booking request", extra={"booking_id": booking_id})
    try:
        booking = service.cancel(BookingId(value=booking_id))
    except DomainException as e:
        logger.warning("Cancel failed", extra={"error": str(e)})
        return domain_error_response(e)

    return api_response(200, to_response(booking))
