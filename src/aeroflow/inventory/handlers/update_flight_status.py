from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from aeroflow.inventory.applications.update_flight_status import (
    UpdateFlightStatusService,
)
from aeroflow.inventory.domain.value_object import FlightId
from aeroflow.inventory.handlers.request_models import UpdateFlightStatusRequest
from aeroflow.inventory.handlers.response_models import to_flight_data
from aeroflow.inventory.infrastructure.dynamodb_inventory_repository import (
    DynamoDBInventoryRepository,
)
from aeroflow.shared.domain import DomainException
from aeroflow.shared.utils import (
    Settings,
    api_response,
    domain_error_response,
    parse_body,
    validation_error_response,
)
from aeroflow.watch.handlers.dependencies import build_watch_service
from aeroflow.watch.handlers.response_models import to_status_change_data

logger = Logger()

settings = Settings.from_env()
repository = DynamoDBInventoryRepository(table_name=settings.table_name)
service = UpdateFlightStatusService(repository=repository)
watches = build_watch_service(settings)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """運航ステータス更新 Lambda Handler（管理画面用）

    ステータスが変わった場合は監視中の利用者への通知内容も返す。
    """
    flight_id = (event.path_parameters or {}).get("flight_id")
    if not flight_id:
        return api_response(400, {"message": "flight_id is required"})

    try:
        request = parse_body(event.body, UpdateFlightStatusRequest)
    except ValidationError as e:
        return validation_error_response(e)

    try:
        flight, changed = service.update(FlightId(value=flight_id), request.status)
    except DomainException as e:
        logger.warning("Failed to update flight status", extra={"error": str(e)})
        return domain_error_response(e)

    notifications = watches.notify_status_change(flight) if changed else []
    return api_response(
        200,
        {
            "status": "success",
            "data": {
                "flight": to_flight_data(flight).model_dump(),
                "changed": changed,
                "notifications": [
                    to_status_change_data(change).model_dump()
                    for change in notifications
                ],
            },
        },
    )
