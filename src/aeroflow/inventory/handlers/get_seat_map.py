from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from aeroflow.inventory.applications.flight_inventory import FlightInventoryService
from aeroflow.inventory.domain.value_object import FlightId
from aeroflow.inventory.handlers.response_models import to_seat_map_response
from aeroflow.inventory.infrastructure.dynamodb_inventory_repository import (
    DynamoDBInventoryRepository,
)
from aeroflow.shared.domain import DomainException
from aeroflow.shared.utils import api_response, domain_error_response

logger = Logger()

repository = DynamoDBInventoryRepository()
service = FlightInventoryService(repository=repository)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """座席表取得 Lambda Handler"""
    flight_id = (event.path_parameters or {}).get("flight_id")
    if not flight_id:
        return api_response(400, {"message": "flight_id is required"})

    logger.info("Fetching seat map", extra={"flight_id": flight_id})

    try:
        flight, seats = service.seat_map(FlightId(value=flight_id))
    except DomainException as e:
        return domain_error_response(e)

    return api_response(200, to_seat_map_response(flight, seats))
