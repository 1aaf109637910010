from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from aeroflow.inventory.applications.search_flights import SearchFlightsService
from aeroflow.inventory.handlers.request_models import SearchFlightsRequest
from aeroflow.inventory.handlers.response_models import to_list_response
from aeroflow.inventory.infrastructure.dynamodb_inventory_repository import (
    DynamoDBInventoryRepository,
)
from aeroflow.shared.utils import api_response, validation_error_response

logger = Logger()

repository = DynamoDBInventoryRepository()
service = SearchFlightsService(repository=repository)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """フライト検索 Lambda Handler"""
    params = event.query_string_parameters or {}

    try:
        request = SearchFlightsRequest.model_validate(
            {
                "origin": params.get("origin"),
                "destination": params.get("destination"),
                "departure_date": params.get("departure_date"),
                "seat_class": params.get("class", "Economy"),
                "sort_by": params.get("sort", "departure"),
            }
        )
    except ValidationError as e:
        return validation_error_response(e)

    logger.info(
        "Searching flights",
        extra={"route": f"{request.origin}-{request.destination}"},
    )
    try:
        flights = service.search(
            origin=request.origin,
            destination=request.destination,
            departure_date=request.departure_date,
            seat_class=request.seat_class,
            sort_by=request.sort_by,
        )
    except ValueError as e:
        return api_response(400, {"status": "error", "message": str(e)})

    return api_response(200, to_list_response(flights))
