from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from aeroflow.inventory.applications.register_flight import RegisterFlightService
from aeroflow.inventory.domain.factory import FlightDetails, FlightFactory
from aeroflow.inventory.handlers.request_models import RegisterFlightRequest
from aeroflow.inventory.handlers.response_models import to_response
from aeroflow.inventory.infrastructure.dynamodb_inventory_repository import (
    DynamoDBInventoryRepository,
)
from aeroflow.shared.domain import DomainException
from aeroflow.shared.utils import (
    api_response,
    domain_error_response,
    parse_body,
    validation_error_response,
)

logger = Logger()

repository = DynamoDBInventoryRepository()
factory = FlightFactory()
service = RegisterFlightService(repository=repository, factory=factory)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """フライト登録 Lambda Handler（管理画面用）"""
    logger.info("Received register flight request")

    try:
        request = parse_body(event.body, RegisterFlightRequest)
        flight = service.register(_to_flight_details(request))
    except ValidationError as e:
        return validation_error_response(e)
    except ValueError as e:
        return api_response(400, {"status": "error", "message": str(e)})
    except DomainException as e:
        logger.warning("Failed to register flight", extra={"error": str(e)})
        return domain_error_response(e)

    logger.info("Flight registered", extra={"flight_id": str(flight.id)})
    return api_response(201, to_response(flight))


def _to_flight_details(request: RegisterFlightRequest) -> FlightDetails:
    """リクエストボディから FlightDetails を構築する"""
    return {
        "flight_number": request.flight_number,
        "airline": request.airline,
        "origin": request.origin,
        "destination": request.destination,
        "departure_time": request.departure_time,
        "arrival_time": request.arrival_time,
        "prices": request.prices,
        "currency": request.currency,
    }
