from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from aeroflow.analytics.applications.dashboard_summary import DashboardSummaryService
from aeroflow.analytics.handlers.response_models import to_response
from aeroflow.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from aeroflow.inventory.infrastructure.dynamodb_inventory_repository import (
    DynamoDBInventoryRepository,
)
from aeroflow.payment.infrastructure.dynamodb_payment_repository import (
    DynamoDBPaymentRepository,
)
from aeroflow.shared.domain import Currency
from aeroflow.shared.utils import Settings, api_response

logger = Logger()

settings = Settings.from_env()
service = DashboardSummaryService(
    booking_repository=DynamoDBBookingRepository(table_name=settings.table_name),
    payment_repository=DynamoDBPaymentRepository(settings.table_name),
    inventory_repository=DynamoDBInventoryRepository(table_name=settings.table_name),
    currency=Currency(settings.currency),
)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """管理画面ダッシュボード集計 Lambda Handler"""
    summary = service.summarize()
    return api_response(200, to_response(summary))
