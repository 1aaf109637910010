from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.idempotency import (
    DynamoDBPersistenceLayer,
    IdempotencyConfig,
    idempotent_function,
)
from aws_lambda_powertools.utilities.idempotency.exceptions import (
    IdempotencyAlreadyInProgressError,
)
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from aeroflow.booking.handlers.dependencies import build_ledger_service
from aeroflow.booking.handlers.request_models import CommitBookingRequest
from aeroflow.booking.handlers.response_models import to_response
from aeroflow.payment.applications.process_payment import ProcessPaymentService
from aeroflow.payment.domain.value_object import CardDetails
from aeroflow.payment.infrastructure.simulated_payment_gateway import (
    SimulatedPaymentGateway,
)
from aeroflow.reservation.domain.value_object import SessionId
from aeroflow.reservation.handlers.dependencies import build_session_service
from aeroflow.shared.domain import DomainException
from aeroflow.shared.utils import (
    Settings,
    api_response,
    domain_error_response,
    parse_body,
    validation_error_response,
)

logger = Logger()

settings = Settings.from_env()
persistence_layer = DynamoDBPersistenceLayer(table_name=settings.idempotency_table_name)
idempotency_config = IdempotencyConfig(
    event_key_jmespath="idempotency_key",
    raise_on_no_idempotency_key=True,
)

sessions = build_session_service(settings)
payments = ProcessPaymentService(
    gateway=SimulatedPaymentGateway(decline_rate=settings.payment_decline_rate)
)
ledger = build_ledger_service(settings)


@idempotent_function(
    data_keyword_argument="request",
    persistence_store=persistence_layer,
    config=idempotency_config,
)
def commit_booking(request: CommitBookingRequest) -> dict:
    """決済して予約を確定する（同じ idempotency_key の再送は同じ結果を返す）"""
    session_id = SessionId(value=request.session_id)

    existing = ledger.find_for_session(session_id)
    if existing is not None:
        return to_response(existing)

    session = sessions.get_active(session_id)
    card = CardDetails(
        number=request.card.number,
        holder_name=request.card.holder_name,
        expiry=request.card.expiry,
        cvv=request.card.cvv,
    )
    result = payments.charge(session, card, request.idempotency_key)
    try:
        booking = ledger.commit(session_id, result)
    except DomainException:
        payments.void(result)
        raise
    return to_response(booking)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """予約確定 Lambda Handler"""
    idempotency_config.register_lambda_context(context)

    session_id = (event.path_parameters or {}).get("session_id")
    if not session_id:
        return api_response(400, {"message": "session_id is required"})

    try:
        request = parse_body(event.body, CommitBookingRequest)
    except ValidationError as e:
        return validation_error_response(e)
    request = request.model_copy(update={"session_id": session_id})

    logger.append_keys(session_id=session_id)
    logger.info("Received commit booking request")

    try:
        body = commit_booking(request=request)
    except ValueError as e:
        return api_response(400, {"status": "error", "message": str(e)})
    except IdempotencyAlreadyInProgressError:
        return api_response(
            409, {"status": "error", "message": "Request is already in progress"}
        )
    except DomainException as e:
        logger.warning("Commit failed", extra={"error": str(e)})
        return domain_error_response(e)

    return api_response(201, body)
