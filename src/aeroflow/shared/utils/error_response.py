from pydantic import BaseModel, ValidationError

from aeroflow.shared.domain.exception import (
    BusinessRuleViolationException,
    CapacityExceededException,
    DomainException,
    DuplicateResourceException,
    InvalidTransitionException,
    OptimisticLockException,
    PaymentFailedException,
    ResourceNotFoundException,
    SeatUnavailableException,
    SelectionLimitExceededException,
    SessionExpiredException,
)

from .http_response import api_response

_STATUS_CODES: dict[type[DomainException], int] = {
    ResourceNotFoundException: 404,
    BusinessRuleViolationException: 422,
    SelectionLimitExceededException: 422,
    DuplicateResourceException: 409,
    OptimisticLockException: 409,
    SeatUnavailableException: 409,
    CapacityExceededException: 409,
    InvalidTransitionException: 409,
    SessionExpiredException: 410,
    PaymentFailedException: 402,
}


class ErrorResponse(BaseModel):
    """エラーレスポンスモデル"""

    status: str = "error"
    error_code: str
    message: str
    details: list | None = None


def status_code_for(exc: DomainException) -> int:
    """ドメイン例外に対応する HTTP ステータスコード（継承関係も考慮）"""
    for klass in type(exc).__mro__:
        if klass in _STATUS_CODES:
            return _STATUS_CODES[klass]
    return 400


def domain_error_response(exc: DomainException) -> dict:
    """ドメイン例外をそのまま呼び出し元へ返す"""
    details = None
    if isinstance(exc, SeatUnavailableException) and exc.seat_ids:
        details = list(exc.seat_ids)
    body = ErrorResponse(
        error_code=type(exc).__name__,
        message=str(exc),
        details=details,
    ).model_dump(exclude_none=True)
    return api_response(status_code_for(exc), body)


def validation_error_response(exc: ValidationError) -> dict:
    body = ErrorResponse(
        error_code="ValidationError",
        message="Invalid request",
        details=exc.errors(include_url=False, include_context=False),
    ).model_dump(exclude_none=True)
    return api_response(400, body)
