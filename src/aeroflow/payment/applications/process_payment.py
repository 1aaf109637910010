from collections.abc import Callable

from aws_lambda_powertools import Logger

from aeroflow.payment.domain.enum import PaymentStatus
from aeroflow.payment.domain.service import PaymentGateway
from aeroflow.payment.domain.value_object import CardDetails, PaymentResult
from aeroflow.reservation.domain.entity import ReservationSession
from aeroflow.shared.domain import IsoDateTime

logger = Logger(child=True)


class ProcessPaymentService:
    """決済処理ユースケース

    予約セッションの合計金額をゲートウェイで決済する。結果の永続化は
    予約確定（BookingLedgerService.commit）のトランザクションで行う。
    """

    def __init__(
        self,
        gateway: PaymentGateway,
        clock: Callable[[], IsoDateTime] = IsoDateTime.now,
    ) -> None:
        self._gateway = gateway
        self._clock = clock

    def charge(
        self,
        session: ReservationSession,
        card: CardDetails,
        idempotency_key: str,
    ) -> PaymentResult:
        now = self._clock()
        amount = session.total_price

        if card.is_expired(now.date()):
            logger.info("Card expired", extra={"session_id": str(session.id)})
            return PaymentResult(
                status=PaymentStatus.FAILED,
                amount=amount,
                card_suffix=card.suffix,
                transaction_id="",
                processed_at=now,
                idempotency_key=idempotency_key,
                failure_reason="Card has expired",
            )

        result = self._gateway.charge(amount, card, idempotency_key)
        logger.info(
            "Payment processed",
            extra={
                "session_id": str(session.id),
                "status": result.status.value,
                "amount": str(amount),
            },
        )
        return result

    def void(self, result: PaymentResult) -> None:
        """予約確定に失敗した決済を取り消す（失敗した決済は何もしない）"""
        if not result.is_success:
            return
        self._gateway.void(result)
        logger.warning(
            "Payment voided",
            extra={
                "transaction_id": result.transaction_id,
                "amount": str(result.amount),
            },
        )
