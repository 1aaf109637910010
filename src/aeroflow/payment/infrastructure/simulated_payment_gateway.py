import random
import uuid

from aeroflow.payment.domain.enum import PaymentStatus
from aeroflow.payment.domain.service import PaymentGateway
from aeroflow.payment.domain.value_object import CardDetails, PaymentResult
from aeroflow.shared.domain import IsoDateTime, Money


class SimulatedPaymentGateway(PaymentGateway):
    """一定の確率で拒否を返す疑似決済ゲートウェイ"""

    def __init__(self, decline_rate: float = 0.1, rng: random.Random | None = None) -> None:
        if not 0 <= decline_rate <= 1:
            raise ValueError("decline_rate must be between 0 and 1")
        self._decline_rate = decline_rate
        self._rng = rng or random.Random()
        self.voided: list[str] = []

    def charge(
        self, amount: Money, card: CardDetails, idempotency_key: str
    ) -> PaymentResult:
        declined = self._rng.random() < self._decline_rate
        return PaymentResult(
            status=PaymentStatus.FAILED if declined else PaymentStatus.SUCCESS,
            amount=amount,
            card_suffix=card.suffix,
            transaction_id=f"TXN-{uuid.uuid4().hex[:12].upper()}",
            processed_at=IsoDateTime.now(),
            idempotency_key=idempotency_key,
            failure_reason="Card declined by issuer" if declined else None,
        )

    def void(self, result: PaymentResult) -> None:
        self.voided.append(result.transaction_id)
