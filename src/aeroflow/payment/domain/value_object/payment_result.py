from dataclasses import dataclass

from aeroflow.payment.domain.enum import PaymentStatus
from aeroflow.shared.domain import IsoDateTime, Money

from .card_suffix import CardSuffix


@dataclass(frozen=True)
class PaymentResult:
    """決済ゲートウェイの処理結果"""

    status: PaymentStatus
    amount: Money
    card_suffix: CardSuffix
    transaction_id: str
    processed_at: IsoDateTime
    idempotency_key: str
    failure_reason: str | None = None

    @property
    def is_success(self) -> bool:
        return self.status == PaymentStatus.SUCCESS
