from abc import ABC, abstractmethod

from aeroflow.payment.domain.value_object import CardDetails, PaymentResult
from aeroflow.shared.domain import Money


class PaymentGateway(ABC):
    """決済ゲートウェイのインターフェース"""

    @abstractmethod
    def charge(
        self, amount: Money, card: CardDetails, idempotency_key: str
    ) -> PaymentResult:
        """与信・売上を行い、結果を返す（拒否は例外ではなく FAILED の結果で返す）"""
        raise NotImplementedError

    @abstractmethod
    def void(self, result: PaymentResult) -> None:
        """成功した決済を取り消す"""
        raise NotImplementedError
