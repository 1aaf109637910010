from aeroflow.payment.domain.entity import Payment
from aeroflow.payment.domain.enum import PaymentStatus
from aeroflow.payment.domain.value_object import PaymentId, PaymentResult
from aeroflow.shared.domain import BookingId
from aeroflow.shared.domain.exception import PaymentFailedException


class PaymentFactory:
    """決済ファクトリ"""

    def create(self, booking_id: BookingId, result: PaymentResult) -> Payment:
        """成功した決済結果から決済エンティティを生成する"""
        if not result.is_success:
            raise PaymentFailedException(
                result.failure_reason or "Payment was not successful"
            )

        return Payment(
            id=PaymentId.from_booking_id(booking_id),
            booking_id=booking_id,
            amount=result.amount,
            card_suffix=result.card_suffix,
            transaction_id=result.transaction_id,
            processed_at=result.processed_at,
            idempotency_key=result.idempotency_key,
            status=PaymentStatus.SUCCESS,
        )
