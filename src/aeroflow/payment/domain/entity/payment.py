from aeroflow.payment.domain.enum import PaymentStatus
from aeroflow.payment.domain.value_object import CardSuffix, PaymentId
from aeroflow.shared.domain import AggregateRoot, BookingId, IsoDateTime, Money
from aeroflow.shared.domain.exception import BusinessRuleViolationException


class Payment(AggregateRoot[PaymentId]):
    """決済エンティティ（予約に従属する）"""

    def __init__(
        self,
        id: PaymentId,
        booking_id: BookingId,
        amount: Money,
        card_suffix: CardSuffix,
        transaction_id: str,
        processed_at: IsoDateTime,
        idempotency_key: str,
        status: PaymentStatus = PaymentStatus.SUCCESS,
    ) -> None:
        super().__init__(id)
        self._booking_id = booking_id
        self._amount = amount
        self._card_suffix = card_suffix
        self._transaction_id = transaction_id
        self._processed_at = processed_at
        self._idempotency_key = idempotency_key
        self._status = status

    @property
    def booking_id(self) -> BookingId:
        return self._booking_id

    @property
    def amount(self) -> Money:
        return self._amount

    @property
    def card_suffix(self) -> CardSuffix:
        return self._card_suffix

    @property
    def transaction_id(self) -> str:
        return self._transaction_id

    @property
    def processed_at(self) -> IsoDateTime:
        return self._processed_at

    @property
    def idempotency_key(self) -> str:
        return self._idempotency_key

    @property
    def status(self) -> PaymentStatus:
        return self._status

    def refund(self) -> None:
        """払い戻しを行う（予約キャンセル時）"""
        if self._status == PaymentStatus.REFUNDED:
            return
        if self._status != PaymentStatus.SUCCESS:
            raise BusinessRuleViolationException("Can only refund successful payments")
        self._status = PaymentStatus.REFUNDED
