from abc import abstractmethod

from aeroflow.payment.domain.entity import Payment
from aeroflow.payment.domain.value_object import PaymentId
from aeroflow.shared.domain import BookingId, Repository


class PaymentRepository(Repository[Payment, PaymentId]):
    """決済リポジトリのインターフェース

    決済の作成・払い戻しは予約の確定・キャンセルと同じトランザクションで
    BookingRepository が書き込む。
    """

    @abstractmethod
    def find_by_id(self, payment_id: PaymentId) -> Payment | None:
        """決済IDで検索する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_booking_id(self, booking_id: BookingId) -> Payment | None:
        """予約IDで検索する"""
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[Payment]:
        raise NotImplementedError
