from abc import abstractmethod

from aeroflow.booking.domain.entity import Booking
from aeroflow.booking.domain.enum import BookingStatus
from aeroflow.booking.domain.value_object import BookingReference
from aeroflow.inventory.domain.value_object import InventoryChange
from aeroflow.payment.domain.entity import Payment
from aeroflow.reservation.domain.value_object import SessionId
from aeroflow.shared.domain import BookingId, Repository, UserId


class BookingRepository(Repository[Booking, BookingId]):
    """予約リポジトリのインターフェース

    commit / cancel は予約・決済・座席・空席カウンタ・予約セッションを
    1 トランザクションで書き込む（すべて成功するか何も書き込まない）。
    """

    @abstractmethod
    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        raise NotImplementedError

    @abstractmethod
    def find_by_reference(self, reference: BookingReference) -> Booking | None:
        """予約番号で検索する"""
        raise NotImplementedError

    @abstractmethod
    def list_by_user(self, user_id: UserId) -> list[Booking]:
        """利用者の予約を新しい順に返す"""
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[Booking]:
        raise NotImplementedError

    @abstractmethod
    def list_by_status(self, status: BookingStatus) -> list[Booking]:
        raise NotImplementedError

    @abstractmethod
    def commit(
        self,
        booking: Booking,
        payment: Payment,
        seat_change: InventoryChange,
        session_id: SessionId,
        session_version: int,
    ) -> None:
        """予約を確定する

        - 予約が既に存在: DuplicateResourceException
        - 予約番号の重複: ReferenceCollisionException
        - 座席の仮押さえが失効: SeatUnavailableException
        - セッションが OPEN でない・更新された: OptimisticLockException
        """
        raise NotImplementedError

    @abstractmethod
    def cancel(
        self,
        booking: Booking,
        payment: Payment,
        seat_change: InventoryChange,
        expected_status: BookingStatus,
    ) -> None:
        """予約をキャンセルする（ステータスが期待値と異なれば OptimisticLockException）"""
        raise NotImplementedError

    @abstractmethod
    def update_status(self, booking: Booking, expected_status: BookingStatus) -> None:
        raise NotImplementedError
