from abc import abstractmethod

from aeroflow.inventory.domain.value_object import InventoryChange
from aeroflow.reservation.domain.entity import ReservationSession
from aeroflow.reservation.domain.value_object import SessionId
from aeroflow.shared.domain import IsoDateTime, Repository


class ReservationSessionRepository(Repository[ReservationSession, SessionId]):
    """予約セッションリポジトリのインターフェース"""

    @abstractmethod
    def save(self, session: ReservationSession) -> None:
        """セッションを新規保存する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, session_id: SessionId) -> ReservationSession | None:
        raise NotImplementedError

    @abstractmethod
    def update(self, session: ReservationSession, expected_version: int) -> None:
        """セッションを更新する（version が期待値と異なれば OptimisticLockException）"""
        raise NotImplementedError

    @abstractmethod
    def expire(
        self,
        session: ReservationSession,
        expected_version: int,
        seat_change: InventoryChange,
    ) -> None:
        """失効したセッションと座席の解放を 1 トランザクションで書き込む

        セッションか座席が先に更新されていれば OptimisticLockException
        （何も書き込まない）。
        """
        raise NotImplementedError

    @abstractmethod
    def list_expired(self, now: IsoDateTime) -> list[ReservationSession]:
        """期限を過ぎた OPEN セッションを返す"""
        raise NotImplementedError
