from aws_lambda_powertools import Logger

from aeroflow.reservation.applications.reservation_session import (
    ReservationSessionService,
)
from aeroflow.reservation.domain.enum import SessionStatus
from aeroflow.reservation.domain.repository import ReservationSessionRepository
from aeroflow.reservation.domain.value_object import SessionId
from aeroflow.shared.domain import IsoDateTime
from aeroflow.shared.domain.exception import DomainException

logger = Logger(child=True)


class ExpireSessionsService:
    """期限切れセッションの定期掃除（EventBridge スケジュールから起動）"""

    def __init__(
        self,
        repository: ReservationSessionRepository,
        sessions: ReservationSessionService,
    ) -> None:
        self._repository = repository
        self._sessions = sessions

    def sweep(self, now: IsoDateTime) -> list[SessionId]:
        """期限を過ぎた OPEN セッションを失効させ、失効させた ID を返す"""
        expired: list[SessionId] = []
        for session in self._repository.list_expired(now):
            try:
                result = self._sessions.expire(session.id)
            except DomainException as e:
                # 同時に確定・更新されたセッションは次回の掃除に回す
                logger.warning(
                    "Failed to expire session",
                    extra={"session_id": str(session.id), "error": str(e)},
                )
                continue
            if result.status == SessionStatus.EXPIRED:
                expired.append(session.id)

        logger.info("Expired sessions swept", extra={"count": len(expired)})
        return expired
