from datetime import timedelta

from aeroflow.inventory.domain.entity import Flight
from aeroflow.inventory.domain.enum import SeatClass
from aeroflow.reservation.domain.entity import ReservationSession
from aeroflow.reservation.domain.enum import SessionStatus
from aeroflow.reservation.domain.value_object import SessionId
from aeroflow.shared.domain import IsoDateTime, UserId


class ReservationSessionFactory:
    """予約セッションのファクトリ"""

    def __init__(self, ttl: timedelta) -> None:
        self._ttl = ttl

    def create(
        self,
        user_id: UserId,
        flight: Flight,
        seat_class: SeatClass,
        now: IsoDateTime,
    ) -> ReservationSession:
        """座席選択開始時点のセッションを生成する（運賃はその時点のクラス運賃）"""
        return ReservationSession(
            id=SessionId.generate(),
            user_id=user_id,
            flight_id=flight.id,
            seat_class=seat_class,
            fare=flight.price(seat_class),
            created_at=now,
            expires_at=now.plus(self._ttl),
            status=SessionStatus.OPEN,
        )
