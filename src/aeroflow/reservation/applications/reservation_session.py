from collections.abc import Callable
from datetime import timedelta

from aws_lambda_powertools import Logger

from aeroflow.inventory.applications.flight_inventory import FlightInventoryService
from aeroflow.inventory.domain.enum import SeatClass
from aeroflow.inventory.domain.value_object import FlightId, SeatId
from aeroflow.reservation.domain.entity import ReservationSession
from aeroflow.reservation.domain.enum import ExtraService, MealOption, SessionStatus
from aeroflow.reservation.domain.factory import ReservationSessionFactory
from aeroflow.reservation.domain.repository import ReservationSessionRepository
from aeroflow.reservation.domain.value_object import (
    DEFAULT_COST_PER_BAG,
    Passenger,
    SessionId,
)
from aeroflow.shared.domain import IsoDateTime, Money, UserId
from aeroflow.shared.domain.exception import (
    BusinessRuleViolationException,
    OptimisticLockException,
    ResourceNotFoundException,
    SelectionLimitExceededException,
    SessionExpiredException,
)

logger = Logger(child=True)

DEFAULT_MAX_SEATS = 5


class ReservationSessionService:
    """予約セッションのユースケース

    座席の仮押さえ・解放は FlightInventoryService 経由でのみ行う。
    期限切れの判定は保存済みの expires_at を参照し、アクセス時に遅延評価する。
    """

    def __init__(
        self,
        repository: ReservationSessionRepository,
        inventory: FlightInventoryService,
        factory: ReservationSessionFactory,
        ttl: timedelta = timedelta(minutes=15),
        max_seats: int = DEFAULT_MAX_SEATS,
        clock: Callable[[], IsoDateTime] = IsoDateTime.now,
    ) -> None:
        self._repository = repository
        self._inventory = inventory
        self._factory = factory
        self._ttl = ttl
        self._max_seats = max_seats
        self._clock = clock

    def start(
        self, user_id: UserId, flight_id: FlightId, seat_class: SeatClass
    ) -> ReservationSession:
        """座席選択を開始する"""
        flight = self._inventory.get_flight(flight_id)
        session = self._factory.create(user_id, flight, seat_class, self._clock())
        self._repository.save(session)
        logger.info(
            "Reservation session started",
            extra={"session_id": str(session.id), "flight_id": str(flight_id)},
        )
        return session

    def get(self, session_id: SessionId) -> ReservationSession:
        session = self._repository.find_by_id(session_id)
        if session is None:
            raise ResourceNotFoundException(f"Reservation session not found: {session_id}")
        return session

    def refresh(self, session_id: SessionId) -> ReservationSession:
        """参照用。期限を過ぎていれば失効させてから返す"""
        session = self.get(session_id)
        if session.is_expired(self._clock()):
            session = self._expire(session)
        return session

    def get_active(self, session_id: SessionId) -> ReservationSession:
        """OPEN かつ期限内のセッションを返す

        期限を過ぎていればその場で失効させ（仮押さえも解放）、SessionExpiredException。
        """
        session = self.get(session_id)
        if session.is_expired(self._clock()):
            try:
                self._expire(session)
            except OptimisticLockException as e:
                raise SessionExpiredException(
                    f"Reservation session expired: {session_id}"
                ) from e
            raise SessionExpiredException(f"Reservation session expired: {session_id}")
        session.ensure_open()
        return session

    def select_seats(
        self,
        session_id: SessionId,
        seat_ids: list[SeatId],
        max_seats: int | None = None,
    ) -> ReservationSession:
        """座席選択を置き換える

        新たに選んだ座席を先に仮押さえし（全件成功か何もしないか）、
        その後で選択から外れた座席を解放する。
        """
        limit = self._max_seats if max_seats is None else max_seats
        if not seat_ids or len(seat_ids) > limit:
            raise SelectionLimitExceededException(
                f"Select between 1 and {limit} seats ({len(seat_ids)} requested)"
            )
        if len(set(seat_ids)) != len(seat_ids):
            raise BusinessRuleViolationException("Duplicate seats in selection")

        session = self.get_active(session_id)
        token = session.hold_token
        held = dict(zip(session.seat_ids, session.seat_numbers))
        added = [seat_id for seat_id in seat_ids if seat_id not in held]
        dropped = [seat_id for seat_id in held if seat_id not in set(seat_ids)]

        if added:
            seats = self._inventory.reserve(
                session.flight_id, session.seat_class, added, token
            )
            held.update({seat.id: seat.seat_number for seat in seats})

        try:
            fare = self._inventory.get_flight(session.flight_id).price(session.seat_class)
            expected_version = session.version
            session.select_seats(seat_ids, [held[seat_id] for seat_id in seat_ids], fare)
            session.touch(self._clock(), self._ttl)
            self._repository.update(session, expected_version=expected_version)
        except Exception:
            if added:
                self._inventory.release(session.flight_id, session.seat_class, added, token)
            raise

        if dropped:
            self._inventory.release(session.flight_id, session.seat_class, dropped, token)

        logger.info(
            "Seats selected",
            extra={
                "session_id": str(session_id),
                "added": len(added),
                "dropped": len(dropped),
            },
        )
        return session

    def add_baggage(
        self,
        session_id: SessionId,
        additional_bags: int,
        cost_per_bag: Money | None = None,
    ) -> ReservationSession:
        """追加手荷物を加算する（在庫には影響しない）"""
        session = self.get_active(session_id)
        cost = cost_per_bag or Money(DEFAULT_COST_PER_BAG, session.fare.currency)

        expected_version = session.version
        try:
            session.add_baggage(additional_bags, cost)
        except ValueError as e:
            raise BusinessRuleViolationException(str(e)) from e
        session.touch(self._clock(), self._ttl)
        self._repository.update(session, expected_version=expected_version)
        return session

    def add_services(
        self,
        session_id: SessionId,
        meals: list[MealOption],
        extras: list[ExtraService],
    ) -> ReservationSession:
        """機内食・追加サービスを加算する（在庫には影響しない）"""
        session = self.get_active(session_id)

        expected_version = session.version
        try:
            session.add_services(meals, extras)
        except ValueError as e:
            raise BusinessRuleViolationException(str(e)) from e
        session.touch(self._clock(), self._ttl)
        self._repository.update(session, expected_version=expected_version)
        return session

    def set_passenger(
        self, session_id: SessionId, passenger: Passenger
    ) -> ReservationSession:
        session = self.get_active(session_id)

        expected_version = session.version
        session.set_passenger(passenger)
        session.touch(self._clock(), self._ttl)
        self._repository.update(session, expected_version=expected_version)
        return session

    def expire(self, session_id: SessionId) -> ReservationSession:
        """セッションを失効させ、このセッションが押さえている座席だけを解放する（冪等）"""
        session = self.get(session_id)
        return self._expire(session)

    def _expire(self, session: ReservationSession) -> ReservationSession:
        """失効の保存と座席の解放を 1 トランザクションで行う

        先に他の書き込みが入っていれば読み直し、OPEN でなくなっていれば
        その状態を返す（OPEN のままなら OptimisticLockException）。
        """
        expected_version = session.version
        if not session.mark_expired():
            return session
        seat_change = self._inventory.prepare_release(
            session.flight_id,
            session.seat_class,
            list(session.seat_ids),
            session.hold_token,
        )
        try:
            self._repository.expire(session, expected_version, seat_change)
        except OptimisticLockException:
            current = self.get(session.id)
            if current.status == SessionStatus.OPEN:
                raise
            return current

        logger.info(
            "Reservation session expired",
            extra={"session_id": str(session.id), "seats": len(seat_change.seat_writes)},
        )
        return session
