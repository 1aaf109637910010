from datetime import timedelta

from aeroflow.inventory.domain.enum import SeatClass
from aeroflow.inventory.domain.value_object import FlightId, SeatId
from aeroflow.reservation.domain.enum import ExtraService, MealOption, SessionStatus
from aeroflow.reservation.domain.value_object import (
    BaggageSelection,
    Passenger,
    ServiceSelection,
    SessionId,
)
from aeroflow.shared.domain import AggregateRoot, IsoDateTime, Money, UserId
from aeroflow.shared.domain.exception import (
    BusinessRuleViolationException,
    SessionExpiredException,
)


class ReservationSession(AggregateRoot[SessionId]):
    """予約セッション（決済確定前の選択内容を保持する短命な集約）

    有効期限は保存された expires_at で判定する。更新のたびに期限を延長し、
    version を進める（楽観ロック用）。仮押さえした座席の booking_ref には
    hold_token が入る。
    """

    def __init__(
        self,
        id: SessionId,
        user_id: UserId,
        flight_id: FlightId,
        seat_class: SeatClass,
        fare: Money,
        created_at: IsoDateTime,
        expires_at: IsoDateTime,
        seat_ids: tuple[SeatId, ...] = (),
        seat_numbers: tuple[str, ...] = (),
        baggage: BaggageSelection | None = None,
        services: ServiceSelection | None = None,
        passenger: Passenger | None = None,
        status: SessionStatus = SessionStatus.OPEN,
        last_activity_at: IsoDateTime | None = None,
        version: int = 0,
    ) -> None:
        super().__init__(id)

        self._user_id = user_id
        self._flight_id = flight_id
        self._seat_class = seat_class
        self._fare = fare
        self._created_at = created_at
        self._expires_at = expires_at
        self._seat_ids = tuple(seat_ids)
        self._seat_numbers = tuple(seat_numbers)
        self._baggage = baggage or BaggageSelection.none(fare.currency)
        self._services = services or ServiceSelection()
        self._passenger = passenger
        self._status = status
        self._last_activity_at = last_activity_at or created_at
        self._version = version

        if len(self._seat_ids) != len(self._seat_numbers):
            raise ValueError("Seat ids and seat numbers must correspond")

    @property
    def user_id(self) -> UserId:
        return self._user_id

    @property
    def flight_id(self) -> FlightId:
        return self._flight_id

    @property
    def seat_class(self) -> SeatClass:
        return self._seat_class

    @property
    def fare(self) -> Money:
        """1席あたりの運賃"""
        return self._fare

    @property
    def seat_ids(self) -> tuple[SeatId, ...]:
        return self._seat_ids

    @property
    def seat_numbers(self) -> tuple[str, ...]:
        return self._seat_numbers

    @property
    def baggage(self) -> BaggageSelection:
        return self._baggage

    @property
    def services(self) -> ServiceSelection:
        return self._services

    @property
    def passenger(self) -> Passenger | None:
        return self._passenger

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def created_at(self) -> IsoDateTime:
        return self._created_at

    @property
    def last_activity_at(self) -> IsoDateTime:
        return self._last_activity_at

    @property
    def expires_at(self) -> IsoDateTime:
        return self._expires_at

    @property
    def version(self) -> int:
        return self._version

    @property
    def hold_token(self) -> str:
        """座席の仮押さえに使う参照値"""
        return f"HOLD#{self.id}"

    @property
    def base_fare(self) -> Money:
        return self._fare.multiply(len(self._seat_ids))

    @property
    def services_price(self) -> Money:
        return self._services.total(self._fare.currency)

    @property
    def baggage_price(self) -> Money:
        return self._baggage.total

    @property
    def total_price(self) -> Money:
        """運賃 × 座席数 + 手荷物 + 機内サービス"""
        return self.base_fare.add(self.baggage_price).add(self.services_price)

    def is_expired(self, now: IsoDateTime) -> bool:
        if self._status == SessionStatus.EXPIRED:
            return True
        return self._status == SessionStatus.OPEN and not now.is_before(self._expires_at)

    def ensure_open(self) -> None:
        if self._status == SessionStatus.EXPIRED:
            raise SessionExpiredException(f"Reservation session expired: {self.id}")
        if self._status == SessionStatus.CONSUMED:
            raise BusinessRuleViolationException(
                f"Reservation session already committed: {self.id}"
            )

    def select_seats(
        self, seat_ids: list[SeatId], seat_numbers: list[str], fare: Money
    ) -> None:
        """座席選択を置き換える（座席数が減った場合は超過分の機内食を外す）"""
        self.ensure_open()
        self._seat_ids = tuple(seat_ids)
        self._seat_numbers = tuple(seat_numbers)
        self._fare = fare
        self._services = self._services.limit_to(len(seat_ids))

    def add_baggage(self, count: int, cost_per_bag: Money) -> None:
        self.ensure_open()
        self._baggage = self._baggage.add(count, cost_per_bag)

    def add_services(self, meals: list[MealOption], extras: list[ExtraService]) -> None:
        self.ensure_open()
        self._services = self._services.add(meals, extras, len(self._seat_ids))

    def set_passenger(self, passenger: Passenger) -> None:
        self.ensure_open()
        self._passenger = passenger

    def touch(self, now: IsoDateTime, ttl: timedelta) -> None:
        """操作のたびに有効期限を延長する"""
        self._last_activity_at = now
        self._expires_at = now.plus(ttl)
        self._version += 1

    def ensure_ready_for_commit(self) -> None:
        """確定に必要な入力（座席・搭乗者）が揃っているか"""
        self.ensure_open()
        if not self._seat_ids:
            raise BusinessRuleViolationException("No seats selected")
        if self._passenger is None:
            raise BusinessRuleViolationException("Passenger details are missing")

    def consume(self) -> None:
        """予約確定によりセッションを消費済みにする"""
        self.ensure_open()
        self._status = SessionStatus.CONSUMED
        self._version += 1

    def mark_expired(self) -> bool:
        """期限切れにする。OPEN 以外からは何もしない（冪等）"""
        if self._status != SessionStatus.OPEN:
            return False
        self._status = SessionStatus.EXPIRED
        self._version += 1
        return True
