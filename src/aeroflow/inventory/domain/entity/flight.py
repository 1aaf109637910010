from datetime import timedelta

from aeroflow.inventory.domain.enum import FlightStatus, SeatClass
from aeroflow.inventory.domain.value_object import Cabin, FlightId, FlightNumber, Route
from aeroflow.shared.domain import AggregateRoot, IsoDateTime, Money
from aeroflow.shared.domain.exception import BusinessRuleViolationException


class Flight(AggregateRoot[FlightId]):
    """フライト（座席在庫の集約ルート）

    座席クラスごとの空席カウンタを保持する。
    カウンタの増減は allocate / deallocate 経由でのみ行う。
    """

    def __init__(
        self,
        id: FlightId,
        flight_number: FlightNumber,
        airline: str,
        route: Route,
        departure_time: IsoDateTime,
        arrival_time: IsoDateTime,
        cabins: dict[SeatClass, Cabin],
        status: FlightStatus = FlightStatus.ON_TIME,
    ) -> None:
        super().__init__(id)

        self._flight_number = flight_number
        self._airline = airline
        self._route = route
        self._departure_time = departure_time
        self._arrival_time = arrival_time
        self._cabins = dict(cabins)
        self._status = status

        self._validate_schedule()
        if not self._cabins:
            raise BusinessRuleViolationException("Flight must offer at least one cabin")

    def _validate_schedule(self) -> None:
        """出発時刻 < 到着時刻"""
        if not self._departure_time.is_before(self._arrival_time):
            raise BusinessRuleViolationException(
                "Departure time must be before arrival time"
            )

    @property
    def flight_number(self) -> FlightNumber:
        return self._flight_number

    @property
    def airline(self) -> str:
        return self._airline

    @property
    def route(self) -> Route:
        return self._route

    @property
    def departure_time(self) -> IsoDateTime:
        return self._departure_time

    @property
    def arrival_time(self) -> IsoDateTime:
        return self._arrival_time

    @property
    def duration(self) -> timedelta:
        return self._arrival_time.minus(self._departure_time)

    @property
    def status(self) -> FlightStatus:
        return self._status

    @property
    def cabins(self) -> dict[SeatClass, Cabin]:
        return dict(self._cabins)

    def cabin(self, seat_class: SeatClass) -> Cabin:
        if seat_class not in self._cabins:
            raise BusinessRuleViolationException(
                f"{seat_class.value} is not offered on flight {self._flight_number}"
            )
        return self._cabins[seat_class]

    def available_seats(self, seat_class: SeatClass) -> int:
        return self.cabin(seat_class).available

    def price(self, seat_class: SeatClass) -> Money:
        return self.cabin(seat_class).price

    def allocate(self, seat_class: SeatClass, count: int) -> None:
        """空席カウンタを減らす"""
        self._cabins[seat_class] = self.cabin(seat_class).allocate(count)

    def deallocate(self, seat_class: SeatClass, count: int) -> None:
        """空席カウンタを戻す"""
        self._cabins[seat_class] = self.cabin(seat_class).deallocate(count)

    def change_status(self, status: FlightStatus) -> bool:
        """運航ステータスを変更する。変化があれば True"""
        if self._status == status:
            return False
        self._status = status
        return True

    def has_departed(self, now: IsoDateTime) -> bool:
        return not now.is_before(self._departure_time)
