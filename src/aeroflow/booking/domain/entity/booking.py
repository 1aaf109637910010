from aeroflow.booking.domain.enum import (
    BookingEvent,
    BookingPaymentStatus,
    BookingStatus,
)
from aeroflow.booking.domain.service import next_status
from aeroflow.booking.domain.value_object import BookingReference
from aeroflow.inventory.domain.enum import SeatClass
from aeroflow.inventory.domain.value_object import FlightId, FlightNumber, SeatId
from aeroflow.reservation.domain.value_object import Passenger
from aeroflow.shared.domain import AggregateRoot, BookingId, IsoDateTime, Money, UserId


class Booking(AggregateRoot[BookingId]):
    """予約（確定済みの搭乗予約）

    ステータスの変更はすべて予約ステートマシンを経由する。
    座席は booking reference で弱参照する（座席を所有しない）。
    """

    def __init__(
        self,
        id: BookingId,
        reference: BookingReference,
        user_id: UserId,
        flight_id: FlightId,
        flight_number: FlightNumber,
        departure_time: IsoDateTime,
        seat_class: SeatClass,
        seat_ids: tuple[SeatId, ...],
        seat_numbers: tuple[str, ...],
        passenger: Passenger,
        base_fare: Money,
        services_price: Money,
        baggage_price: Money,
        booked_at: IsoDateTime,
        status: BookingStatus = BookingStatus.DRAFT,
        payment_status: BookingPaymentStatus | None = None,
    ) -> None:
        super().__init__(id)

        self._reference = reference
        self._user_id = user_id
        self._flight_id = flight_id
        self._flight_number = flight_number
        self._departure_time = departure_time
        self._seat_class = seat_class
        self._seat_ids = tuple(seat_ids)
        self._seat_numbers = tuple(seat_numbers)
        self._passenger = passenger
        self._base_fare = base_fare
        self._services_price = services_price
        self._baggage_price = baggage_price
        self._booked_at = booked_at
        self._status = status
        self._payment_status = payment_status

    @property
    def reference(self) -> BookingReference:
        return self._reference

    @property
    def user_id(self) -> UserId:
        return self._user_id

    @property
    def flight_id(self) -> FlightId:
        return self._flight_id

    @property
    def flight_number(self) -> FlightNumber:
        return self._flight_number

    @property
    def departure_time(self) -> IsoDateTime:
        return self._departure_time

    @property
    def seat_class(self) -> SeatClass:
        return self._seat_class

    @property
    def seat_ids(self) -> tuple[SeatId, ...]:
        return self._seat_ids

    @property
    def seat_numbers(self) -> tuple[str, ...]:
        return self._seat_numbers

    @property
    def passenger(self) -> Passenger:
        return self._passenger

    @property
    def base_fare(self) -> Money:
        return self._base_fare

    @property
    def services_price(self) -> Money:
        return self._services_price

    @property
    def baggage_price(self) -> Money:
        return self._baggage_price

    @property
    def total_price(self) -> Money:
        return self._base_fare.add(self._services_price).add(self._baggage_price)

    @property
    def booked_at(self) -> IsoDateTime:
        return self._booked_at

    @property
    def status(self) -> BookingStatus:
        return self._status

    @property
    def payment_status(self) -> BookingPaymentStatus | None:
        return self._payment_status

    def has_departed(self, now: IsoDateTime) -> bool:
        return not now.is_before(self._departure_time)

    def confirm(self) -> bool:
        """決済成功により予約を確定する"""
        changed = self._apply(BookingEvent.PAYMENT_SUCCEEDED)
        if changed:
            self._payment_status = BookingPaymentStatus.PAID
        return changed

    def cancel(self) -> bool:
        """予約をキャンセルする（払い戻し扱い）。既にキャンセル済みなら何もしない"""
        changed = self._apply(BookingEvent.CANCEL_REQUESTED)
        if changed:
            self._payment_status = BookingPaymentStatus.REFUNDED
        return changed

    def complete(self) -> bool:
        """出発済みの予約を完了にする"""
        return self._apply(BookingEvent.DEPARTED)

    def _apply(self, event: BookingEvent) -> bool:
        target = next_status(self._status, event)
        if target == self._status:
            return False
        self._status = target
        return True
