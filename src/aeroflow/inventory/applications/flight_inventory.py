from aws_lambda_powertools import Logger

from aeroflow.inventory.domain.entity import Flight, Seat
from aeroflow.inventory.domain.enum import SeatClass
from aeroflow.inventory.domain.repository import InventoryRepository
from aeroflow.inventory.domain.value_object import (
    FlightId,
    InventoryChange,
    SeatId,
    SeatWrite,
)
from aeroflow.shared.domain.exception import (
    BusinessRuleViolationException,
    ResourceNotFoundException,
)

logger = Logger(child=True)


class FlightInventoryService:
    """座席在庫サービス

    座席の空き状況と座席クラスごとの空席カウンタの唯一の更新窓口。
    reserve / release は即時に書き込み、prepare_* は変更内容だけを組み立てて
    呼び出し元のトランザクションに含めさせる。
    """

    def __init__(self, repository: InventoryRepository) -> None:
        self._repository = repository

    def get_flight(self, flight_id: FlightId) -> Flight:
        flight = self._repository.find_by_id(flight_id)
        if flight is None:
            raise ResourceNotFoundException(f"Flight not found: {flight_id}")
        return flight

    def seat_map(self, flight_id: FlightId) -> tuple[Flight, list[Seat]]:
        """フライトと座席一覧（座席番号順）"""
        flight = self.get_flight(flight_id)
        seats = self._repository.list_seats(flight_id)
        return flight, sorted(seats, key=_seat_sort_key)

    def reserve(
        self,
        flight_id: FlightId,
        seat_class: SeatClass,
        seat_ids: list[SeatId],
        token: str,
    ) -> list[Seat]:
        """座席を全件まとめて仮押さえする（1席でも埋まっていれば何もしない）"""
        change = self.prepare_reservation(flight_id, seat_class, seat_ids, token)
        self._repository.apply(change)
        logger.info(
            "Seats reserved",
            extra={"flight_id": str(flight_id), "seats": len(seat_ids)},
        )
        return change.seats

    def release(
        self,
        flight_id: FlightId,
        seat_class: SeatClass,
        seat_ids: list[SeatId],
        reference: str,
    ) -> list[Seat]:
        """reference が押さえている座席を解放し、空席カウンタを戻す"""
        change = self.prepare_release(flight_id, seat_class, seat_ids, reference)
        if change.is_empty:
            return []
        self._repository.apply(change)
        logger.info(
            "Seats released",
            extra={"flight_id": str(flight_id), "seats": len(change.seat_writes)},
        )
        return change.seats

    def prepare_reservation(
        self,
        flight_id: FlightId,
        seat_class: SeatClass,
        seat_ids: list[SeatId],
        token: str,
    ) -> InventoryChange:
        if not seat_ids:
            raise BusinessRuleViolationException("At least one seat must be selected")
        if len(set(seat_ids)) != len(seat_ids):
            raise BusinessRuleViolationException("Duplicate seats in selection")

        flight = self.get_flight(flight_id)
        seats = self._load_seats(flight_id, seat_class, seat_ids)

        writes = []
        for seat in seats:
            expected_version = seat.version
            seat.hold(token)
            writes.append(SeatWrite(seat=seat, expected_version=expected_version))

        flight.allocate(seat_class, len(seats))
        return InventoryChange(
            flight_id=flight_id,
            seat_class=seat_class,
            counter_delta=-len(seats),
            cabin_total=flight.cabin(seat_class).total,
            seat_writes=tuple(writes),
        )

    def prepare_confirmation(
        self,
        flight_id: FlightId,
        seat_class: SeatClass,
        seat_ids: list[SeatId],
        token: str,
        booking_ref: str,
    ) -> InventoryChange:
        """仮押さえを確定に切り替える変更（カウンタは仮押さえ時に減算済み）"""
        flight = self.get_flight(flight_id)
        seats = self._load_seats(flight_id, seat_class, seat_ids)

        writes = []
        for seat in seats:
            expected_version = seat.version
            seat.confirm(token, booking_ref)
            writes.append(SeatWrite(seat=seat, expected_version=expected_version))

        return InventoryChange(
            flight_id=flight_id,
            seat_class=seat_class,
            counter_delta=0,
            cabin_total=flight.cabin(seat_class).total,
            seat_writes=tuple(writes),
        )

    def prepare_release(
        self,
        flight_id: FlightId,
        seat_class: SeatClass,
        seat_ids: list[SeatId],
        reference: str,
    ) -> InventoryChange:
        flight = self.get_flight(flight_id)
        seats = self._repository.find_seats(flight_id, seat_ids)

        writes = []
        for seat in seats:
            expected_version = seat.version
            if seat.release(reference):
                writes.append(SeatWrite(seat=seat, expected_version=expected_version))

        if writes:
            flight.deallocate(seat_class, len(writes))
        return InventoryChange(
            flight_id=flight_id,
            seat_class=seat_class,
            counter_delta=len(writes),
            cabin_total=flight.cabin(seat_class).total,
            seat_writes=tuple(writes),
        )

    def _load_seats(
        self, flight_id: FlightId, seat_class: SeatClass, seat_ids: list[SeatId]
    ) -> list[Seat]:
        seats = self._repository.find_seats(flight_id, seat_ids)
        found = {seat.id for seat in seats}
        missing = [str(seat_id) for seat_id in seat_ids if seat_id not in found]
        if missing:
            raise ResourceNotFoundException(
                f"Seats not found on flight {flight_id}: {', '.join(missing)}"
            )
        for seat in seats:
            if seat.seat_class != seat_class:
                raise BusinessRuleViolationException(
                    f"Seat {seat.seat_number} is not in {seat_class.value}"
                )
        return seats


def _seat_sort_key(seat: Seat) -> tuple[int, str]:
    row = "".join(ch for ch in seat.seat_number if ch.isdigit())
    return int(row or 0), seat.seat_number
