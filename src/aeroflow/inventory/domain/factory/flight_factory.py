from decimal import Decimal
from typing import NamedTuple, TypedDict

from aeroflow.inventory.domain.entity import Flight, Seat
from aeroflow.inventory.domain.enum import FlightStatus, SeatClass, SeatType
from aeroflow.inventory.domain.value_object import (
    Cabin,
    FlightId,
    FlightNumber,
    Route,
    SeatId,
)
from aeroflow.shared.domain import Currency, IsoDateTime, Money


class FlightDetails(TypedDict):
    """フライト登録の入力データ構造"""

    flight_number: str
    airline: str
    origin: str
    destination: str
    departure_time: str
    arrival_time: str
    prices: dict[SeatClass, Decimal]
    currency: str


class CabinLayout(NamedTuple):
    """座席クラスごとの配置（行範囲・列・非常口列）"""

    rows: range
    columns: str
    exit_rows: frozenset[int] = frozenset()


SEAT_LAYOUT: dict[SeatClass, CabinLayout] = {
    SeatClass.FIRST: CabinLayout(range(1, 3), "ABCD"),
    SeatClass.BUSINESS: CabinLayout(range(5, 12), "ABCD"),
    SeatClass.PREMIUM_ECONOMY: CabinLayout(range(15, 21), "ABCDEF"),
    SeatClass.ECONOMY: CabinLayout(range(25, 50), "ABCDEF", frozenset({30, 45})),
}


def seat_type_for(column: str, columns: str, is_exit_row: bool) -> SeatType:
    """列位置から座席タイプを決める"""
    if is_exit_row:
        return SeatType.EXIT_ROW
    if column in (columns[0], columns[-1]):
        return SeatType.WINDOW
    middle = len(columns) // 2
    if column in (columns[middle - 1], columns[middle]):
        return SeatType.AISLE
    return SeatType.MIDDLE


class FlightFactory:
    """フライトと座席表を生成するファクトリ

    - プリミティブ型から Value Object への変換
    - 運賃が指定されたクラスのみ座席表を生成し、総席数 = 生成座席数
    """

    def create(self, details: FlightDetails) -> tuple[Flight, list[Seat]]:
        flight_id = FlightId.generate()
        currency = Currency(details["currency"])

        seats: list[Seat] = []
        cabins: dict[SeatClass, Cabin] = {}
        for seat_class, amount in details["prices"].items():
            cabin_seats = self._generate_seats(flight_id, seat_class)
            seats.extend(cabin_seats)
            cabins[seat_class] = Cabin(
                total=len(cabin_seats),
                available=len(cabin_seats),
                price=Money(amount=amount, currency=currency),
            )

        flight = Flight(
            id=flight_id,
            flight_number=FlightNumber(details["flight_number"]),
            airline=details["airline"],
            route=Route(origin=details["origin"], destination=details["destination"]),
            departure_time=IsoDateTime.from_string(details["departure_time"]),
            arrival_time=IsoDateTime.from_string(details["arrival_time"]),
            cabins=cabins,
            status=FlightStatus.ON_TIME,
        )
        return flight, seats

    def _generate_seats(self, flight_id: FlightId, seat_class: SeatClass) -> list[Seat]:
        layout = SEAT_LAYOUT[seat_class]
        seats = []
        for row in layout.rows:
            for column in layout.columns:
                seat_number = f"{row}{column}"
                seats.append(
                    Seat(
                        id=SeatId.for_seat(flight_id, seat_number),
                        flight_id=flight_id,
                        seat_number=seat_number,
                        seat_class=seat_class,
                        seat_type=seat_type_for(
                            column, layout.columns, row in layout.exit_rows
                        ),
                    )
                )
        return seats
