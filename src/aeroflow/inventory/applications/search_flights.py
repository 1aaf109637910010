from collections.abc import Callable
from datetime import date
from typing import Any

from aeroflow.inventory.domain.entity import Flight
from aeroflow.inventory.domain.enum import SeatClass
from aeroflow.inventory.domain.repository import InventoryRepository
from aeroflow.inventory.domain.value_object import Route


class SearchFlightsService:
    """フライト検索ユースケース

    指定クラスに空席のあるフライトだけを返す。
    """

    def __init__(self, repository: InventoryRepository) -> None:
        self._repository = repository

    def search(
        self,
        origin: str,
        destination: str,
        departure_date: date,
        seat_class: SeatClass,
        sort_by: str = "departure",
    ) -> list[Flight]:
        route = Route(origin=origin, destination=destination)
        flights = self._repository.find_by_route(
            route.origin, route.destination, departure_date
        )
        matches = [
            flight
            for flight in flights
            if seat_class in flight.cabins and flight.available_seats(seat_class) > 0
        ]
        return sorted(matches, key=_sort_key(sort_by, seat_class))


def _sort_key(sort_by: str, seat_class: SeatClass) -> Callable[[Flight], Any]:
    if sort_by == "price":
        return lambda flight: flight.price(seat_class).amount
    if sort_by == "duration":
        return lambda flight: flight.duration
    if sort_by == "departure":
        return lambda flight: flight.departure_time.value
    raise ValueError(f"Unsupported sort key: {sort_by}")
