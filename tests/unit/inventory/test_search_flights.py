from datetime import date
from decimal import Decimal

import pytest

from aeroflow.inventory.applications.search_flights import SearchFlightsService
from aeroflow.inventory.domain.enum import SeatClass


class TestSearchFlightsService:
    def test_search_filters_by_route_date_and_class(
        self, inventory_repository, register_flight
    ):
        # Arrange
        economy_only = register_flight(
            flight_number="AF100", prices={SeatClass.ECONOMY: Decimal("150")}
        )
        register_flight(flight_number="AF200", prices={SeatClass.BUSINESS: Decimal("800")})
        register_flight(
            flight_number="AF300",
            departure_time="2025-03-11T08:00:00",
            arrival_time="2025-03-11T14:00:00",
        )
        register_flight(flight_number="AF400", origin="JFK", destination="SFO")
        service = SearchFlightsService(repository=inventory_repository)

        # Act
        flights = service.search("jfk", "lax", date(2025, 3, 10), SeatClass.ECONOMY)

        # Assert
        assert [f.id for f in flights] == [economy_only.id]

    def test_search_sorts_by_price(self, inventory_repository, register_flight):
        expensive = register_flight(
            flight_number="AF100", prices={SeatClass.ECONOMY: Decimal("400")}
        )
        cheap = register_flight(
            flight_number="AF200",
            departure_time="2025-03-10T18:00:00",
            arrival_time="2025-03-10T23:00:00",
            prices={SeatClass.ECONOMY: Decimal("120")},
        )
        service = SearchFlightsService(repository=inventory_repository)

        flights = service.search(
            "JFK", "LAX", date(2025, 3, 10), SeatClass.ECONOMY, sort_by="price"
        )

        assert [f.id for f in flights] == [cheap.id, expensive.id]

    def test_search_sorts_by_duration(self, inventory_repository, register_flight):
        long_haul = register_flight(flight_number="AF100")
        short_haul = register_flight(
            flight_number="AF200",
            departure_time="2025-03-10T18:00:00",
            arrival_time="2025-03-10T23:00:00",
        )
        service = SearchFlightsService(repository=inventory_repository)

        flights = service.search(
            "JFK", "LAX", date(2025, 3, 10), SeatClass.ECONOMY, sort_by="duration"
        )

        assert [f.id for f in flights] == [short_haul.id, long_haul.id]

    def test_unknown_sort_key(self, inventory_repository):
        service = SearchFlightsService(repository=inventory_repository)

        with pytest.raises(ValueError, match="Unsupported sort key"):
            service.search("JFK", "LAX", date(2025, 3, 10), SeatClass.ECONOMY, "airline")
