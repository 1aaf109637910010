from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from aeroflow.analytics.applications.dashboard_summary import DashboardSummaryService
from aeroflow.analytics.domain import ClassUtilization, DashboardSummary
from aeroflow.inventory.domain.enum import SeatClass
from aeroflow.inventory.domain.value_object import SeatId
from aeroflow.payment.domain.enum import PaymentStatus
from aeroflow.shared.domain import Currency, Money, UserId


@pytest.fixture
def book(session_service, ledger_service, passenger, payment_result):
    """座席を選んで予約を確定する Factory fixture"""

    def _factory(flight, user, *seat_numbers):
        session = session_service.start(UserId(user), flight.id, SeatClass.ECONOMY)
        session_service.select_seats(
            session.id, [SeatId.for_seat(flight.id, n) for n in seat_numbers]
        )
        session_service.set_passenger(session.id, passenger)
        total = Money.usd(200 * len(seat_numbers))
        return ledger_service.commit(session.id, payment_result(total))

    return _factory


@pytest.fixture
def summary_service(booking_repository, payment_repository, inventory_repository):
    return DashboardSummaryService(
        booking_repository=booking_repository,
        payment_repository=payment_repository,
        inventory_repository=inventory_repository,
        currency=Currency.usd(),
    )


class TestDashboardSummaryService:
    def test_summarize(self, summary_service, register_flight, book, ledger_service):
        # Arrange
        jfk_lax = register_flight()
        sfo_sea = register_flight(
            flight_number="AF303",
            origin="SFO",
            destination="SEA",
            departure_time="2025-03-12T08:00:00",
            arrival_time="2025-03-12T10:00:00",
        )
        book(jfk_lax, "user-1", "25A", "25B")
        book(sfo_sea, "user-1", "25A")
        book(jfk_lax, "user-3", "26A")
        cancelled = book(jfk_lax, "user-2", "27A")
        ledger_service.cancel(cancelled.id)

        # Act
        summary = summary_service.summarize()

        # Assert
        assert summary.total_revenue == Money.usd(800)
        assert summary.total_bookings == 4
        assert summary.bookings_by_status["Confirmed"] == 3
        assert summary.bookings_by_status["Cancelled"] == 1
        assert summary.cancellation_rate == Decimal("25.0")
        assert summary.average_booking_value == Money.usd("200.00")
        assert summary.unique_customers == 3
        assert summary.repeat_customers == 1
        assert summary.repeat_rate == Decimal("33.3")
        economy = next(
            u for u in summary.seat_utilization if u.seat_class == SeatClass.ECONOMY
        )
        assert (economy.total, economy.booked) == (300, 4)
        assert economy.utilization == Decimal("1.3")
        assert summary.load_factor == Decimal("1.1")
        assert [(r.route, r.bookings) for r in summary.top_routes] == [
            ("JFK-LAX", 2),
            ("SFO-SEA", 1),
        ]
        assert summary.top_routes[0].revenue == Money.usd(600)
        assert summary.average_lead_time_days == Decimal("9.7")
        assert summary.flights_by_status == {"On Time": 2}

    def test_empty_system(self, summary_service):
        summary = summary_service.summarize()

        assert summary.total_bookings == 0
        assert summary.total_revenue == Money.usd(0)
        assert summary.cancellation_rate == Decimal("0")
        assert summary.average_booking_value == Money.usd(0)
        assert summary.top_routes == ()

    def test_revenue_ignores_refunds_and_other_currencies(self):
        # Arrange
        payments = [
            MagicMock(status=PaymentStatus.SUCCESS, amount=Money.usd(300)),
            MagicMock(status=PaymentStatus.REFUNDED, amount=Money.usd(100)),
            MagicMock(
                status=PaymentStatus.SUCCESS, amount=Money(Decimal("90"), Currency("EUR"))
            ),
        ]
        payment_repository = MagicMock()
        payment_repository.list_all.return_value = payments
        booking_repository = MagicMock()
        booking_repository.list_all.return_value = []
        inventory_repository = MagicMock()
        inventory_repository.list_flights.return_value = []
        service = DashboardSummaryService(
            booking_repository, payment_repository, inventory_repository, Currency.usd()
        )

        # Act
        summary = service.summarize()

        # Assert
        assert summary.total_revenue == Money.usd(300)


class TestDashboardSummary:
    def test_rates_round_half_up(self):
        summary = DashboardSummary(
            total_revenue=Money.usd(1000),
            total_bookings=8,
            bookings_by_status={"Cancelled": 1},
            unique_customers=6,
            repeat_customers=1,
            seat_utilization=(
                ClassUtilization(SeatClass.ECONOMY, total=150, booked=100),
                ClassUtilization(SeatClass.BUSINESS, total=28, booked=7),
            ),
            top_routes=(),
        )

        assert summary.cancellation_rate == Decimal("12.5")
        assert summary.repeat_rate == Decimal("16.7")
        assert summary.average_booking_value == Money.usd("125.00")
        assert summary.seat_utilization[0].utilization == Decimal("66.7")
        assert summary.load_factor == Decimal("60.1")
