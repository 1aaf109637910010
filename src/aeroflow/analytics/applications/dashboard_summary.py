from collections import Counter
from decimal import Decimal

from aws_lambda_powertools import Logger

from aeroflow.analytics.domain import ClassUtilization, DashboardSummary, RouteSummary
from aeroflow.booking.domain.enum import BookingStatus
from aeroflow.booking.domain.repository import BookingRepository
from aeroflow.inventory.domain.enum import SeatClass
from aeroflow.inventory.domain.repository import InventoryRepository
from aeroflow.payment.domain.enum import PaymentStatus
from aeroflow.payment.domain.repository import PaymentRepository
from aeroflow.shared.domain import Currency, Money

logger = Logger(child=True)

TOP_ROUTES = 5


class DashboardSummaryService:
    """管理画面向けの売上・予約・座席利用率の集計

    売上は SUCCESS の決済のみを合算する（返金済み・失敗は含めない）。
    """

    def __init__(
        self,
        booking_repository: BookingRepository,
        payment_repository: PaymentRepository,
        inventory_repository: InventoryRepository,
        currency: Currency,
    ) -> None:
        self._bookings = booking_repository
        self._payments = payment_repository
        self._inventory = inventory_repository
        self._currency = currency

    def summarize(self) -> DashboardSummary:
        bookings = self._bookings.list_all()
        payments = self._payments.list_all()
        flights = {flight.id: flight for flight in self._inventory.list_flights()}

        revenue = Money.zero(self._currency)
        for payment in payments:
            if payment.status != PaymentStatus.SUCCESS:
                continue
            if payment.amount.currency != self._currency:
                logger.warning(
                    "Skipping payment in foreign currency",
                    extra={"payment_id": str(payment.id)},
                )
                continue
            revenue = revenue.add(payment.amount)

        per_user = Counter(str(b.user_id) for b in bookings)

        utilization = []
        for seat_class in SeatClass:
            cabins = [f.cabins[seat_class] for f in flights.values() if seat_class in f.cabins]
            utilization.append(
                ClassUtilization(
                    seat_class=seat_class,
                    total=sum(c.total for c in cabins),
                    booked=sum(c.booked for c in cabins),
                )
            )

        routes: dict[tuple[str, str], list] = {}
        lead_times = []
        for booking in bookings:
            if booking.status == BookingStatus.CANCELLED:
                continue
            flight = flights.get(booking.flight_id)
            if flight is None:
                continue
            key = (flight.route.origin, flight.route.destination)
            entry = routes.setdefault(key, [0, Decimal("0")])
            entry[0] += 1
            if booking.total_price.currency == self._currency:
                entry[1] += booking.total_price.amount
            lead_time = flight.departure_time.date() - booking.booked_at.date()
            if lead_time.days >= 0:
                lead_times.append(lead_time.days)

        top_routes = sorted(routes.items(), key=lambda item: item[1][0], reverse=True)

        summary = DashboardSummary(
            total_revenue=revenue,
            total_bookings=len(bookings),
            bookings_by_status={
                status.value: sum(1 for b in bookings if b.status == status)
                for status in BookingStatus
            },
            unique_customers=len(per_user),
            repeat_customers=sum(1 for count in per_user.values() if count > 1),
            seat_utilization=tuple(utilization),
            top_routes=tuple(
                RouteSummary(
                    origin=origin,
                    destination=destination,
                    bookings=count,
                    revenue=Money(amount, self._currency),
                )
                for (origin, destination), (count, amount) in top_routes[:TOP_ROUTES]
            ),
            flights_by_status=dict(Counter(f.status.value for f in flights.values())),
            average_lead_time_days=(
                (Decimal(sum(lead_times)) / len(lead_times)).quantize(Decimal("0.1"))
                if lead_times
                else Decimal("0")
            ),
        )
        logger.info(
            "Dashboard summarized",
            extra={"bookings": summary.total_bookings, "flights": len(flights)},
        )
        return summary
