import pytest

from aeroflow.booking.domain.entity import Booking
from aeroflow.booking.domain.enum import BookingPaymentStatus, BookingStatus
from aeroflow.booking.domain.value_object import BookingReference
from aeroflow.inventory.domain.enum import SeatClass
from aeroflow.inventory.domain.value_object import FlightId, FlightNumber, SeatId
from aeroflow.shared.domain import BookingId, IsoDateTime, Money, UserId
from aeroflow.shared.domain.exception import InvalidTransitionException


@pytest.fixture
def create_booking(passenger):
    """Booking を生成する Factory fixture"""

    def _factory(status: BookingStatus = BookingStatus.DRAFT) -> Booking:
        return Booking(
            id=BookingId("booking_for_s1"),
            reference=BookingReference("AFRS-20250301-ABC123"),
            user_id=UserId("user-1"),
            flight_id=FlightId("f1"),
            flight_number=FlightNumber("AF101"),
            departure_time=IsoDateTime.from_string("2025-03-10T08:00:00"),
            seat_class=SeatClass.ECONOMY,
            seat_ids=(SeatId("f1-25A"), SeatId("f1-25B")),
            seat_numbers=("25A", "25B"),
            passenger=passenger,
            base_fare=Money.usd(400),
            services_price=Money.usd(25),
            baggage_price=Money.usd(50),
            booked_at=IsoDateTime.from_string("2025-03-01T09:05:00"),
            status=status,
        )

    return _factory


class TestBooking:
    def test_total_price(self, create_booking):
        assert create_booking().total_price == Money.usd(475)

    def test_confirm_marks_paid(self, create_booking):
        booking = create_booking()

        assert booking.confirm() is True
        assert booking.status == BookingStatus.CONFIRMED
        assert booking.payment_status == BookingPaymentStatus.PAID

    def test_cancel_marks_refunded(self, create_booking):
        booking = create_booking(BookingStatus.CONFIRMED)

        assert booking.cancel() is True
        assert booking.status == BookingStatus.CANCELLED
        assert booking.payment_status == BookingPaymentStatus.REFUNDED

    def test_cancel_twice_is_a_no_op(self, create_booking):
        booking = create_booking(BookingStatus.CANCELLED)

        assert booking.cancel() is False
        assert booking.status == BookingStatus.CANCELLED

    def test_cancel_completed_booking_is_rejected(self, create_booking):
        booking = create_booking(BookingStatus.COMPLETED)

        with pytest.raises(InvalidTransitionException):
            booking.cancel()

    def test_draft_cannot_be_cancelled(self, create_booking):
        with pytest.raises(InvalidTransitionException):
            create_booking().cancel()

    def test_complete_after_departure(self, create_booking):
        booking = create_booking(BookingStatus.CONFIRMED)

        assert booking.has_departed(IsoDateTime.from_string("2025-03-10T08:00:00"))
        assert not booking.has_departed(IsoDateTime.from_string("2025-03-10T07:59:00"))
        assert booking.complete() is True
        assert booking.status == BookingStatus.COMPLETED
