from unittest.mock import patch

import pytest

from aeroflow.booking.domain.enum import BookingPaymentStatus, BookingStatus
from aeroflow.booking.domain.value_object import BookingReference
from aeroflow.inventory.domain.enum import SeatClass
from aeroflow.inventory.domain.value_object import SeatId
from aeroflow.payment.domain.enum import PaymentStatus
from aeroflow.payment.domain.value_object import PaymentId
from aeroflow.reservation.domain.enum import SessionStatus
from aeroflow.reservation.domain.value_object import SessionId
from aeroflow.shared.domain import BookingId, Money, UserId
from aeroflow.shared.domain.exception import (
    BusinessRuleViolationException,
    DuplicateResourceException,
    InvalidTransitionException,
    PaymentFailedException,
    ResourceNotFoundException,
    SessionExpiredException,
)

REFERENCE_PATH = "aeroflow.booking.applications.booking_ledger.BookingReference.generate"


@pytest.fixture
def flight(register_flight):
    return register_flight()


@pytest.fixture
def ready_session(session_service, flight, passenger):
    """エコノミー3席と搭乗者を入力済みのセッション"""
    session = session_service.start(UserId("user-1"), flight.id, SeatClass.ECONOMY)
    session_service.select_seats(
        session.id, [SeatId.for_seat(flight.id, n) for n in ("25A", "25B", "25C")]
    )
    return session_service.set_passenger(session.id, passenger)


def economy_available(inventory_repository, flight):
    return inventory_repository.find_by_id(flight.id).available_seats(SeatClass.ECONOMY)


class TestCommit:
    def test_commit_confirms_seats_with_booking_reference(
        self,
        ledger_service,
        inventory_repository,
        session_repository,
        payment_repository,
        flight,
        ready_session,
        payment_result,
    ):
        # Act
        booking = ledger_service.commit(
            ready_session.id, payment_result(Money.usd(600))
        )

        # Assert
        assert booking.id == BookingId.from_session_id(str(ready_session.id))
        assert booking.status == BookingStatus.CONFIRMED
        assert booking.payment_status == BookingPaymentStatus.PAID
        assert booking.total_price == Money.usd(600)
        seats = inventory_repository.find_seats(flight.id, list(ready_session.seat_ids))
        assert all(s.booking_ref == str(booking.reference) for s in seats)
        assert all(s.confirmed for s in seats)
        assert economy_available(inventory_repository, flight) == 147
        assert session_repository.find_by_id(ready_session.id).status == SessionStatus.CONSUMED
        payment = payment_repository.find_by_id(PaymentId.from_booking_id(booking.id))
        assert payment.status == PaymentStatus.SUCCESS

    def test_commit_and_cancel_restore_inventory(
        self,
        ledger_service,
        inventory_repository,
        payment_repository,
        flight,
        ready_session,
        payment_result,
    ):
        assert economy_available(inventory_repository, flight) == 147

        booking = ledger_service.commit(ready_session.id, payment_result(Money.usd(600)))
        assert economy_available(inventory_repository, flight) == 147

        cancelled = ledger_service.cancel(booking.id)

        assert cancelled.status == BookingStatus.CANCELLED
        assert cancelled.payment_status == BookingPaymentStatus.REFUNDED
        assert economy_available(inventory_repository, flight) == 150
        seats = inventory_repository.find_seats(flight.id, list(booking.seat_ids))
        assert all(s.is_available for s in seats)
        payment = payment_repository.find_by_booking_id(booking.id)
        assert payment.status == PaymentStatus.REFUNDED

    def test_commit_is_idempotent(self, ledger_service, ready_session, payment_result):
        first = ledger_service.commit(ready_session.id, payment_result(Money.usd(600)))

        second = ledger_service.commit(ready_session.id, payment_result(Money.usd(600)))

        assert second.id == first.id
        assert second.reference == first.reference

    def test_failed_payment_writes_nothing(
        self,
        ledger_service,
        booking_repository,
        session_repository,
        ready_session,
        payment_result,
    ):
        # Act
        with pytest.raises(PaymentFailedException):
            ledger_service.commit(
                ready_session.id,
                payment_result(Money.usd(600), status=PaymentStatus.FAILED),
            )

        # Assert
        assert booking_repository.list_all() == []
        assert session_repository.find_by_id(ready_session.id).status == SessionStatus.OPEN

    def test_amount_mismatch_is_rejected(
        self, ledger_service, booking_repository, ready_session, payment_result
    ):
        with pytest.raises(BusinessRuleViolationException):
            ledger_service.commit(ready_session.id, payment_result(Money.usd(500)))

        assert booking_repository.list_all() == []

    def test_passenger_is_required(
        self, ledger_service, session_service, flight, payment_result
    ):
        session = session_service.start(UserId("user-1"), flight.id, SeatClass.ECONOMY)
        session_service.select_seats(session.id, [SeatId.for_seat(flight.id, "26A")])

        with pytest.raises(BusinessRuleViolationException):
            ledger_service.commit(session.id, payment_result(Money.usd(200)))

    def test_expired_session_cannot_be_committed(
        self, ledger_service, inventory_repository, flight, ready_session, payment_result, clock
    ):
        clock.advance(minutes=20)

        with pytest.raises(SessionExpiredException):
            ledger_service.commit(ready_session.id, payment_result(Money.usd(600)))

        assert economy_available(inventory_repository, flight) == 150

    def test_reference_collision_is_retried(
        self, ledger_service, register_flight, session_service, passenger, payment_result
    ):
        # Arrange
        taken = BookingReference("AFRS-20250301-AAAAAA")
        fresh = BookingReference("AFRS-20250301-BBBBBB")
        flight = register_flight(flight_number="AF202")
        sessions = []
        for user, seat in (("user-1", "25A"), ("user-2", "25B")):
            session = session_service.start(UserId(user), flight.id, SeatClass.ECONOMY)
            session_service.select_seats(session.id, [SeatId.for_seat(flight.id, seat)])
            session_service.set_passenger(session.id, passenger)
            sessions.append(session)

        # Act
        with patch(REFERENCE_PATH, side_effect=[taken, taken, fresh]):
            first = ledger_service.commit(sessions[0].id, payment_result(Money.usd(200)))
            second = ledger_service.commit(sessions[1].id, payment_result(Money.usd(200)))

        # Assert
        assert first.reference == taken
        assert second.reference == fresh

    def test_gives_up_after_repeated_collisions(
        self, ledger_service, register_flight, session_service, passenger, payment_result
    ):
        taken = BookingReference("AFRS-20250301-AAAAAA")
        flight = register_flight(flight_number="AF303")
        sessions = []
        for user, seat in (("user-1", "25A"), ("user-2", "25B")):
            session = session_service.start(UserId(user), flight.id, SeatClass.ECONOMY)
            session_service.select_seats(session.id, [SeatId.for_seat(flight.id, seat)])
            session_service.set_passenger(session.id, passenger)
            sessions.append(session)

        with patch(REFERENCE_PATH, return_value=taken):
            ledger_service.commit(sessions[0].id, payment_result(Money.usd(200)))
            with pytest.raises(DuplicateResourceException):
                ledger_service.commit(sessions[1].id, payment_result(Money.usd(200)))


class TestCancel:
    def test_cancel_twice_is_a_no_op(
        self, ledger_service, inventory_repository, flight, ready_session, payment_result
    ):
        booking = ledger_service.commit(ready_session.id, payment_result(Money.usd(600)))
        ledger_service.cancel(booking.id)

        again = ledger_service.cancel(booking.id)

        assert again.status == BookingStatus.CANCELLED
        assert economy_available(inventory_repository, flight) == 150

    def test_cancel_completed_booking_is_rejected(
        self, ledger_service, booking_repository, ready_session, payment_result
    ):
        booking = ledger_service.commit(ready_session.id, payment_result(Money.usd(600)))
        booking.complete()
        booking_repository.update_status(booking, expected_status=BookingStatus.CONFIRMED)

        with pytest.raises(InvalidTransitionException):
            ledger_service.cancel(booking.id)

    def test_cancel_after_departure_completes_instead(
        self,
        ledger_service,
        booking_repository,
        payment_repository,
        inventory_repository,
        flight,
        ready_session,
        payment_result,
        clock,
    ):
        # Arrange
        booking = ledger_service.commit(ready_session.id, payment_result(Money.usd(600)))
        clock.advance(days=30)

        # Act
        with pytest.raises(InvalidTransitionException):
            ledger_service.cancel(booking.id)

        # Assert
        stored = booking_repository.find_by_id(booking.id)
        assert stored.status == BookingStatus.COMPLETED
        assert stored.payment_status == BookingPaymentStatus.PAID
        payment = payment_repository.find_by_id(PaymentId.from_booking_id(booking.id))
        assert payment.status == PaymentStatus.SUCCESS
        assert economy_available(inventory_repository, flight) == 147

    def test_cancel_unknown_booking(self, ledger_service):
        with pytest.raises(ResourceNotFoundException):
            ledger_service.cancel(BookingId("booking_for_missing"))


class TestQueries:
    def test_lookup_by_reference_and_user(
        self, ledger_service, ready_session, payment_result
    ):
        booking = ledger_service.commit(ready_session.id, payment_result(Money.usd(600)))

        assert ledger_service.get_by_reference(booking.reference).id == booking.id
        assert [b.id for b in ledger_service.list_for_user(UserId("user-1"))] == [booking.id]
        assert ledger_service.list_for_user(UserId("someone-else")) == []

    def test_list_bookings_by_status(self, ledger_service, ready_session, payment_result):
        booking = ledger_service.commit(ready_session.id, payment_result(Money.usd(600)))

        assert [b.id for b in ledger_service.list_bookings()] == [booking.id]
        assert ledger_service.list_bookings(BookingStatus.CANCELLED) == []

    def test_find_for_session(self, ledger_service, ready_session, payment_result):
        assert ledger_service.find_for_session(ready_session.id) is None

        booking = ledger_service.commit(ready_session.id, payment_result(Money.usd(600)))

        assert ledger_service.find_for_session(ready_session.id).id == booking.id
        assert ledger_service.find_for_session(SessionId("other")) is None
