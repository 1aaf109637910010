import json
import random
from unittest.mock import patch

import pytest

from aeroflow.booking.handlers import (
    cancel_booking,
    commit_booking,
    complete_departed_bookings,
    get_booking,
    list_bookings,
    list_user_bookings,
)
from aeroflow.inventory.domain.enum import SeatClass
from aeroflow.inventory.domain.value_object import SeatId
from aeroflow.payment.applications.process_payment import ProcessPaymentService
from aeroflow.payment.infrastructure.simulated_payment_gateway import (
    SimulatedPaymentGateway,
)
from aeroflow.shared.domain import Money, UserId
from aeroflow.shared.domain.exception import SeatUnavailableException


@pytest.fixture
def flight(register_flight):
    return register_flight()


@pytest.fixture
def ready_session(session_service, flight, passenger):
    session = session_service.start(UserId("user-1"), flight.id, SeatClass.ECONOMY)
    session_service.select_seats(
        session.id, [SeatId.for_seat(flight.id, n) for n in ("25A", "25B")]
    )
    return session_service.set_passenger(session.id, passenger)


@pytest.fixture
def commit_request(api_event, ready_session):
    """予約確定リクエストを生成する Factory fixture"""

    def _factory(expiry: str = "12/27", number: str = "4242 4242 4242 4242", **overrides):
        body = {
            "idempotency_key": "idem-key-0001",
            "card": {
                "number": number,
                "holder_name": "Jane Traveler",
                "expiry": expiry,
                "cvv": "123",
            },
            **overrides,
        }
        return api_event(
            body=json.dumps(body),
            path_parameters={"session_id": str(ready_session.id)},
        )

    return _factory


@pytest.fixture
def wired_commit(session_service, ledger_service, clock):
    """commit_booking モジュールの依存をインメモリ実装に差し替える"""
    payments = ProcessPaymentService(
        gateway=SimulatedPaymentGateway(decline_rate=0, rng=random.Random(0)),
        clock=clock,
    )
    with (
        patch.object(commit_booking, "sessions", session_service),
        patch.object(commit_booking, "payments", payments),
        patch.object(commit_booking, "ledger", ledger_service),
    ):
        yield


class TestCommitBookingHandler:
    def test_returns_201_with_confirmed_booking(
        self, wired_commit, commit_request, lambda_context, inventory_repository, flight
    ):
        # Act
        response = commit_booking.lambda_handler(commit_request(), lambda_context)

        # Assert
        assert response["statusCode"] == 201
        data = json.loads(response["body"])["data"]
        assert data["status"] == "Confirmed"
        assert data["payment_status"] == "Paid"
        assert data["total_price"] == "400"
        assert data["reference"].startswith("AFRS-20250301-")
        cabin_available = inventory_repository.find_by_id(flight.id).available_seats(
            SeatClass.ECONOMY
        )
        assert cabin_available == 148

    def test_resubmitting_returns_same_booking(
        self, wired_commit, commit_request, lambda_context
    ):
        first = commit_booking.lambda_handler(commit_request(), lambda_context)

        second = commit_booking.lambda_handler(commit_request(), lambda_context)

        assert second["statusCode"] == 201
        assert (
            json.loads(second["body"])["data"]["reference"]
            == json.loads(first["body"])["data"]["reference"]
        )

    def test_expired_card_returns_402(
        self, wired_commit, commit_request, lambda_context, ledger_service, ready_session
    ):
        response = commit_booking.lambda_handler(
            commit_request(expiry="01/24"), lambda_context
        )

        assert response["statusCode"] == 402
        assert json.loads(response["body"])["error_code"] == "PaymentFailedException"
        assert ledger_service.find_for_session(ready_session.id) is None

    def test_declined_payment_returns_402(
        self, wired_commit, commit_request, lambda_context, clock
    ):
        declining = ProcessPaymentService(
            gateway=SimulatedPaymentGateway(decline_rate=1), clock=clock
        )

        with patch.object(commit_booking, "payments", declining):
            response = commit_booking.lambda_handler(commit_request(), lambda_context)

        assert response["statusCode"] == 402

    def test_invalid_card_returns_400(self, wired_commit, commit_request, lambda_context):
        response = commit_booking.lambda_handler(
            commit_request(number="1234"), lambda_context
        )

        assert response["statusCode"] == 400

    def test_missing_idempotency_key_returns_400(
        self, wired_commit, api_event, lambda_context, ready_session
    ):
        body = {
            "card": {
                "number": "4242424242424242",
                "holder_name": "Jane Traveler",
                "expiry": "12/27",
                "cvv": "123",
            }
        }
        event = api_event(
            body=json.dumps(body), path_parameters={"session_id": str(ready_session.id)}
        )

        response = commit_booking.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 400

    def test_expired_session_returns_410(
        self, wired_commit, commit_request, lambda_context, clock
    ):
        clock.advance(minutes=20)

        response = commit_booking.lambda_handler(commit_request(), lambda_context)

        assert response["statusCode"] == 410

    def test_commit_failure_after_charge_voids_payment(
        self, wired_commit, commit_request, lambda_context, ledger_service, clock
    ):
        # Arrange
        gateway = SimulatedPaymentGateway(decline_rate=0, rng=random.Random(0))
        charging = ProcessPaymentService(gateway=gateway, clock=clock)
        taken = SeatUnavailableException("Seats were taken", seat_ids=("25A",))

        # Act
        with (
            patch.object(commit_booking, "payments", charging),
            patch.object(ledger_service, "commit", side_effect=taken),
        ):
            response = commit_booking.lambda_handler(commit_request(), lambda_context)

        # Assert
        assert response["statusCode"] == 409
        assert len(gateway.voided) == 1
        assert gateway.voided[0].startswith("TXN-")


@pytest.fixture
def committed(ledger_service, ready_session, payment_result):
    return ledger_service.commit(ready_session.id, payment_result(Money.usd(400)))


class TestBookingHandlers:
    def test_cancel_booking(self, ledger_service, committed, api_event, lambda_context):
        event = api_event(path_parameters={"booking_id": str(committed.id)})

        with patch.object(cancel_booking, "service", ledger_service):
            response = cancel_booking.lambda_handler(event, lambda_context)
            again = cancel_booking.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 200
        assert json.loads(response["body"])["data"]["status"] == "Cancelled"
        assert again["statusCode"] == 200

    def test_cancel_unknown_booking_returns_404(
        self, ledger_service, api_event, lambda_context
    ):
        event = api_event(path_parameters={"booking_id": "booking_for_missing"})

        with patch.object(cancel_booking, "service", ledger_service):
            response = cancel_booking.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 404

    @pytest.mark.parametrize("key", ["id", "reference"])
    def test_get_booking_by_id_or_reference(
        self, ledger_service, committed, api_event, lambda_context, key
    ):
        value = str(committed.id) if key == "id" else str(committed.reference)
        event = api_event(method="GET", path_parameters={"booking_id": value})

        with patch.object(get_booking, "service", ledger_service):
            response = get_booking.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 200
        assert json.loads(response["body"])["data"]["booking_id"] == str(committed.id)

    def test_list_user_bookings(self, ledger_service, committed, api_event, lambda_context):
        event = api_event(method="GET", path_parameters={"user_id": "user-1"})

        with patch.object(list_user_bookings, "service", ledger_service):
            response = list_user_bookings.lambda_handler(event, lambda_context)

        data = json.loads(response["body"])["data"]
        assert [b["booking_id"] for b in data] == [str(committed.id)]

    def test_list_bookings_filters_by_status(
        self, ledger_service, committed, api_event, lambda_context
    ):
        with patch.object(list_bookings, "service", ledger_service):
            confirmed = list_bookings.lambda_handler(
                api_event(method="GET", query_string_parameters={"status": "Confirmed"}),
                lambda_context,
            )
            unknown = list_bookings.lambda_handler(
                api_event(method="GET", query_string_parameters={"status": "Lost"}),
                lambda_context,
            )

        assert len(json.loads(confirmed["body"])["data"]) == 1
        assert unknown["statusCode"] == 400

    def test_complete_departed_bookings(self, lambda_context):
        event = {
            "version": "0",
            "id": "event-1",
            "detail-type": "Scheduled Event",
            "source": "aws.events",
            "account": "123456789012",
            "time": "2025-03-11T00:00:00Z",
            "region": "us-east-1",
            "resources": [],
            "detail": {},
        }

        with patch.object(complete_departed_bookings, "service") as mock_service:
            mock_service.complete.return_value = []
            response = complete_departed_bookings.lambda_handler(event, lambda_context)

        assert response == {"status": "success", "completed_bookings": []}
        mock_service.complete.assert_called_once()
