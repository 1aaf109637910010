import os
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("TABLE_NAME", "aeroflow-test")
os.environ.setdefault("IDEMPOTENCY_TABLE_NAME", "aeroflow-idempotency-test")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "aeroflow-test")
os.environ["POWERTOOLS_IDEMPOTENCY_DISABLED"] = "1"

from fakes import (  # noqa: E402
    InMemoryBookingRepository,
    InMemoryInventoryRepository,
    InMemoryPaymentRepository,
    InMemoryReservationSessionRepository,
)

from aeroflow.booking.applications.booking_ledger import BookingLedgerService  # noqa: E402
from aeroflow.booking.domain.factory import BookingFactory  # noqa: E402
from aeroflow.inventory.applications.flight_inventory import (  # noqa: E402
    FlightInventoryService,
)
from aeroflow.inventory.domain.enum import SeatClass  # noqa: E402
from aeroflow.inventory.domain.factory import FlightFactory  # noqa: E402
from aeroflow.payment.domain.enum import PaymentStatus  # noqa: E402
from aeroflow.payment.domain.factory import PaymentFactory  # noqa: E402
from aeroflow.payment.domain.value_object import CardSuffix, PaymentResult  # noqa: E402
from aeroflow.reservation.applications.reservation_session import (  # noqa: E402
    ReservationSessionService,
)
from aeroflow.reservation.domain.factory import ReservationSessionFactory  # noqa: E402
from aeroflow.reservation.domain.value_object import Passenger  # noqa: E402
from aeroflow.shared.domain import IsoDateTime  # noqa: E402


class FakeClock:
    """テスト用の時計（advance で時間を進める）"""

    def __init__(self, now: str = "2025-03-01T09:00:00") -> None:
        self.current = IsoDateTime.from_string(now)

    def __call__(self) -> IsoDateTime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current = self.current.plus(timedelta(**kwargs))


@dataclass
class FakeLambdaContext:
    function_name: str = "test-function"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = (
        "arn:aws:lambda:us-east-1:123456789012:function:test-function"
    )
    aws_request_id: str = "52fdfc07-2182-154f-163f-5f0f9a621d72"

    def get_remaining_time_in_millis(self) -> int:
        return 30000


@pytest.fixture
def clock():
    """全テスト共通の時計フィクスチャ"""
    return FakeClock()


@pytest.fixture
def mock_repository():
    """リポジトリのモックフィクスチャ"""
    return MagicMock()


@pytest.fixture
def lambda_context():
    return FakeLambdaContext()


@pytest.fixture
def api_event():
    """API Gateway プロキシイベントを生成する Factory fixture"""

    def _factory(
        body: str | None = None,
        path_parameters: dict | None = None,
        query_string_parameters: dict | None = None,
        method: str = "POST",
    ) -> dict:
        return {
            "httpMethod": method,
            "path": "/",
            "headers": {"Content-Type": "application/json"},
            "pathParameters": path_parameters,
            "queryStringParameters": query_string_parameters,
            "body": body,
            "isBase64Encoded": False,
            "requestContext": {"requestId": "test-request"},
        }

    return _factory


@pytest.fixture
def inventory_repository():
    return InMemoryInventoryRepository()


@pytest.fixture
def session_repository(inventory_repository):
    return InMemoryReservationSessionRepository(inventory_repository)


@pytest.fixture
def payment_repository():
    return InMemoryPaymentRepository()


@pytest.fixture
def booking_repository(inventory_repository, session_repository, payment_repository):
    return InMemoryBookingRepository(
        inventory_repository, session_repository, payment_repository
    )


@pytest.fixture
def register_flight(inventory_repository):
    """フライトと座席表をインメモリ在庫に登録する Factory fixture

    Economy 150席（25列 x 6）、Business 28席（7列 x 4）。
    """

    def _factory(
        flight_number: str = "AF101",
        origin: str = "JFK",
        destination: str = "LAX",
        departure_time: str = "2025-03-10T08:00:00",
        arrival_time: str = "2025-03-10T14:00:00",
        prices: dict | None = None,
    ):
        flight, seats = FlightFactory().create(
            {
                "flight_number": flight_number,
                "airline": "AeroFlow",
                "origin": origin,
                "destination": destination,
                "departure_time": departure_time,
                "arrival_time": arrival_time,
                "prices": prices
                or {SeatClass.ECONOMY: Decimal("200"), SeatClass.BUSINESS: Decimal("900")},
                "currency": "USD",
            }
        )
        inventory_repository.save(flight)
        inventory_repository.save_seats(seats)
        return flight

    return _factory


@pytest.fixture
def inventory_service(inventory_repository):
    return FlightInventoryService(repository=inventory_repository)


@pytest.fixture
def session_service(session_repository, inventory_service, clock):
    return ReservationSessionService(
        repository=session_repository,
        inventory=inventory_service,
        factory=ReservationSessionFactory(ttl=timedelta(minutes=15)),
        ttl=timedelta(minutes=15),
        max_seats=5,
        clock=clock,
    )


@pytest.fixture
def ledger_service(
    booking_repository, payment_repository, session_service, inventory_service, clock
):
    return BookingLedgerService(
        repository=booking_repository,
        payment_repository=payment_repository,
        sessions=session_service,
        inventory=inventory_service,
        factory=BookingFactory(),
        payment_factory=PaymentFactory(),
        clock=clock,
    )


@pytest.fixture
def passenger():
    return Passenger(
        full_name="Jane Traveler",
        email="jane@example.com",
        phone="+1 555 010 2030",
        passport_number="X1234567",
    )


@pytest.fixture
def payment_result(clock):
    """決済結果を生成する Factory fixture"""

    def _factory(amount, status=PaymentStatus.SUCCESS, key: str = "idem-key-0001"):
        return PaymentResult(
            status=status,
            amount=amount,
            card_suffix=CardSuffix("4242"),
            transaction_id="TXN-000000000001",
            processed_at=clock(),
            idempotency_key=key,
            failure_reason=None if status == PaymentStatus.SUCCESS else "Card declined",
        )

    return _factory
