import pytest
from fakes import InMemoryFlightWatchRepository

from aeroflow.inventory.applications.update_flight_status import (
    UpdateFlightStatusService,
)
from aeroflow.inventory.domain.enum import FlightStatus
from aeroflow.inventory.domain.value_object import FlightId, FlightNumber
from aeroflow.shared.domain import UserId
from aeroflow.shared.domain.exception import ResourceNotFoundException
from aeroflow.watch.applications.flight_watch import FlightWatchService
from aeroflow.watch.domain.value_object import StatusChange


@pytest.fixture
def watch_repository():
    return InMemoryFlightWatchRepository()


@pytest.fixture
def watch_service(watch_repository, inventory_service, clock):
    return FlightWatchService(
        repository=watch_repository, inventory=inventory_service, clock=clock
    )


class TestFlightWatchService:
    def test_watch_records_current_status(self, watch_service, register_flight):
        flight = register_flight()

        watch = watch_service.watch(UserId("user-1"), flight.id)

        assert watch.last_known_status == FlightStatus.ON_TIME
        assert [w.id for w in watch_service.list_for_user(UserId("user-1"))] == [watch.id]

    def test_watch_unknown_flight(self, watch_service):
        with pytest.raises(ResourceNotFoundException):
            watch_service.watch(UserId("user-1"), FlightId("missing"))

    def test_unwatch(self, watch_service, register_flight):
        flight = register_flight()
        watch_service.watch(UserId("user-1"), flight.id)

        watch_service.unwatch(UserId("user-1"), flight.id)

        assert watch_service.list_for_user(UserId("user-1")) == []

    def test_status_change_notifies_each_watcher_once(
        self, watch_service, inventory_repository, register_flight
    ):
        # Arrange
        flight = register_flight()
        other = register_flight(flight_number="AF202")
        watch_service.watch(UserId("user-1"), flight.id)
        watch_service.watch(UserId("user-2"), flight.id)
        watch_service.watch(UserId("user-3"), other.id)
        updated, _ = UpdateFlightStatusService(inventory_repository).update(
            flight.id, FlightStatus.DELAYED
        )

        # Act
        changes = watch_service.notify_status_change(updated)
        repeated = watch_service.notify_status_change(updated)

        # Assert
        assert sorted(str(c.user_id) for c in changes) == ["user-1", "user-2"]
        assert all(c.previous == FlightStatus.ON_TIME for c in changes)
        assert repeated == []
        stored = watch_service.list_for_user(UserId("user-1"))[0]
        assert stored.last_known_status == FlightStatus.DELAYED


class TestStatusChange:
    @pytest.mark.parametrize(
        "current, severity",
        [
            (FlightStatus.DELAYED, "warning"),
            (FlightStatus.CANCELLED, "warning"),
            (FlightStatus.BOARDING, "info"),
            (FlightStatus.ON_TIME, "info"),
        ],
    )
    def test_severity(self, current, severity):
        change = StatusChange(
            user_id=UserId("user-1"),
            flight_id=FlightId("f1"),
            flight_number=FlightNumber("AF101"),
            previous=FlightStatus.ON_TIME,
            current=current,
        )

        assert change.severity == severity
        assert change.message == f"Flight AF101 is now {current.value}"
