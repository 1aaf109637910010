from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest

from aeroflow.inventory.domain.entity import Seat
from aeroflow.inventory.domain.enum import SeatClass, SeatType
from aeroflow.inventory.domain.value_object import (
    FlightId,
    InventoryChange,
    SeatId,
    SeatWrite,
)
from aeroflow.inventory.infrastructure.dynamodb_inventory_repository import (
    DynamoDBInventoryRepository,
    add_inventory_change,
    raise_for_inventory_failure,
)
from aeroflow.shared.domain.exception import (
    CapacityExceededException,
    OptimisticLockException,
    SeatUnavailableException,
)
from aeroflow.shared.infrastructure import TransactionConditionFailed


@pytest.fixture
def held_seat_change():
    flight_id = FlightId("f1")
    seat = Seat(
        id=SeatId("f1-25A"),
        flight_id=flight_id,
        seat_number="25A",
        seat_class=SeatClass.ECONOMY,
        seat_type=SeatType.WINDOW,
    )
    seat.hold("HOLD#s1")
    return InventoryChange(
        flight_id=flight_id,
        seat_class=SeatClass.ECONOMY,
        counter_delta=-1,
        cabin_total=150,
        seat_writes=(SeatWrite(seat=seat, expected_version=0),),
    )


class TestAddInventoryChange:
    def test_seat_write_is_conditioned_on_version(self, held_seat_change):
        writer = MagicMock()

        add_inventory_change(writer, held_seat_change)

        seat_call, counter_call = writer.update.call_args_list
        assert seat_call.kwargs["label"] == "seat:f1-25A"
        assert seat_call.kwargs["key"] == {"PK": "FLIGHT#f1", "SK": "SEAT#f1-25A"}
        assert seat_call.kwargs["condition"] == "#version = :expected"
        assert seat_call.kwargs["values"][":expected"] == 0
        assert seat_call.kwargs["values"][":ref"] == "HOLD#s1"

        assert counter_call.kwargs["label"] == "counter"
        assert counter_call.kwargs["condition"] == "#cabins.#cls.#available >= :bound"
        assert counter_call.kwargs["values"] == {":delta": -1, ":bound": 1}
        assert counter_call.kwargs["names"]["#cls"] == "ECONOMY"

    def test_release_bounds_counter_by_cabin_total(self, held_seat_change):
        seat = held_seat_change.seats[0]
        seat.release("HOLD#s1")
        change = InventoryChange(
            flight_id=held_seat_change.flight_id,
            seat_class=SeatClass.ECONOMY,
            counter_delta=1,
            cabin_total=150,
            seat_writes=(SeatWrite(seat=seat, expected_version=1),),
        )
        writer = MagicMock()

        add_inventory_change(writer, change)

        seat_call, counter_call = writer.update.call_args_list
        assert "REMOVE #ref" in seat_call.kwargs["update_expression"]
        assert counter_call.kwargs["condition"] == "#cabins.#cls.#available <= :bound"
        assert counter_call.kwargs["values"] == {":delta": 1, ":bound": 149}


class TestRaiseForInventoryFailure:
    def test_seat_failure(self):
        with pytest.raises(SeatUnavailableException) as exc_info:
            raise_for_inventory_failure(TransactionConditionFailed(["seat:f1-25A"]))

        assert exc_info.value.seat_ids == ("f1-25A",)

    def test_counter_failure(self):
        with pytest.raises(CapacityExceededException):
            raise_for_inventory_failure(TransactionConditionFailed(["counter"]))

    def test_other_failure(self):
        with pytest.raises(OptimisticLockException):
            raise_for_inventory_failure(TransactionConditionFailed(["session"]))


class TestDynamoDBInventoryRepository:
    @patch("aeroflow.inventory.infrastructure.dynamodb_inventory_repository.boto3")
    def test_find_by_id_maps_item_to_flight(self, mock_boto3):
        table = MagicMock()
        mock_boto3.resource.return_value.Table.return_value = table
        table.get_item.return_value = {
            "Item": {
                "flight_id": "f1",
                "flight_number": "AF101",
                "airline": "AeroFlow",
                "origin": "JFK",
                "destination": "LAX",
                "departure_time": "2025-03-10T08:00:00+00:00",
                "arrival_time": "2025-03-10T14:00:00+00:00",
                "status": "Delayed",
                "currency": "USD",
                "cabins": {
                    "ECONOMY": {"total": Decimal(150), "available": Decimal(147), "price": "200"}
                },
            }
        }
        repository = DynamoDBInventoryRepository(table_name="table")

        flight = repository.find_by_id(FlightId("f1"))

        assert flight.available_seats(SeatClass.ECONOMY) == 147
        assert flight.price(SeatClass.ECONOMY).amount == Decimal("200")
        assert flight.status.value == "Delayed"
        table.get_item.assert_called_once_with(
            Key={"PK": "FLIGHT#f1", "SK": "META"}, ConsistentRead=True
        )

    @patch("aeroflow.inventory.infrastructure.dynamodb_inventory_repository.boto3")
    def test_find_by_id_returns_none_when_missing(self, mock_boto3):
        table = MagicMock()
        mock_boto3.resource.return_value.Table.return_value = table
        table.get_item.return_value = {}
        repository = DynamoDBInventoryRepository(table_name="table")

        assert repository.find_by_id(FlightId("missing")) is None

    @patch("aeroflow.inventory.infrastructure.dynamodb_inventory_repository.boto3")
    def test_find_by_route_follows_pagination(self, mock_boto3):
        # Arrange
        table = MagicMock()
        mock_boto3.resource.return_value.Table.return_value = table

        def flight_item(flight_id: str, departure: str) -> dict:
            return {
                "flight_id": flight_id,
                "flight_number": "AF101",
                "airline": "AeroFlow",
                "origin": "JFK",
                "destination": "LAX",
                "departure_time": departure,
                "arrival_time": "2025-03-10T23:00:00+00:00",
                "status": "On Time",
                "currency": "USD",
                "cabins": {
                    "ECONOMY": {"total": Decimal(150), "available": Decimal(150), "price": "200"}
                },
            }

        table.query.side_effect = [
            {
                "Items": [flight_item("f1", "2025-03-10T08:00:00+00:00")],
                "LastEvaluatedKey": {"PK": "FLIGHT#f1", "SK": "META"},
            },
            {"Items": [flight_item("f2", "2025-03-10T17:00:00+00:00")]},
        ]
        repository = DynamoDBInventoryRepository(table_name="table")

        # Act
        flights = repository.find_by_route("JFK", "LAX", date(2025, 3, 10))

        # Assert
        assert [str(f.id) for f in flights] == ["f1", "f2"]
        assert table.query.call_count == 2
        second_call = table.query.call_args_list[1].kwargs
        assert second_call["ExclusiveStartKey"] == {"PK": "FLIGHT#f1", "SK": "META"}
        assert second_call["IndexName"] == "GSI1"
