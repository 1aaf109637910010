import os
from datetime import date
from decimal import Decimal
from typing import NoReturn

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from aeroflow.inventory.domain.entity import Flight, Seat
from aeroflow.inventory.domain.enum import FlightStatus, SeatClass, SeatType
from aeroflow.inventory.domain.repository import InventoryRepository
from aeroflow.inventory.domain.value_object import (
    Cabin,
    FlightId,
    FlightNumber,
    InventoryChange,
    Route,
    SeatId,
)
from aeroflow.shared.domain import Currency, IsoDateTime, Money
from aeroflow.shared.domain.exception import (
    CapacityExceededException,
    DuplicateResourceException,
    OptimisticLockException,
    SeatUnavailableException,
)
from aeroflow.shared.infrastructure import (
    TransactionConditionFailed,
    TransactWriter,
    query_all,
    scan_all,
)


def flight_key(flight_id: FlightId | str) -> dict[str, str]:
    return {"PK": f"FLIGHT#{flight_id}", "SK": "META"}


def seat_key(flight_id: FlightId | str, seat_id: SeatId | str) -> dict[str, str]:
    return {"PK": f"FLIGHT#{flight_id}", "SK": f"SEAT#{seat_id}"}


def add_inventory_change(writer: TransactWriter, change: InventoryChange) -> None:
    """座席の CAS 更新と空席カウンタの差分更新をトランザクションに積む"""
    for write in change.seat_writes:
        seat = write.seat
        names = {"#version": "version", "#confirmed": "confirmed"}
        values: dict = {
            ":expected": write.expected_version,
            ":version": seat.version,
            ":confirmed": seat.confirmed,
        }
        if seat.booking_ref is None:
            expression = (
                "SET #confirmed = :confirmed, #version = :version REMOVE #ref"
            )
        else:
            expression = (
                "SET #ref = :ref, #confirmed = :confirmed, #version = :version"
            )
            values[":ref"] = seat.booking_ref
        names["#ref"] = "booking_ref"
        writer.update(
            key=seat_key(seat.flight_id, seat.id),
            update_expression=expression,
            label=f"seat:{seat.id}",
            condition="#version = :expected",
            names=names,
            values=values,
        )

    if change.counter_delta == 0:
        return

    names = {"#cabins": "cabins", "#cls": change.seat_class.name, "#available": "available"}
    if change.counter_delta < 0:
        condition = "#cabins.#cls.#available >= :bound"
        bound = -change.counter_delta
    else:
        condition = "#cabins.#cls.#available <= :bound"
        bound = change.cabin_total - change.counter_delta
    writer.update(
        key=flight_key(change.flight_id),
        update_expression="SET #cabins.#cls.#available = #cabins.#cls.#available + :delta",
        label="counter",
        condition=condition,
        names=names,
        values={":delta": change.counter_delta, ":bound": bound},
    )


def raise_for_inventory_failure(error: TransactionConditionFailed) -> NoReturn:
    """在庫関連の条件失敗をドメイン例外に変換する"""
    seat_ids = error.failed("seat:")
    if seat_ids:
        raise SeatUnavailableException(
            f"Seats were taken by another reservation: {', '.join(seat_ids)}",
            seat_ids=tuple(seat_ids),
        ) from error
    if "counter" in error.labels:
        raise CapacityExceededException(
            "Seat counter would leave its valid range"
        ) from error
    raise OptimisticLockException(str(error)) from error


class DynamoDBInventoryRepository(InventoryRepository):
    """DynamoDBを使用したInventoryRepository の具象実装"""

    def __init__(self, table_name: str | None = None, max_attempts: int = 3) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)
        self.max_attempts = max_attempts

    def save(self, flight: Flight) -> None:
        """フライトをDBに保存する"""
        item = {
            **flight_key(flight.id),
            "entity_type": "FLIGHT",
            "flight_id": str(flight.id),
            "flight_number": str(flight.flight_number),
            "airline": flight.airline,
            "origin": flight.route.origin,
            "destination": flight.route.destination,
            "departure_time": str(flight.departure_time),
            "arrival_time": str(flight.arrival_time),
            "status": flight.status.value,
            "currency": str(next(iter(flight.cabins.values())).price.currency),
            "cabins": {
                seat_class.name: {
                    "total": cabin.total,
                    "available": cabin.available,
                    "price": str(cabin.price.amount),
                }
                for seat_class, cabin in flight.cabins.items()
            },
            "GSI1PK": f"ROUTE#{flight.route.origin}#{flight.route.destination}",
            "GSI1SK": f"{flight.departure_time}#{flight.id}",
        }
        try:
            self.table.put_item(Item=item, ConditionExpression=Attr("PK").not_exists())
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise DuplicateResourceException(f"Flight already exists: {flight.id}")
            raise

    def find_by_id(self, flight_id: FlightId) -> Flight | None:
        response = self.table.get_item(Key=flight_key(flight_id), ConsistentRead=True)
        item = response.get("Item")
        if not item:
            return None
        return self._to_flight(item)

    def list_flights(self) -> list[Flight]:
        items = scan_all(self.table, FilterExpression=Attr("entity_type").eq("FLIGHT"))
        return [self._to_flight(item) for item in items]

    def find_by_route(
        self, origin: str, destination: str, departure_date: date
    ) -> list[Flight]:
        items = query_all(
            self.table,
            IndexName="GSI1",
            KeyConditionExpression=Key("GSI1PK").eq(f"ROUTE#{origin}#{destination}")
            & Key("GSI1SK").begins_with(departure_date.isoformat()),
        )
        return [self._to_flight(item) for item in items]

    def update_status(self, flight: Flight, expected_status: FlightStatus) -> None:
        """運航ステータスを更新する"""
        try:
            self.table.update_item(
                Key=flight_key(flight.id),
                UpdateExpression="SET #status = :status",
                ExpressionAttributeNames={"#status": "status"},
                ExpressionAttributeValues={":status": flight.status.value},
                ConditionExpression=Attr("status").eq(expected_status.value),
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise OptimisticLockException(
                    f"Flight status conflict: "
                    f"expected {expected_status.value}, "
                    f"flight_id={flight.id}"
                )
            raise

    def save_seats(self, seats: list[Seat]) -> None:
        with self.table.batch_writer() as batch:
            for seat in seats:
                batch.put_item(Item=self._to_seat_item(seat))

    def find_seats(self, flight_id: FlightId, seat_ids: list[SeatId]) -> list[Seat]:
        if not seat_ids:
            return []
        keys = [seat_key(flight_id, seat_id) for seat_id in dict.fromkeys(seat_ids)]
        request = {self.table_name: {"Keys": keys, "ConsistentRead": True}}
        items: list[dict] = []
        while request:
            response = self.dynamodb.batch_get_item(RequestItems=request)
            items.extend(response.get("Responses", {}).get(self.table_name, []))
            request = response.get("UnprocessedKeys") or None
        by_id = {item["seat_id"]: self._to_seat(item) for item in items}
        return [by_id[str(seat_id)] for seat_id in seat_ids if str(seat_id) in by_id]

    def list_seats(self, flight_id: FlightId) -> list[Seat]:
        items = query_all(
            self.table,
            KeyConditionExpression=Key("PK").eq(f"FLIGHT#{flight_id}")
            & Key("SK").begins_with("SEAT#"),
            ConsistentRead=True,
        )
        return [self._to_seat(item) for item in items]

    def apply(self, change: InventoryChange) -> None:
        writer = TransactWriter(
            self.table_name, client=self.dynamodb.meta.client, max_attempts=self.max_attempts
        )
        add_inventory_change(writer, change)
        try:
            writer.execute()
        except TransactionConditionFailed as e:
            raise_for_inventory_failure(e)

    def _to_seat_item(self, seat: Seat) -> dict:
        item = {
            **seat_key(seat.flight_id, seat.id),
            "entity_type": "SEAT",
            "seat_id": str(seat.id),
            "flight_id": str(seat.flight_id),
            "seat_number": seat.seat_number,
            "seat_class": seat.seat_class.value,
            "seat_type": seat.seat_type.value,
            "confirmed": seat.confirmed,
            "version": seat.version,
        }
        if seat.booking_ref is not None:
            item["booking_ref"] = seat.booking_ref
        return item

    def _to_seat(self, item: dict) -> Seat:
        """DynamoDB アイテムを座席エンティティに変換する"""
        return Seat(
            id=SeatId(value=item["seat_id"]),
            flight_id=FlightId(value=item["flight_id"]),
            seat_number=item["seat_number"],
            seat_class=SeatClass(item["seat_class"]),
            seat_type=SeatType(item["seat_type"]),
            booking_ref=item.get("booking_ref"),
            confirmed=bool(item.get("confirmed", False)),
            version=int(item.get("version", 0)),
        )

    def _to_flight(self, item: dict) -> Flight:
        """DynamoDB アイテムをフライト集約に変換する"""
        currency = Currency(item["currency"])
        return Flight(
            id=FlightId(value=item["flight_id"]),
            flight_number=FlightNumber(value=item["flight_number"]),
            airline=item["airline"],
            route=Route(origin=item["origin"], destination=item["destination"]),
            departure_time=IsoDateTime.from_string(item["departure_time"]),
            arrival_time=IsoDateTime.from_string(item["arrival_time"]),
            cabins={
                SeatClass[name]: Cabin(
                    total=int(cabin["total"]),
                    available=int(cabin["available"]),
                    price=Money(amount=Decimal(cabin["price"]), currency=currency),
                )
                for name, cabin in item["cabins"].items()
            },
            status=FlightStatus(item["status"]),
        )
