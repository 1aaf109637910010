import os

import boto3
from boto3.dynamodb.conditions import Key

from aeroflow.inventory.domain.enum import FlightStatus
from aeroflow.inventory.domain.value_object import FlightId
from aeroflow.shared.domain import IsoDateTime, UserId
from aeroflow.shared.infrastructure import query_all
from aeroflow.watch.domain.entity import FlightWatch
from aeroflow.watch.domain.repository import FlightWatchRepository
from aeroflow.watch.domain.value_object import WatchId


def watch_key(watch_id: WatchId) -> dict[str, str]:
    return {"PK": f"FLIGHT#{watch_id.flight_id}", "SK": f"WATCH#{watch_id.user_id}"}


class DynamoDBFlightWatchRepository(FlightWatchRepository):
    """DynamoDBを使用したFlightWatchRepository の具象実装"""

    def __init__(self, table_name: str | None = None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)

    def save(self, watch: FlightWatch) -> None:
        self.table.put_item(
            Item={
                **watch_key(watch.id),
                "entity_type": "WATCH",
                "user_id": str(watch.id.user_id),
                "flight_id": str(watch.id.flight_id),
                "last_known_status": watch.last_known_status.value,
                "created_at": str(watch.created_at),
                "GSI1PK": f"USER#{watch.id.user_id}#WATCHES",
                "GSI1SK": str(watch.created_at),
            }
        )

    def find_by_id(self, watch_id: WatchId) -> FlightWatch | None:
        response = self.table.get_item(Key=watch_key(watch_id))
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def delete(self, watch_id: WatchId) -> None:
        self.table.delete_item(Key=watch_key(watch_id))

    def list_by_user(self, user_id: UserId) -> list[FlightWatch]:
        items = query_all(
            self.table,
            IndexName="GSI1",
            KeyConditionExpression=Key("GSI1PK").eq(f"USER#{user_id}#WATCHES"),
        )
        return [self._to_entity(item) for item in items]

    def list_by_flight(self, flight_id: FlightId) -> list[FlightWatch]:
        items = query_all(
            self.table,
            KeyConditionExpression=Key("PK").eq(f"FLIGHT#{flight_id}")
            & Key("SK").begins_with("WATCH#"),
        )
        return [self._to_entity(item) for item in items]

    def _to_entity(self, item: dict) -> FlightWatch:
        return FlightWatch(
            id=WatchId(
                user_id=UserId(value=item["user_id"]),
                flight_id=FlightId(value=item["flight_id"]),
            ),
            last_known_status=FlightStatus(item["last_known_status"]),
            created_at=IsoDateTime.from_string(item["created_at"]),
        )
