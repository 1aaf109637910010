import os
from datetime import timedelta
from decimal import Decimal

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from aeroflow.inventory.domain.enum import SeatClass
from aeroflow.inventory.domain.value_object import FlightId, InventoryChange, SeatId
from aeroflow.inventory.infrastructure.dynamodb_inventory_repository import (
    add_inventory_change,
)
from aeroflow.reservation.domain.entity import ReservationSession
from aeroflow.reservation.domain.enum import ExtraService, MealOption, SessionStatus
from aeroflow.reservation.domain.repository import ReservationSessionRepository
from aeroflow.reservation.domain.value_object import (
    BaggageSelection,
    Passenger,
    ServiceSelection,
    SessionId,
)
from aeroflow.shared.domain import Currency, IsoDateTime, Money, UserId
from aeroflow.shared.domain.exception import (
    DuplicateResourceException,
    OptimisticLockException,
)
from aeroflow.shared.infrastructure import (
    TransactionConditionFailed,
    TransactWriter,
    query_all,
)

OPEN_SESSIONS = "SESSIONS#OPEN"

# 期限切れから TTL で削除されるまでの猶予
SESSION_RETENTION = timedelta(days=1)


def session_key(session_id: SessionId | str) -> dict[str, str]:
    return {"PK": f"SESSION#{session_id}", "SK": "META"}


def add_session_consumption(
    writer: TransactWriter, session_id: SessionId, expected_version: int
) -> None:
    """OPEN のセッションを CONSUMED にする更新をトランザクションに積む"""
    writer.update(
        key=session_key(session_id),
        update_expression=(
            "SET #status = :consumed, #version = #version + :one REMOVE GSI1PK, GSI1SK"
        ),
        label="session",
        condition="#status = :open AND #version = :expected",
        names={"#status": "status", "#version": "version"},
        values={
            ":consumed": SessionStatus.CONSUMED.value,
            ":open": SessionStatus.OPEN.value,
            ":one": 1,
            ":expected": expected_version,
        },
    )


class DynamoDBReservationSessionRepository(ReservationSessionRepository):
    """DynamoDBを使用したReservationSessionRepository の具象実装"""

    def __init__(self, table_name: str | None = None, max_attempts: int = 3) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)
        self.max_attempts = max_attempts

    def save(self, session: ReservationSession) -> None:
        """セッションをDBに保存する"""
        try:
            self.table.put_item(
                Item=self._to_item(session),
                ConditionExpression=Attr("PK").not_exists(),
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise DuplicateResourceException(
                    f"Reservation session already exists: {session.id}"
                )
            raise

    def find_by_id(self, session_id: SessionId) -> ReservationSession | None:
        response = self.table.get_item(Key=session_key(session_id), ConsistentRead=True)
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def update(self, session: ReservationSession, expected_version: int) -> None:
        """セッションを上書きする（version による楽観ロック）"""
        try:
            self.table.put_item(
                Item=self._to_item(session),
                ConditionExpression=Attr("version").eq(expected_version),
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise OptimisticLockException(
                    f"Reservation session was modified concurrently: {session.id}"
                )
            raise

    def expire(
        self,
        session: ReservationSession,
        expected_version: int,
        seat_change: InventoryChange,
    ) -> None:
        """失効したセッションの保存と座席の解放を 1 トランザクションで書き込む"""
        writer = TransactWriter(
            self.table_name, client=self.dynamodb.meta.client, max_attempts=self.max_attempts
        )
        writer.put(
            item=self._to_item(session),
            label="session",
            condition="#version = :expected",
            names={"#version": "version"},
            values={":expected": expected_version},
        )
        add_inventory_change(writer, seat_change)
        try:
            writer.execute()
        except TransactionConditionFailed as e:
            raise OptimisticLockException(
                f"Reservation session changed before expiry: {session.id}"
            ) from e

    def list_expired(self, now: IsoDateTime) -> list[ReservationSession]:
        items = query_all(
            self.table,
            IndexName="GSI1",
            KeyConditionExpression=Key("GSI1PK").eq(OPEN_SESSIONS)
            & Key("GSI1SK").lte(str(now)),
        )
        return [self._to_entity(item) for item in items]

    def _to_item(self, session: ReservationSession) -> dict:
        item = {
            **session_key(session.id),
            "entity_type": "SESSION",
            "session_id": str(session.id),
            "user_id": str(session.user_id),
            "flight_id": str(session.flight_id),
            "seat_class": session.seat_class.value,
            "fare": str(session.fare.amount),
            "currency": str(session.fare.currency),
            "seat_ids": [str(seat_id) for seat_id in session.seat_ids],
            "seat_numbers": list(session.seat_numbers),
            "additional_bags": session.baggage.bags,
            "baggage_total": str(session.baggage.total.amount),
            "meals": [meal.value for meal in session.services.meals],
            "extras": sorted(extra.value for extra in session.services.extras),
            "status": session.status.value,
            "created_at": str(session.created_at),
            "last_activity_at": str(session.last_activity_at),
            "expires_at": str(session.expires_at),
            "version": session.version,
            "expiration": int(
                session.expires_at.plus(SESSION_RETENTION).value.timestamp()
            ),
        }
        if session.passenger is not None:
            item["passenger"] = {
                "full_name": session.passenger.full_name,
                "email": session.passenger.email,
                "phone": session.passenger.phone,
                "passport_number": session.passenger.passport_number,
            }
        if session.status == SessionStatus.OPEN:
            # 期限切れ掃除用のインデックス
            item["GSI1PK"] = OPEN_SESSIONS
            item["GSI1SK"] = str(session.expires_at)
        return item

    def _to_entity(self, item: dict) -> ReservationSession:
        """DynamoDB アイテムを予約セッションに変換する"""
        currency = Currency(item["currency"])
        passenger = item.get("passenger")
        return ReservationSession(
            id=SessionId(value=item["session_id"]),
            user_id=UserId(value=item["user_id"]),
            flight_id=FlightId(value=item["flight_id"]),
            seat_class=SeatClass(item["seat_class"]),
            fare=Money(amount=Decimal(item["fare"]), currency=currency),
            created_at=IsoDateTime.from_string(item["created_at"]),
            expires_at=IsoDateTime.from_string(item["expires_at"]),
            seat_ids=tuple(SeatId(value=seat_id) for seat_id in item.get("seat_ids", [])),
            seat_numbers=tuple(item.get("seat_numbers", [])),
            baggage=BaggageSelection(
                bags=int(item.get("additional_bags", 0)),
                total=Money(
                    amount=Decimal(item.get("baggage_total", "0")), currency=currency
                ),
            ),
            services=ServiceSelection(
                meals=tuple(MealOption(meal) for meal in item.get("meals", [])),
                extras=frozenset(ExtraService(extra) for extra in item.get("extras", [])),
            ),
            passenger=Passenger(**passenger) if passenger else None,
            status=SessionStatus(item["status"]),
            last_activity_at=IsoDateTime.from_string(item["last_activity_at"]),
            version=int(item["version"]),
        )
