import os
from decimal import Decimal
from typing import NoReturn

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from aeroflow.booking.domain.entity import Booking
from aeroflow.booking.domain.enum import BookingPaymentStatus, BookingStatus
from aeroflow.booking.domain.repository import BookingRepository
from aeroflow.booking.domain.value_object import BookingReference
from aeroflow.inventory.domain.enum import SeatClass
from aeroflow.inventory.domain.value_object import (
    FlightId,
    FlightNumber,
    InventoryChange,
    SeatId,
)
from aeroflow.inventory.infrastructure.dynamodb_inventory_repository import (
    add_inventory_change,
    raise_for_inventory_failure,
)
from aeroflow.payment.domain.entity import Payment
from aeroflow.payment.domain.enum import PaymentStatus
from aeroflow.payment.infrastructure.dynamodb_payment_repository import (
    payment_key,
    to_payment_item,
)
from aeroflow.reservation.domain.value_object import Passenger, SessionId
from aeroflow.reservation.infrastructure.dynamodb_reservation_session_repository import (
    add_session_consumption,
)
from aeroflow.shared.domain import BookingId, Currency, IsoDateTime, Money, UserId
from aeroflow.shared.domain.exception import (
    DuplicateResourceException,
    OptimisticLockException,
    ReferenceCollisionException,
)
from aeroflow.shared.infrastructure import (
    TransactionConditionFailed,
    TransactWriter,
    query_all,
    scan_all,
)


def booking_key(booking_id: BookingId | str) -> dict[str, str]:
    return {"PK": f"BOOKING#{booking_id}", "SK": "META"}


def reference_key(reference: BookingReference | str) -> dict[str, str]:
    return {"PK": f"REFERENCE#{reference}", "SK": "META"}


class DynamoDBBookingRepository(BookingRepository):
    """DynamoDBを使用したBookingRepository の具象実装"""

    def __init__(self, table_name: str | None = None, max_attempts: int = 3) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)
        self.max_attempts = max_attempts

    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        response = self.table.get_item(Key=booking_key(booking_id), ConsistentRead=True)
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def find_by_reference(self, reference: BookingReference) -> Booking | None:
        response = self.table.get_item(Key=reference_key(reference), ConsistentRead=True)
        item = response.get("Item")
        if not item:
            return None
        return self.find_by_id(BookingId(value=item["booking_id"]))

    def list_by_user(self, user_id: UserId) -> list[Booking]:
        items = query_all(
            self.table,
            IndexName="GSI1",
            KeyConditionExpression=Key("GSI1PK").eq(f"USER#{user_id}#BOOKINGS"),
            ScanIndexForward=False,
        )
        return [self._to_entity(item) for item in items]

    def list_all(self) -> list[Booking]:
        items = scan_all(self.table, FilterExpression=Attr("entity_type").eq("BOOKING"))
        return [self._to_entity(item) for item in items]

    def list_by_status(self, status: BookingStatus) -> list[Booking]:
        items = scan_all(
            self.table,
            FilterExpression=Attr("entity_type").eq("BOOKING")
            & Attr("status").eq(status.value),
        )
        return [self._to_entity(item) for item in items]

    def commit(
        self,
        booking: Booking,
        payment: Payment,
        seat_change: InventoryChange,
        session_id: SessionId,
        session_version: int,
    ) -> None:
        """予約・予約番号・決済・座席確定・セッション消費を 1 トランザクションで書き込む"""
        writer = self._writer()
        writer.put(
            self._to_item(booking),
            label="booking",
            condition="attribute_not_exists(PK)",
        )
        writer.put(
            {
                **reference_key(booking.reference),
                "entity_type": "BOOKING_REFERENCE",
                "booking_id": str(booking.id),
            },
            label="reference",
            condition="attribute_not_exists(PK)",
        )
        writer.put(
            to_payment_item(payment),
            label="payment",
            condition="attribute_not_exists(PK)",
        )
        add_inventory_change(writer, seat_change)
        add_session_consumption(writer, session_id, session_version)

        try:
            writer.execute()
        except TransactionConditionFailed as e:
            self._raise_for_commit_failure(e, booking)

    def cancel(
        self,
        booking: Booking,
        payment: Payment,
        seat_change: InventoryChange,
        expected_status: BookingStatus,
    ) -> None:
        """予約キャンセル・払い戻し・座席解放・空席カウンタ加算を 1 トランザクションで書き込む"""
        writer = self._writer()
        writer.update(
            key=booking_key(booking.id),
            update_expression="SET #status = :status, #payment_status = :payment_status",
            label="booking",
            condition="#status = :expected",
            names={"#status": "status", "#payment_status": "payment_status"},
            values={
                ":status": booking.status.value,
                ":payment_status": booking.payment_status.value,
                ":expected": expected_status.value,
            },
        )
        writer.update(
            key=payment_key(payment),
            update_expression="SET #status = :status",
            label="payment",
            condition="#status = :expected",
            names={"#status": "status"},
            values={
                ":status": payment.status.value,
                ":expected": PaymentStatus.SUCCESS.value,
            },
        )
        add_inventory_change(writer, seat_change)

        try:
            writer.execute()
        except TransactionConditionFailed as e:
            if "booking" in e.labels:
                raise OptimisticLockException(
                    f"Booking status conflict: "
                    f"expected {expected_status.value}, "
                    f"booking_id={booking.id}"
                ) from e
            raise_for_inventory_failure(e)

    def update_status(self, booking: Booking, expected_status: BookingStatus) -> None:
        """予約ステータスを更新する"""
        try:
            self.table.update_item(
                Key=booking_key(booking.id),
                UpdateExpression="SET #status = :status",
                ExpressionAttributeNames={"#status": "status"},
                ExpressionAttributeValues={":status": booking.status.value},
                ConditionExpression=Attr("status").eq(expected_status.value),
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise OptimisticLockException(
                    f"Booking status conflict: "
                    f"expected {expected_status.value}, "
                    f"booking_id={booking.id}"
                )
            raise

    def _writer(self) -> TransactWriter:
        return TransactWriter(
            self.table_name,
            client=self.dynamodb.meta.client,
            max_attempts=self.max_attempts,
        )

    def _raise_for_commit_failure(
        self, error: TransactionConditionFailed, booking: Booking
    ) -> NoReturn:
        if "booking" in error.labels:
            raise DuplicateResourceException(
                f"Booking already exists: {booking.id}"
            ) from error
        if "reference" in error.labels:
            raise ReferenceCollisionException(
                f"Booking reference already in use: {booking.reference}"
            ) from error
        if "session" in error.labels and not error.failed("seat:"):
            raise OptimisticLockException(
                "Reservation session changed while committing"
            ) from error
        raise_for_inventory_failure(error)

    def _to_item(self, booking: Booking) -> dict:
        currency = str(booking.base_fare.currency)
        passenger = booking.passenger
        return {
            **booking_key(booking.id),
            "entity_type": "BOOKING",
            "booking_id": str(booking.id),
            "reference": str(booking.reference),
            "user_id": str(booking.user_id),
            "flight_id": str(booking.flight_id),
            "flight_number": str(booking.flight_number),
            "departure_time": str(booking.departure_time),
            "seat_class": booking.seat_class.value,
            "seat_ids": [str(seat_id) for seat_id in booking.seat_ids],
            "seat_numbers": list(booking.seat_numbers),
            "passenger": {
                "full_name": passenger.full_name,
                "email": passenger.email,
                "phone": passenger.phone,
                "passport_number": passenger.passport_number,
            },
            "base_fare": str(booking.base_fare.amount),
            "services_price": str(booking.services_price.amount),
            "baggage_price": str(booking.baggage_price.amount),
            "total_price": str(booking.total_price.amount),
            "currency": currency,
            "status": booking.status.value,
            "payment_status": booking.payment_status.value,
            "booked_at": str(booking.booked_at),
            "GSI1PK": f"USER#{booking.user_id}#BOOKINGS",
            "GSI1SK": str(booking.booked_at),
        }

    def _to_entity(self, item: dict) -> Booking:
        """DynamoDB アイテムを予約エンティティに変換する"""
        currency = Currency(item["currency"])
        return Booking(
            id=BookingId(value=item["booking_id"]),
            reference=BookingReference(value=item["reference"]),
            user_id=UserId(value=item["user_id"]),
            flight_id=FlightId(value=item["flight_id"]),
            flight_number=FlightNumber(value=item["flight_number"]),
            departure_time=IsoDateTime.from_string(item["departure_time"]),
            seat_class=SeatClass(item["seat_class"]),
            seat_ids=tuple(SeatId(value=seat_id) for seat_id in item["seat_ids"]),
            seat_numbers=tuple(item["seat_numbers"]),
            passenger=Passenger(**item["passenger"]),
            base_fare=Money(amount=Decimal(item["base_fare"]), currency=currency),
            services_price=Money(
                amount=Decimal(item["services_price"]), currency=currency
            ),
            baggage_price=Money(amount=Decimal(item["baggage_price"]), currency=currency),
            booked_at=IsoDateTime.from_string(item["booked_at"]),
            status=BookingStatus(item["status"]),
            payment_status=BookingPaymentStatus(item["payment_status"]),
        )
