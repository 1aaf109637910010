import os
from decimal import Decimal

import boto3
from boto3.dynamodb.conditions import Attr, Key

from aeroflow.payment.domain.entity import Payment
from aeroflow.payment.domain.enum import PaymentStatus
from aeroflow.payment.domain.repository import PaymentRepository
from aeroflow.payment.domain.value_object import CardSuffix, PaymentId
from aeroflow.shared.domain import BookingId, Currency, IsoDateTime, Money
from aeroflow.shared.infrastructure import scan_all


def payment_key(payment: Payment) -> dict[str, str]:
    return {"PK": f"BOOKING#{payment.booking_id}", "SK": f"PAYMENT#{payment.id}"}


def to_payment_item(payment: Payment) -> dict:
    """決済エンティティを DynamoDB アイテムに変換する"""
    return {
        **payment_key(payment),
        "entity_type": "PAYMENT",
        "payment_id": str(payment.id),
        "booking_id": str(payment.booking_id),
        "amount": str(payment.amount.amount),
        "currency": str(payment.amount.currency),
        "card_suffix": str(payment.card_suffix),
        "transaction_id": payment.transaction_id,
        "processed_at": str(payment.processed_at),
        "idempotency_key": payment.idempotency_key,
        "status": payment.status.value,
    }


def to_payment(item: dict) -> Payment:
    """DynamoDB アイテムを決済エンティティに変換する"""
    return Payment(
        id=PaymentId(value=item["payment_id"]),
        booking_id=BookingId(value=item["booking_id"]),
        amount=Money(
            amount=Decimal(item["amount"]),
            currency=Currency(item["currency"]),
        ),
        card_suffix=CardSuffix(value=item["card_suffix"]),
        transaction_id=item["transaction_id"],
        processed_at=IsoDateTime.from_string(item["processed_at"]),
        idempotency_key=item["idempotency_key"],
        status=PaymentStatus(item["status"]),
    )


class DynamoDBPaymentRepository(PaymentRepository):
    """DynamoDBを使用したPaymentRepository の具象実装"""

    def __init__(self, table_name: str | None = None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)

    def find_by_id(self, payment_id: PaymentId) -> Payment | None:
        """決済IDで検索"""
        items = scan_all(
            self.table,
            FilterExpression=Attr("payment_id").eq(str(payment_id)),
            ConsistentRead=True,
        )
        item = next(items, None)
        if item is None:
            return None
        return to_payment(item)

    def find_by_booking_id(self, booking_id: BookingId) -> Payment | None:
        """予約IDで決済を検索する"""
        response = self.table.query(
            KeyConditionExpression=Key("PK").eq(f"BOOKING#{booking_id}")
            & Key("SK").begins_with("PAYMENT#"),
            ConsistentRead=True,
        )
        items = response.get("Items", [])
        if not items:
            return None
        return to_payment(items[0])

    def list_all(self) -> list[Payment]:
        items = scan_all(self.table, FilterExpression=Attr("entity_type").eq("PAYMENT"))
        return [to_payment(item) for item in items]
