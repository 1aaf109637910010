from collections.abc import Iterator
from typing import Any

import boto3
from aws_lambda_powertools import Logger
from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from botocore.exceptions import ClientError

logger = Logger(child=True)

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


class TransactionConditionFailed(Exception):
    """TransactWriteItems の条件式が失敗した項目のラベル一覧を保持する"""

    def __init__(self, labels: list[str]) -> None:
        super().__init__(f"Transaction condition failed: {', '.join(labels)}")
        self.labels = labels

    def failed(self, prefix: str) -> list[str]:
        """指定プレフィックスのラベルのうち失敗したもの（プレフィックス除去済み）"""
        return [
            label.removeprefix(prefix) for label in self.labels if label.startswith(prefix)
        ]


def serialize(item: dict[str, Any]) -> dict[str, Any]:
    return {k: _serializer.serialize(v) for k, v in item.items()}


def deserialize(item: dict[str, Any]) -> dict[str, Any]:
    return {k: _deserializer.deserialize(v) for k, v in item.items()}


class TransactWriter:
    """複数アイテムの書き込みを 1 トランザクションにまとめる

    条件式の失敗は TransactionConditionFailed に変換する。
    TransactionConflict（同一アイテムへの同時トランザクション）は
    max_attempts 回まで再実行する。
    """

    def __init__(self, table_name: str, client=None, max_attempts: int = 3) -> None:
        self._table_name = table_name
        self._client = client or boto3.client("dynamodb")
        self._max_attempts = max_attempts
        self._items: list[dict] = []
        self._labels: list[str] = []

    def __len__(self) -> int:
        return len(self._items)

    def put(
        self,
        item: dict[str, Any],
        label: str,
        condition: str | None = None,
        names: dict[str, str] | None = None,
        values: dict[str, Any] | None = None,
    ) -> None:
        request: dict[str, Any] = {"TableName": self._table_name, "Item": serialize(item)}
        self._add("Put", request, label, condition, names, values)

    def update(
        self,
        key: dict[str, str],
        update_expression: str,
        label: str,
        condition: str | None = None,
        names: dict[str, str] | None = None,
        values: dict[str, Any] | None = None,
    ) -> None:
        request: dict[str, Any] = {
            "TableName": self._table_name,
            "Key": serialize(key),
            "UpdateExpression": update_expression,
        }
        self._add("Update", request, label, condition, names, values)

    def _add(
        self,
        operation: str,
        request: dict[str, Any],
        label: str,
        condition: str | None,
        names: dict[str, str] | None,
        values: dict[str, Any] | None,
    ) -> None:
        if condition:
            request["ConditionExpression"] = condition
        if names:
            request["ExpressionAttributeNames"] = names
        if values:
            request["ExpressionAttributeValues"] = serialize(values)
        self._items.append({operation: request})
        self._labels.append(label)

    def execute(self) -> None:
        """トランザクションを実行する"""
        if not self._items:
            return

        for attempt in range(1, self._max_attempts + 1):
            try:
                self._client.transact_write_items(TransactItems=self._items)
                return
            except ClientError as e:
                if e.response["Error"]["Code"] != "TransactionCanceledException":
                    raise
                codes = [
                    reason.get("Code", "None")
                    for reason in e.response.get("CancellationReasons", [])
                ]
                if "ConditionalCheckFailed" in codes:
                    raise TransactionConditionFailed(
                        [
                            self._labels[i]
                            for i, code in enumerate(codes)
                            if code == "ConditionalCheckFailed"
                        ]
                    ) from e
                if "TransactionConflict" not in codes or attempt == self._max_attempts:
                    raise
                logger.warning(
                    "Transaction conflict, retrying",
                    extra={"attempt": attempt, "labels": self._labels},
                )


def query_all(table, **kwargs) -> Iterator[dict]:
    """ページングを辿って query の全件を返す"""
    while True:
        response = table.query(**kwargs)
        yield from response.get("Items", [])
        last_key = response.get("LastEvaluatedKey")
        if not last_key:
            return
        kwargs["ExclusiveStartKey"] = last_key


def scan_all(table, **kwargs) -> Iterator[dict]:
    """ページングを辿って scan の全件を返す"""
    while True:
        response = table.scan(**kwargs)
        yield from response.get("Items", [])
        last_key = response.get("LastEvaluatedKey")
        if not last_key:
            return
        kwargs["ExclusiveStartKey"] = last_key
