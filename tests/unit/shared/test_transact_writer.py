from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from aeroflow.shared.infrastructure import TransactionConditionFailed, TransactWriter


def cancelled(*codes: str) -> ClientError:
    return ClientError(
        {
            "Error": {"Code": "TransactionCanceledException", "Message": "cancelled"},
            "CancellationReasons": [{"Code": code} for code in codes],
        },
        "TransactWriteItems",
    )


class TestTransactWriter:
    def test_execute_sends_all_items_in_one_call(self):
        client = MagicMock()
        writer = TransactWriter("table", client=client)
        writer.put({"PK": "A", "SK": "META"}, label="booking")
        writer.update(
            key={"PK": "B", "SK": "META"},
            update_expression="SET #n = :v",
            label="counter",
            condition="#n >= :v",
            names={"#n": "n"},
            values={":v": 1},
        )

        writer.execute()

        items = client.transact_write_items.call_args.kwargs["TransactItems"]
        assert len(items) == 2
        assert items[0]["Put"]["Item"]["PK"] == {"S": "A"}
        assert items[1]["Update"]["ConditionExpression"] == "#n >= :v"
        assert items[1]["Update"]["ExpressionAttributeValues"] == {":v": {"N": "1"}}

    def test_empty_writer_does_nothing(self):
        client = MagicMock()

        TransactWriter("table", client=client).execute()

        client.transact_write_items.assert_not_called()

    def test_condition_failure_reports_failed_labels(self):
        client = MagicMock()
        client.transact_write_items.side_effect = cancelled(
            "None", "ConditionalCheckFailed", "ConditionalCheckFailed"
        )
        writer = TransactWriter("table", client=client)
        writer.put({"PK": "A"}, label="booking")
        writer.put({"PK": "B"}, label="seat:s1")
        writer.put({"PK": "C"}, label="seat:s2")

        with pytest.raises(TransactionConditionFailed) as exc_info:
            writer.execute()

        assert exc_info.value.labels == ["seat:s1", "seat:s2"]
        assert exc_info.value.failed("seat:") == ["s1", "s2"]

    def test_transaction_conflict_is_retried(self):
        client = MagicMock()
        client.transact_write_items.side_effect = [cancelled("TransactionConflict"), {}]
        writer = TransactWriter("table", client=client, max_attempts=3)
        writer.put({"PK": "A"}, label="booking")

        writer.execute()

        assert client.transact_write_items.call_count == 2

    def test_transaction_conflict_gives_up_after_max_attempts(self):
        client = MagicMock()
        client.transact_write_items.side_effect = cancelled("TransactionConflict")
        writer = TransactWriter("table", client=client, max_attempts=2)
        writer.put({"PK": "A"}, label="booking")

        with pytest.raises(ClientError):
            writer.execute()

        assert client.transact_write_items.call_count == 2
