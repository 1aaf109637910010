from .dynamodb import TransactionConditionFailed as TransactionConditionFailed
from .dynamodb import TransactWriter as TransactWriter
from .dynamodb import query_all as query_all
from .dynamodb import scan_all as scan_all
