from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    """環境変数から読み込む実行時設定"""

    table_name: str | None
    idempotency_table_name: str | None
    max_seats_per_booking: int = 5
    session_ttl_minutes: int = 15
    currency: str = "USD"
    payment_decline_rate: float = 0.1
    transaction_max_attempts: int = 3

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            table_name=os.getenv("TABLE_NAME"),
            idempotency_table_name=os.getenv("IDEMPOTENCY_TABLE_NAME"),
            max_seats_per_booking=int(os.getenv("MAX_SEATS_PER_BOOKING", "5")),
            session_ttl_minutes=int(os.getenv("SESSION_TTL_MINUTES", "15")),
            currency=os.getenv("CURRENCY", "USD"),
            payment_decline_rate=float(os.getenv("PAYMENT_DECLINE_RATE", "0.1")),
            transaction_max_attempts=int(os.getenv("TRANSACTION_MAX_ATTEMPTS", "3")),
        )
