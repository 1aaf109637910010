from __future__ import annotations

import re
import secrets
import string
from dataclasses import dataclass
from datetime import date
from typing import ClassVar


@dataclass(frozen=True)
class BookingReference:
    """予約番号（利用者に提示する一意な番号）

    形式: AFRS-YYYYMMDD-XXXXXX（X は英大文字または数字）
    """

    value: str

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^AFRS-\d{8}-[0-9A-Z]{6}$")
    ALPHABET: ClassVar[str] = string.digits + string.ascii_uppercase

    def __post_init__(self) -> None:
        if not self.PATTERN.match(self.value):
            raise ValueError(
                f"Invalid booking reference: {self.value}. "
                "Expected format: AFRS-YYYYMMDD-XXXXXX"
            )

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls, issued_on: date) -> BookingReference:
        suffix = "".join(secrets.choice(cls.ALPHABET) for _ in range(6))
        return cls(value=f"AFRS-{issued_on:%Y%m%d}-{suffix}")
