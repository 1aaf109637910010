from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class CardSuffix:
    """マスク済みカード番号（下4桁のみ保持する）"""

    value: str

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^\d{4}$")

    def __post_init__(self) -> None:
        if not self.PATTERN.match(self.value):
            raise ValueError("Card suffix must be the last 4 digits")

    def __str__(self) -> str:
        return self.value

    @property
    def masked(self) -> str:
        return f"**** **** **** {self.value}"

    @classmethod
    def from_card_number(cls, card_number: str) -> CardSuffix:
        return cls(value=card_number[-4:])
