import re
from dataclasses import dataclass
from datetime import date
from typing import ClassVar

from .card_suffix import CardSuffix


@dataclass(frozen=True)
class CardDetails:
    """カード情報（永続化しない。保存するのは CardSuffix のみ）

    - カード番号: 16桁（空白は除去）
    - 名義: 3文字以上
    - 有効期限: MM/YY
    - セキュリティコード: 3桁
    """

    number: str
    holder_name: str
    expiry: str
    cvv: str

    NUMBER_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^\d{16}$")
    EXPIRY_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^(0[1-9]|1[0-2])/(\d{2})$")
    CVV_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^\d{3}$")

    def __post_init__(self) -> None:
        number = self.number.replace(" ", "")
        if not self.NUMBER_PATTERN.match(number):
            raise ValueError("Card number must be 16 digits")
        if len(self.holder_name.strip()) < 3:
            raise ValueError("Cardholder name must be at least 3 characters")
        if not self.EXPIRY_PATTERN.match(self.expiry):
            raise ValueError("Expiry date must be in MM/YY format")
        if not self.CVV_PATTERN.match(self.cvv):
            raise ValueError("CVV must be 3 digits")
        object.__setattr__(self, "number", number)

    def __repr__(self) -> str:
        return f"CardDetails(suffix={self.suffix}, holder_name={self.holder_name!r})"

    @property
    def suffix(self) -> CardSuffix:
        return CardSuffix.from_card_number(self.number)

    def is_expired(self, today: date) -> bool:
        """有効期限の月末を過ぎていれば期限切れ"""
        match = self.EXPIRY_PATTERN.match(self.expiry)
        month, year = int(match.group(1)), 2000 + int(match.group(2))
        return (year, month) < (today.year, today.month)
