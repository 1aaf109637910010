import re
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class Passenger:
    """搭乗者情報

    - 氏名: 2文字以上
    - メールアドレス: user@example.com 形式
    - 電話番号: 数字・空白・+()- のみで10文字以上
    - パスポート番号: 6文字以上
    """

    full_name: str
    email: str
    phone: str
    passport_number: str

    EMAIL_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
    PHONE_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^[\d\s+()-]{10,}$")

    def __post_init__(self) -> None:
        full_name = self.full_name.strip()
        passport_number = self.passport_number.strip()

        if len(full_name) < 2:
            raise ValueError("Full name must be at least 2 characters")
        if not self.EMAIL_PATTERN.match(self.email):
            raise ValueError(f"Invalid email address: {self.email}")
        if not self.PHONE_PATTERN.match(self.phone):
            raise ValueError(f"Invalid phone number: {self.phone}")
        if len(passport_number) < 6:
            raise ValueError("Passport number must be at least 6 characters")

        object.__setattr__(self, "full_name", full_name)
        object.__setattr__(self, "passport_number", passport_number)
