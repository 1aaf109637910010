from dataclasses import dataclass


@dataclass(frozen=True)
class UserId:
    """利用者ID（ホスト型認証基盤が払い出す ID）"""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("UserId cannot be empty")

    def __str__(self) -> str:
        return self.value
