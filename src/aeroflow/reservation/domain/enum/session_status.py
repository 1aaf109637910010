from enum import Enum


class SessionStatus(str, Enum):
    """予約セッションのステータス"""

    OPEN = "OPEN"
    CONSUMED = "CONSUMED"
    EXPIRED = "EXPIRED"
