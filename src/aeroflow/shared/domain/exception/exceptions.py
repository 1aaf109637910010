class DomainException(Exception):
    """ドメイン層で発生する基底例外"""

    pass


class ResourceNotFoundException(DomainException):
    """リソースが見つからない場合"""

    pass


class BusinessRuleViolationException(DomainException):
    """ビジネスルールに違反した場合"""

    pass


class DuplicateResourceException(DomainException):
    """リソースの重複エラー（条件付き書き込みの失敗時）"""

    pass


class OptimisticLockException(DomainException):
    """楽観ロックの競合エラー（ステータスが期待値と異なる場合）"""

    pass


class SeatUnavailableException(DomainException):
    """座席が既に確保済み（座席確保の競合に負けた場合を含む）"""

    def __init__(self, message: str, seat_ids: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.seat_ids = seat_ids


class SelectionLimitExceededException(DomainException):
    """選択座席数が上限を超えた場合"""

    pass


class CapacityExceededException(DomainException):
    """空席カウンタが 0 未満 / 総席数超過になる場合（不変条件違反）"""

    pass


class SessionExpiredException(DomainException):
    """期限切れの予約セッションを操作しようとした場合"""

    pass


class InvalidTransitionException(DomainException):
    """予約ステートマシンで許可されない遷移"""

    pass


class PaymentFailedException(DomainException):
    """決済が拒否された場合（自動リトライしない）"""

    pass


class ReferenceCollisionException(DuplicateResourceException):
    """生成した予約番号が既存の予約と重複した場合"""

    pass
