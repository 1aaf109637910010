"""予約ステートマシン

遷移表:

    Draft     --PAYMENT_SUCCEEDED--> Confirmed
    Confirmed --CANCEL_REQUESTED---> Cancelled
    Confirmed --DEPARTED-----------> Completed

遷移先と同じ状態でイベントを再適用した場合は何もしない（二重キャンセル等）。
それ以外の組み合わせは InvalidTransitionException。
予約セッションの失効（Draft の破棄）は予約セッション側で扱う。
"""

from aeroflow.booking.domain.enum import BookingEvent, BookingStatus
from aeroflow.shared.domain.exception import InvalidTransitionException

TRANSITIONS: dict[tuple[BookingStatus, BookingEvent], BookingStatus] = {
    (BookingStatus.DRAFT, BookingEvent.PAYMENT_SUCCEEDED): BookingStatus.CONFIRMED,
    (BookingStatus.CONFIRMED, BookingEvent.CANCEL_REQUESTED): BookingStatus.CANCELLED,
    (BookingStatus.CONFIRMED, BookingEvent.DEPARTED): BookingStatus.COMPLETED,
}

_EVENT_TARGETS: dict[BookingEvent, BookingStatus] = {
    event: target for (_, event), target in TRANSITIONS.items()
}


def is_replay(current: BookingStatus, event: BookingEvent) -> bool:
    """既にイベントの遷移先にいるかどうか"""
    return _EVENT_TARGETS[event] == current


def next_status(current: BookingStatus, event: BookingEvent) -> BookingStatus:
    """イベント適用後のステータスを返す"""
    target = TRANSITIONS.get((current, event))
    if target is not None:
        return target
    if is_replay(current, event):
        return current
    raise InvalidTransitionException(
        f"Cannot apply {event.value} to a {current.value} booking"
    )
