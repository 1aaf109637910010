from __future__ import annotations

from pydantic import BaseModel

from aeroflow.watch.domain.entity import FlightWatch
from aeroflow.watch.domain.value_object import StatusChange


class WatchData(BaseModel):
    user_id: str
    flight_id: str
    last_known_status: str
    created_at: str


class StatusChangeData(BaseModel):
    """利用者への通知内容"""

    user_id: str
    flight_id: str
    flight_number: str
    previous_status: str
    current_status: str
    severity: str
    message: str


class SuccessResponse(BaseModel):
    """成功レスポンスモデル"""

    status: str = "success"
    data: WatchData | list[WatchData]


def to_watch_data(watch: FlightWatch) -> WatchData:
    return WatchData(
        user_id=str(watch.id.user_id),
        flight_id=str(watch.id.flight_id),
        last_known_status=watch.last_known_status.value,
        created_at=str(watch.created_at),
    )


def to_status_change_data(change: StatusChange) -> StatusChangeData:
    return StatusChangeData(
        user_id=str(change.user_id),
        flight_id=str(change.flight_id),
        flight_number=str(change.flight_number),
        previous_status=change.previous.value,
        current_status=change.current.value,
        severity=change.severity,
        message=change.message,
    )


def to_response(watch: FlightWatch) -> dict:
    return SuccessResponse(data=to_watch_data(watch)).model_dump()


def to_list_response(watches: list[FlightWatch]) -> dict:
    return SuccessResponse(data=[to_watch_data(w) for w in watches]).model_dump()
