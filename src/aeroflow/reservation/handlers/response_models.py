from __future__ import annotations

from pydantic import BaseModel

from aeroflow.reservation.domain.entity import ReservationSession


class PassengerData(BaseModel):
    full_name: str
    email: str
    phone: str
    passport_number: str


class SessionData(BaseModel):
    """予約セッションのレスポンスモデル"""

    session_id: str
    user_id: str
    flight_id: str
    seat_class: str
    seat_ids: list[str]
    seat_numbers: list[str]
    additional_bags: int
    meals: list[str]
    extras: list[str]
    passenger: PassengerData | None
    base_fare: str
    baggage_price: str
    services_price: str
    total_price: str
    currency: str
    status: str
    expires_at: str


class SuccessResponse(BaseModel):
    """成功レスポンスモデル"""

    status: str = "success"
    data: SessionData


def to_response(session: ReservationSession) -> dict:
    """ReservationSession をレスポンス辞書に変換する"""
    passenger = session.passenger
    return SuccessResponse(
        data=SessionData(
            session_id=str(session.id),
            user_id=str(session.user_id),
            flight_id=str(session.flight_id),
            seat_class=session.seat_class.value,
            seat_ids=[str(seat_id) for seat_id in session.seat_ids],
            seat_numbers=list(session.seat_numbers),
            additional_bags=session.baggage.bags,
            meals=[meal.value for meal in session.services.meals],
            extras=sorted(extra.value for extra in session.services.extras),
            passenger=(
                PassengerData(
                    full_name=passenger.full_name,
                    email=passenger.email,
                    phone=passenger.phone,
                    passport_number=passenger.passport_number,
                )
                if passenger
                else None
            ),
            base_fare=str(session.base_fare.amount),
            baggage_price=str(session.baggage_price.amount),
            services_price=str(session.services_price.amount),
            total_price=str(session.total_price.amount),
            currency=str(session.fare.currency),
            status=session.status.value,
            expires_at=str(session.expires_at),
        )
    ).model_dump()
