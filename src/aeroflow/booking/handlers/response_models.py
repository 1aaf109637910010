from __future__ import annotations

from pydantic import BaseModel

from aeroflow.booking.domain.entity import Booking


class BookingData(BaseModel):
    """予約データのレスポンスモデル"""

    booking_id: str
    reference: str
    user_id: str
    flight_id: str
    flight_number: str
    departure_time: str
    seat_class: str
    seat_numbers: list[str]
    passenger_name: str
    passenger_email: str
    base_fare: str
    services_price: str
    baggage_price: str
    total_price: str
    currency: str
    status: str
    payment_status: str | None
    booked_at: str


class SuccessResponse(BaseModel):
    """成功レスポンスモデル"""

    status: str = "success"
    data: BookingData | list[BookingData]


def to_booking_data(booking: Booking) -> BookingData:
    return BookingData(
        booking_id=str(booking.id),
        reference=str(booking.reference),
        user_id=str(booking.user_id),
        flight_id=str(booking.flight_id),
        flight_number=str(booking.flight_number),
        departure_time=str(booking.departure_time),
        seat_class=booking.seat_class.value,
        seat_numbers=list(booking.seat_numbers),
        passenger_name=booking.passenger.full_name,
        passenger_email=booking.passenger.email,
        base_fare=str(booking.base_fare.amount),
        services_price=str(booking.services_price.amount),
        baggage_price=str(booking.baggage_price.amount),
        total_price=str(booking.total_price.amount),
        currency=str(booking.total_price.currency),
        status=booking.status.value,
        payment_status=booking.payment_status.value if booking.payment_status else None,
        booked_at=str(booking.booked_at),
    )


def to_response(booking: Booking) -> dict:
    """Booking エンティティをレスポンス辞書に変換する"""
    return SuccessResponse(data=to_booking_data(booking)).model_dump()


def to_list_response(bookings: list[Booking]) -> dict:
    return SuccessResponse(data=[to_booking_data(b) for b in bookings]).model_dump()
