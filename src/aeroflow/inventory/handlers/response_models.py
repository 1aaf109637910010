from __future__ import annotations

from pydantic import BaseModel

from aeroflow.inventory.domain.entity import Flight, Seat


class CabinData(BaseModel):
    """座席クラスごとの在庫"""

    seat_class: str
    total_seats: int
    available_seats: int
    price_amount: str
    price_currency: str


class FlightData(BaseModel):
    """フライトデータのレスポンスモデル"""

    flight_id: str
    flight_number: str
    airline: str
    origin: str
    destination: str
    departure_time: str
    arrival_time: str
    duration_minutes: int
    status: str
    cabins: list[CabinData]


class SeatData(BaseModel):
    seat_id: str
    seat_number: str
    seat_class: str
    seat_type: str
    is_available: bool


class SeatMapData(BaseModel):
    flight: FlightData
    seats: list[SeatData]


class SuccessResponse(BaseModel):
    """成功レスポンスモデル"""

    status: str = "success"
    data: FlightData | SeatMapData | list[FlightData]


def to_flight_data(flight: Flight) -> FlightData:
    """Flight 集約をレスポンスモデルに変換する"""
    return FlightData(
        flight_id=str(flight.id),
        flight_number=str(flight.flight_number),
        airline=flight.airline,
        origin=flight.route.origin,
        destination=flight.route.destination,
        departure_time=str(flight.departure_time),
        arrival_time=str(flight.arrival_time),
        duration_minutes=int(flight.duration.total_seconds() // 60),
        status=flight.status.value,
        cabins=[
            CabinData(
                seat_class=seat_class.value,
                total_seats=cabin.total,
                available_seats=cabin.available,
                price_amount=str(cabin.price.amount),
                price_currency=str(cabin.price.currency),
            )
            for seat_class, cabin in flight.cabins.items()
        ],
    )


def to_response(flight: Flight) -> dict:
    return SuccessResponse(data=to_flight_data(flight)).model_dump()


def to_list_response(flights: list[Flight]) -> dict:
    return SuccessResponse(data=[to_flight_data(flight) for flight in flights]).model_dump()


def to_seat_map_response(flight: Flight, seats: list[Seat]) -> dict:
    return SuccessResponse(
        data=SeatMapData(
            flight=to_flight_data(flight),
            seats=[
                SeatData(
                    seat_id=str(seat.id),
                    seat_number=seat.seat_number,
                    seat_class=seat.seat_class.value,
                    seat_type=seat.seat_type.value,
                    is_available=seat.is_available,
                )
                for seat in seats
            ],
        )
    ).model_dump()
