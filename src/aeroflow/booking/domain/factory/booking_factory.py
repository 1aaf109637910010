from aeroflow.booking.domain.entity import Booking
from aeroflow.booking.domain.enum import BookingStatus
from aeroflow.booking.domain.value_object import BookingReference
from aeroflow.inventory.domain.entity import Flight
from aeroflow.reservation.domain.entity import ReservationSession
from aeroflow.shared.domain import BookingId, IsoDateTime


class BookingFactory:
    """予約ファクトリ（予約セッションの内容から Draft の予約を作る）"""

    def create(
        self,
        booking_id: BookingId,
        session: ReservationSession,
        flight: Flight,
        reference: BookingReference,
        booked_at: IsoDateTime,
    ) -> Booking:
        session.ensure_ready_for_commit()
        return Booking(
            id=booking_id,
            reference=reference,
            user_id=session.user_id,
            flight_id=flight.id,
            flight_number=flight.flight_number,
            departure_time=flight.departure_time,
            seat_class=session.seat_class,
            seat_ids=session.seat_ids,
            seat_numbers=session.seat_numbers,
            passenger=session.passenger,
            base_fare=session.base_fare,
            services_price=session.services_price,
            baggage_price=session.baggage_price,
            booked_at=booked_at,
            status=BookingStatus.DRAFT,
        )
