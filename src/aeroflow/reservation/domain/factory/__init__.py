from .reservation_session_factory import (
    ReservationSessionFactory as ReservationSessionFactory,
)
