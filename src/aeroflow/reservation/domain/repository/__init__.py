from .reservation_session_repository import (
    ReservationSessionRepository as ReservationSessionRepository,
)
