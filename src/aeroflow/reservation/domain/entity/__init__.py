from .reservation_session import ReservationSession as ReservationSession
