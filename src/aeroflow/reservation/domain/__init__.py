from .entity import ReservationSession as ReservationSession
from .enum import ExtraService as ExtraService
from .enum import MealOption as MealOption
from .enum import SessionStatus as SessionStatus
from .factory import ReservationSessionFactory as ReservationSessionFactory
from .repository import ReservationSessionRepository as ReservationSessionRepository
from .value_object import BaggageSelection as BaggageSelection
from .value_object import Passenger as Passenger
from .value_object import ServiceSelection as ServiceSelection
from .value_object import SessionId as SessionId
