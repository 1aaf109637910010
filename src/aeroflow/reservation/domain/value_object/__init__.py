from .baggage_selection import DEFAULT_COST_PER_BAG as DEFAULT_COST_PER_BAG
from .baggage_selection import BaggageSelection as BaggageSelection
from .passenger import Passenger as Passenger
from .service_selection import ServiceSelection as ServiceSelection
from .session_id import SessionId as SessionId
