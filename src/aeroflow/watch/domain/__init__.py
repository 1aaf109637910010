from .entity import FlightWatch as FlightWatch
from .repository import FlightWatchRepository as FlightWatchRepository
from .value_object import StatusChange as StatusChange
from .value_object import WatchId as WatchId
