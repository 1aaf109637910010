from .entity import Flight as Flight
from .entity import Seat as Seat
from .enum import FlightStatus as FlightStatus
from .enum import SeatClass as SeatClass
from .enum import SeatType as SeatType
from .factory import FlightDetails as FlightDetails
from .factory import FlightFactory as FlightFactory
from .repository import InventoryRepository as InventoryRepository
from .value_object import Cabin as Cabin
from .value_object import FlightId as FlightId
from .value_object import FlightNumber as FlightNumber
from .value_object import InventoryChange as InventoryChange
from .value_object import Route as Route
from .value_object import SeatId as SeatId
from .value_object import SeatWrite as SeatWrite
