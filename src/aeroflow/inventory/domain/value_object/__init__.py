from .cabin import Cabin as Cabin
from .flight_id import FlightId as FlightId
from .flight_number import FlightNumber as FlightNumber
from .inventory_change import InventoryChange as InventoryChange
from .inventory_change import SeatWrite as SeatWrite
from .route import Route as Route
from .seat_id import SeatId as SeatId
