from .flight_watch import FlightWatch as FlightWatch
