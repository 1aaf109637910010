from .flight_watch_repository import FlightWatchRepository as FlightWatchRepository
