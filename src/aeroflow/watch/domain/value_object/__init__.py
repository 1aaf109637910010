from .status_change import StatusChange as StatusChange
from .watch_id import WatchId as WatchId
