from .booking_state_machine import TRANSITIONS as TRANSITIONS
from .booking_state_machine import is_replay as is_replay
from .booking_state_machine import next_status as next_status
