from .booking_id import BookingId as BookingId
from .currency import Currency as Currency
from .iso_date_time import IsoDateTime as IsoDateTime
from .money import Money as Money
from .user_id import UserId as UserId
