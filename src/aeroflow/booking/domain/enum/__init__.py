from .booking_event import BookingEvent as BookingEvent
from .booking_payment_status import BookingPaymentStatus as BookingPaymentStatus
from .booking_status import BookingStatus as BookingStatus
