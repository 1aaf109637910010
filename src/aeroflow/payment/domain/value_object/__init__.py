from .card_details import CardDetails as CardDetails
from .card_suffix import CardSuffix as CardSuffix
from .payment_id import PaymentId as PaymentId
from .payment_result import PaymentResult as PaymentResult
