from .entity import Payment as Payment
from .enum import PaymentStatus as PaymentStatus
from .factory import PaymentFactory as PaymentFactory
from .repository import PaymentRepository as PaymentRepository
from .service import PaymentGateway as PaymentGateway
from .value_object import CardDetails as CardDetails
from .value_object import CardSuffix as CardSuffix
from .value_object import PaymentId as PaymentId
from .value_object import PaymentResult as PaymentResult
