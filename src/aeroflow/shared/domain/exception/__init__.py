from .exceptions import (
    BusinessRuleViolationException as BusinessRuleViolationException,
)
from .exceptions import (
    CapacityExceededException as CapacityExceededException,
)
from .exceptions import (
    DomainException as DomainException,
)
from .exceptions import (
    DuplicateResourceException as DuplicateResourceException,
)
from .exceptions import (
    InvalidTransitionException as InvalidTransitionException,
)
from .exceptions import (
    OptimisticLockException as OptimisticLockException,
)
from .exceptions import (
    PaymentFailedException as PaymentFailedException,
)
from .exceptions import (
    ResourceNotFoundException as ResourceNotFoundException,
)
from .exceptions import (
    SeatUnavailableException as SeatUnavailableException,
)
from .exceptions import (
    SelectionLimitExceededException as SelectionLimitExceededException,
)
from .exceptions import (
    SessionExpiredException as SessionExpiredException,
)
from .exceptions import (
    ReferenceCollisionException as ReferenceCollisionException,
)
