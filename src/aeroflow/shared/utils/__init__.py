from .config import Settings as Settings
from .error_response import ErrorResponse as ErrorResponse
from .error_response import domain_error_response as domain_error_response
from .error_response import validation_error_response as validation_error_response
from .http_response import api_response as api_response
from .validators import to_decimal as to_decimal
from .request import parse_body as parse_body
