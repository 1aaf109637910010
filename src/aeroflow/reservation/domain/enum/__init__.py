from .extra_service import ExtraService as ExtraService
from .meal_option import MealOption as MealOption
from .session_status import SessionStatus as SessionStatus
