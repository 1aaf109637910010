from .value_object import ClassUtilization as ClassUtilization
from .value_object import DashboardSummary as DashboardSummary
from .value_object import RouteSummary as RouteSummary
