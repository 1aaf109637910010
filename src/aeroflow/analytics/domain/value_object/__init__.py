from .dashboard_summary import ClassUtilization as ClassUtilization
from .dashboard_summary import DashboardSummary as DashboardSummary
from .dashboard_summary import RouteSummary as RouteSummary
