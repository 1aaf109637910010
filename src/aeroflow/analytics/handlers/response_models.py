from pydantic import BaseModel

from aeroflow.analytics.domain import DashboardSummary


class ClassUtilizationData(BaseModel):
    seat_class: str
    total: int
    booked: int
    utilization: str


class RouteData(BaseModel):
    route: str
    bookings: int
    revenue: str


class DashboardData(BaseModel):
    """ダッシュボード集計のレスポンスモデル"""

    currency: str
    total_revenue: str
    total_bookings: int
    bookings_by_status: dict[str, int]
    cancellation_rate: str
    average_booking_value: str
    unique_customers: int
    repeat_customers: int
    repeat_rate: str
    load_factor: str
    average_lead_time_days: str
    seat_utilization: list[ClassUtilizationData]
    top_routes: list[RouteData]
    flights_by_status: dict[str, int]


class SuccessResponse(BaseModel):
    """成功レスポンスモデル"""

    status: str = "success"
    data: DashboardData


def to_response(summary: DashboardSummary) -> dict:
    data = DashboardData(
        currency=str(summary.total_revenue.currency),
        total_revenue=str(summary.total_revenue.amount),
        total_bookings=summary.total_bookings,
        bookings_by_status=summary.bookings_by_status,
        cancellation_rate=str(summary.cancellation_rate),
        average_booking_value=str(summary.average_booking_value.amount),
        unique_customers=summary.unique_customers,
        repeat_customers=summary.repeat_customers,
        repeat_rate=str(summary.repeat_rate),
        load_factor=str(summary.load_factor),
        average_lead_time_days=str(summary.average_lead_time_days),
        seat_utilization=[
            ClassUtilizationData(
                seat_class=u.seat_class.value,
                total=u.total,
                booked=u.booked,
                utilization=str(u.utilization),
            )
            for u in summary.seat_utilization
        ],
        top_routes=[
            RouteData(route=r.route, bookings=r.bookings, revenue=str(r.revenue.amount))
            for r in summary.top_routes
        ],
        flights_by_status=summary.flights_by_status,
    )
    return SuccessResponse(data=data).model_dump()
