import datetime

from aws_cdk import Duration
from aws_cdk import aws_dynamodb as dynamodb
from aws_cdk import aws_lambda as _lambda
from constructs import Construct

from .layers import RUNTIME


class Functions(Construct):
    """Lambda 関数を管理する Construct"""

    def __init__(
        self,
        scope: Construct,
        id: str,
        table: dynamodb.Table,
        idempotency_table: dynamodb.Table,
        common_layer: _lambda.LayerVersion,
    ) -> None:
        super().__init__(scope, id)

        self._table = table
        self._idempotency_table = idempotency_table
        self._common_layer = common_layer

        # Inventory
        self.register_flight = self._create_function(
            "RegisterFlightLambda",
            "aeroflow.inventory.handlers.register_flight.lambda_handler",
            "inventory-service",
        )
        self.search_flights = self._create_function(
            "SearchFlightsLambda",
            "aeroflow.inventory.handlers.search_flights.lambda_handler",
            "inventory-service",
        )
        self.get_seat_map = self._create_function(
            "GetSeatMapLambda",
            "aeroflow.inventory.handlers.get_seat_map.lambda_handler",
            "inventory-service",
        )
        self.update_flight_status = self._create_function(
            "UpdateFlightStatusLambda",
            "aeroflow.inventory.handlers.update_flight_status.lambda_handler",
            "inventory-service",
        )

        # Reservation
        self.start_session = self._create_function(
            "StartSessionLambda",
            "aeroflow.reservation.handlers.start_session.lambda_handler",
            "reservation-service",
        )
        self.get_session = self._create_function(
            "GetSessionLambda",
            "aeroflow.reservation.handlers.get_session.lambda_handler",
            "reservation-service",
        )
        self.select_seats = self._create_function(
            "SelectSeatsLambda",
            "aeroflow.reservation.handlers.select_seats.lambda_handler",
            "reservation-service",
        )
        self.add_baggage = self._create_function(
            "AddBaggageLambda",
            "aeroflow.reservation.handlers.add_baggage.lambda_handler",
            "reservation-service",
        )
        self.add_services = self._create_function(
            "AddServicesLambda",
            "aeroflow.reservation.handlers.add_services.lambda_handler",
            "reservation-service",
        )
        self.set_passenger = self._create_function(
            "SetPassengerLambda",
            "aeroflow.reservation.handlers.set_passenger.lambda_handler",
            "reservation-service",
        )
        self.expire_session = self._create_function(
            "ExpireSessionLambda",
            "aeroflow.reservation.handlers.expire_session.lambda_handler",
            "reservation-service",
        )
        self.sweep_expired_sessions = self._create_function(
            "SweepExpiredSessionsLambda",
            "aeroflow.reservation.handlers.sweep_expired_sessions.lambda_handler",
            "reservation-service",
            timeout=Duration.seconds(60),
        )

        # Booking
        self.commit_booking = self._create_function(
            "CommitBookingLambda",
            "aeroflow.booking.handlers.commit_booking.lambda_handler",
            "booking-service",
        )
        self.cancel_booking = self._create_function(
            "CancelBookingLambda",
            "aeroflow.booking.handlers.cancel_booking.lambda_handler",
            "booking-service",
        )
        self.get_booking = self._create_function(
            "GetBookingLambda",
            "aeroflow.booking.handlers.get_booking.lambda_handler",
            "booking-service",
        )
        self.list_user_bookings = self._create_function(
            "ListUserBookingsLambda",
            "aeroflow.booking.handlers.list_user_bookings.lambda_handler",
            "booking-service",
        )
        self.list_bookings = self._create_function(
            "ListBookingsLambda",
            "aeroflow.booking.handlers.list_bookings.lambda_handler",
            "booking-service",
        )
        self.complete_departed_bookings = self._create_function(
            "CompleteDepartedBookingsLambda",
            "aeroflow.booking.handlers.complete_departed_bookings.lambda_handler",
            "booking-service",
            timeout=Duration.seconds(60),
        )

        # Watch
        self.watch_flight = self._create_function(
            "WatchFlightLambda",
            "aeroflow.watch.handlers.watch_flight.lambda_handler",
            "watch-service",
        )
        self.unwatch_flight = self._create_function(
            "UnwatchFlightLambda",
            "aeroflow.watch.handlers.unwatch_flight.lambda_handler",
            "watch-service",
        )
        self.list_watches = self._create_function(
            "ListWatchesLambda",
            "aeroflow.watch.handlers.list_watches.lambda_handler",
            "watch-service",
        )

        # Analytics
        self.get_dashboard_summary = self._create_function(
            "GetDashboardSummaryLambda",
            "aeroflow.analytics.handlers.get_dashboard_summary.lambda_handler",
            "analytics-service",
            timeout=Duration.seconds(30),
        )

        for fn in [
            self.register_flight,
            self.update_flight_status,
            self.start_session,
            self.get_session,
            self.select_seats,
            self.add_baggage,
            self.add_services,
            self.set_passenger,
            self.expire_session,
            self.sweep_expired_sessions,
            self.commit_booking,
            self.cancel_booking,
            self.complete_departed_bookings,
            self.watch_flight,
            self.unwatch_flight,
        ]:
            table.grant_read_write_data(fn)

        for fn in [
            self.search_flights,
            self.get_seat_map,
            self.get_booking,
            self.list_user_bookings,
            self.list_bookings,
            self.list_watches,
            self.get_dashboard_summary,
        ]:
            table.grant_read_data(fn)

        idempotency_table.grant_read_write_data(self.commit_booking)

    def _create_function(
        self,
        id: str,
        handler: str,
        service_name: str,
        timeout: Duration = Duration.seconds(10),
    ) -> _lambda.Function:
        return _lambda.Function(
            self,
            id,
            runtime=RUNTIME,
            handler=handler,
            code=_lambda.Code.from_asset("src"),
            layers=[self._common_layer],
            timeout=timeout,
            environment={
                "TABLE_NAME": self._table.table_name,
                "IDEMPOTENCY_TABLE_NAME": self._idempotency_table.table_name,
                "POWERTOOLS_SERVICE_NAME": service_name,
                "MAX_SEATS_PER_BOOKING": "5",
                "SESSION_TTL_MINUTES": "15",
                "CURRENCY": "USD",
                "DEPLOY_TIME": datetime.datetime.now(datetime.timezone.utc).isoformat(),
            },
        )
