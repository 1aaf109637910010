from aws_cdk import aws_apigateway as apigw
from aws_cdk import aws_lambda as _lambda
from constructs import Construct

from .functions import Functions


class Api(Construct):
    """API Gateway Construct"""

    def __init__(
        self,
        scope: Construct,
        id: str,
        functions: Functions,
    ) -> None:
        super().__init__(scope, id)

        self.rest_api = apigw.RestApi(
            self,
            "AeroFlowRestApi",
            rest_api_name="AeroFlow Booking API",
            deploy_options=apigw.StageOptions(
                stage_name="prod",
                throttling_burst_limit=50,
                throttling_rate_limit=20,
            ),
        )
        root = self.rest_api.root

        # /flights
        flights = root.add_resource("flights")
        self._route(flights, "GET", functions.search_flights)
        self._route(flights, "POST", functions.register_flight)

        flight = flights.add_resource("{flight_id}")
        self._route(flight.add_resource("seats"), "GET", functions.get_seat_map)
        self._route(flight.add_resource("status"), "PUT", functions.update_flight_status)

        watches = flight.add_resource("watches")
        self._route(watches, "POST", functions.watch_flight)
        self._route(watches.add_resource("{user_id}"), "DELETE", functions.unwatch_flight)

        # /sessions
        sessions = root.add_resource("sessions")
        self._route(sessions, "POST", functions.start_session)

        session = sessions.add_resource("{session_id}")
        self._route(session, "GET", functions.get_session)
        self._route(session, "DELETE", functions.expire_session)
        self._route(session.add_resource("seats"), "PUT", functions.select_seats)
        self._route(session.add_resource("baggage"), "POST", functions.add_baggage)
        self._route(session.add_resource("services"), "POST", functions.add_services)
        self._route(session.add_resource("passenger"), "PUT", functions.set_passenger)
        self._route(session.add_resource("booking"), "POST", functions.commit_booking)

        # /bookings
        booking = root.add_resource("bookings").add_resource("{booking_id}")
        self._route(booking, "GET", functions.get_booking)
        self._route(booking.add_resource("cancel"), "POST", functions.cancel_booking)

        # /users
        user = root.add_resource("users").add_resource("{user_id}")
        self._route(user.add_resource("bookings"), "GET", functions.list_user_bookings)
        self._route(user.add_resource("watches"), "GET", functions.list_watches)

        # /admin
        admin = root.add_resource("admin")
        self._route(admin.add_resource("bookings"), "GET", functions.list_bookings)
        self._route(
            admin.add_resource("dashboard"), "GET", functions.get_dashboard_summary
        )

    @staticmethod
    def _route(
        resource: apigw.Resource, method: str, function: _lambda.Function
    ) -> None:
        resource.add_method(method, apigw.LambdaIntegration(function))
