from aws_cdk import Duration
from aws_cdk import aws_events as events
from aws_cdk import aws_events_targets as targets
from aws_cdk import aws_lambda as _lambda
from constructs import Construct


class Schedules(Construct):
    """EventBridge スケジュール Construct

    期限切れセッションの掃除（毎分）と、出発済み予約の完了処理（毎時）。
    """

    def __init__(
        self,
        scope: Construct,
        id: str,
        sweep_expired_sessions: _lambda.Function,
        complete_departed_bookings: _lambda.Function,
    ) -> None:
        super().__init__(scope, id)

        self.sweep_rule = events.Rule(
            self,
            "SweepExpiredSessionsRule",
            schedule=events.Schedule.rate(Duration.minutes(1)),
            targets=[targets.LambdaFunction(sweep_expired_sessions)],
        )

        self.complete_rule = events.Rule(
            self,
            "CompleteDepartedBookingsRule",
            schedule=events.Schedule.rate(Duration.hours(1)),
            targets=[targets.LambdaFunction(complete_departed_bookings)],
        )
