from aws_cdk import CfnOutput, Stack
from constructs import Construct

from infra.constructs import Api, Database, Functions, Layers, Schedules


class AeroFlowStack(Stack):
    def __init__(self, scope: Construct, construct_id: str, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        database = Database(self, "Database")
        layers = Layers(self, "Layers")

        fns = Functions(
            self,
            "Functions",
            table=database.table,
            idempotency_table=database.idempotency_table,
            common_layer=layers.common_layer,
        )

        api = Api(self, "Api", functions=fns)

        Schedules(
            self,
            "Schedules",
            sweep_expired_sessions=fns.sweep_expired_sessions,
            complete_departed_bookings=fns.complete_departed_bookings,
        )

        CfnOutput(self, "ApiUrl", value=api.rest_api.url)
        CfnOutput(self, "TableName", value=database.table.table_name)
