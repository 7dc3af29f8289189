from aws_cdk import CfnOutput, Stack
from constructs import Construct

from infra.constructs import (
    Api,
    Database,
    Functions,
    Layers,
    Messaging,
    Observability,
)


class BookingServiceStack(Stack):
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        flight_inventory_base_url: str = "http://localhost:8081",
        enable_observability: bool = True,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        database = Database(self, "Database")
        layers = Layers(self, "Layers")
        messaging = Messaging(self, "Messaging")

        fns = Functions(
            self,
            "Functions",
            table=database.table,
            event_bus=messaging.event_bus,
            common_layer=layers.common_layer,
            flight_inventory_base_url=flight_inventory_base_url,
        )

        messaging.subscribe("BookingEventsToListener", fns.booking_listener)

        api = Api(
            self,
            "Api",
            create_booking=fns.create_booking,
            get_booking=fns.get_booking,
            booking_history=fns.booking_history,
            cancel_booking=fns.cancel_booking,
        )
        CfnOutput(self, "ApiUrl", value=api.rest_api.url)

        if enable_observability:
            Observability(self, "Observability", functions=fns.all_functions)
