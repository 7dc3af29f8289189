#!/usr/bin/env python3

import aws_cdk as cdk

from booking_service_stack import BookingServiceStack

app = cdk.App()
BookingServiceStack(
    app,
    "BookingServiceStack",
    flight_inventory_base_url=app.node.try_get_context("flight_inventory_base_url")
    or "http://localhost:8081",
)

app.synth()
