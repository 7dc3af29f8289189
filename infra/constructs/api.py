from aws_cdk import aws_apigateway as apigw
from aws_cdk import aws_lambda as _lambda
from constructs import Construct


class Api(Construct):
    """API Gateway Construct

    - POST   /flights/{flight_id}/bookings -> create
    - GET    /bookings/{pnr}               -> get
    - DELETE /bookings/{pnr}               -> cancel
    - GET    /bookers/{email}/bookings     -> history
    """

    def __init__(
        self,
        scope: Construct,
        id: str,
        create_booking: _lambda.IFunction,
        get_booking: _lambda.IFunction,
        booking_history: _lambda.IFunction,
        cancel_booking: _lambda.IFunction,
    ) -> None:
        super().__init__(scope, id)

        self.rest_api = apigw.RestApi(
            self,
            "BookingRestApi",
            rest_api_name="Flight Booking API",
            deploy_options=apigw.StageOptions(
                stage_name="prod",
                throttling_burst_limit=10,
                throttling_rate_limit=5,
            ),
        )

        flight_bookings = (
            self.rest_api.root.add_resource("flights")
            .add_resource("{flight_id}")
            .add_resource("bookings")
        )
        flight_bookings.add_method("POST", apigw.LambdaIntegration(create_booking))

        booking = self.rest_api.root.add_resource("bookings").add_resource("{pnr}")
        booking.add_method("GET", apigw.LambdaIntegration(get_booking))
        booking.add_method("DELETE", apigw.LambdaIntegration(cancel_booking))

        booker_bookings = (
            self.rest_api.root.add_resource("bookers")
            .add_resource("{email}")
            .add_resource("bookings")
        )
        booker_bookings.add_method("GET", apigw.LambdaIntegration(booking_history))
