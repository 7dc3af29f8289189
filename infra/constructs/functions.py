import datetime

from aws_cdk import Duration
from aws_cdk import aws_dynamodb as dynamodb
from aws_cdk import aws_events as events
from aws_cdk import aws_lambda as _lambda
from constructs import Construct

BOOKING_SERVICE = "booking-service"
NOTIFICATION_SERVICE = "notification-service"

# API Gateway（REST）の統合タイムアウト 29 秒より短く、在庫サービス呼び出し
# 3回分（取得・確保・補償の解放）の最悪ケースより長くする
FUNCTION_TIMEOUT_SECONDS = 25


class Functions(Construct):
    """Lambda 関数を管理する Construct"""

    def __init__(
        self,
        scope: Construct,
        id: str,
        table: dynamodb.Table,
        event_bus: events.IEventBus,
        common_layer: _lambda.LayerVersion,
        flight_inventory_base_url: str,
    ) -> None:
        super().__init__(scope, id)

        booking_env = {
            "TABLE_NAME": table.table_name,
            "EVENT_BUS_NAME": event_bus.event_bus_name,
            "FLIGHT_INVENTORY_BASE_URL": flight_inventory_base_url,
        }

        self.create_booking = self._create_function(
            "CreateBookingLambda",
            "services.booking.handlers.create.lambda_handler",
            BOOKING_SERVICE,
            common_layer,
            booking_env,
        )
        self.get_booking = self._create_function(
            "GetBookingLambda",
            "services.booking.handlers.get.lambda_handler",
            BOOKING_SERVICE,
            common_layer,
            booking_env,
        )
        self.booking_history = self._create_function(
            "BookingHistoryLambda",
            "services.booking.handlers.history.lambda_handler",
            BOOKING_SERVICE,
            common_layer,
            booking_env,
        )
        self.cancel_booking = self._create_function(
            "CancelBookingLambda",
            "services.booking.handlers.cancel.lambda_handler",
            BOOKING_SERVICE,
            common_layer,
            booking_env,
        )

        for fn in [self.create_booking, self.cancel_booking]:
            table.grant_read_write_data(fn)
            event_bus.grant_put_events_to(fn)

        # 照会系も在庫サービスからフライト情報を取得する
        table.grant_read_data(self.get_booking)
        table.grant_read_data(self.booking_history)

        self.booking_listener = self._create_function(
            "BookingListenerLambda",
            "services.notification.handlers.booking_listener.lambda_handler",
            NOTIFICATION_SERVICE,
            common_layer,
            {},
        )

    @property
    def all_functions(self) -> list[_lambda.Function]:
        return [
            self.create_booking,
            self.get_booking,
            self.booking_history,
            self.cancel_booking,
            self.booking_listener,
        ]

    def _create_function(
        self,
        id: str,
        handler: str,
        service_name: str,
        common_layer: _lambda.LayerVersion,
        environment: dict[str, str],
    ) -> _lambda.Function:
        return _lambda.Function(
            self,
            id,
            runtime=_lambda.Runtime.PYTHON_3_14,
            handler=handler,
            code=_lambda.Code.from_asset("src"),
            layers=[common_layer],
            timeout=Duration.seconds(FUNCTION_TIMEOUT_SECONDS),
            environment={
                **environment,
                "POWERTOOLS_SERVICE_NAME": service_name,
                "DEPLOY_TIME": datetime.datetime.now(datetime.timezone.utc).isoformat(),
            },
        )
