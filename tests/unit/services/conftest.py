from dataclasses import dataclass

import pytest


@pytest.fixture
def lambda_context():
    """Powertools の inject_lambda_context が参照する属性を持つダミーの Context"""

    @dataclass
    class LambdaContext:
        function_name: str = "test-function"
        memory_limit_in_mb: int = 128
        invoked_function_arn: str = (
            "arn:aws:lambda:ap-south-1:123456789012:function:test-function"
        )
        aws_request_id: str = "52fdfc07-2182-454f-963f-5f0f9a621d72"

        def get_remaining_time_in_millis(self) -> int:
            return 20_000

    return LambdaContext()
