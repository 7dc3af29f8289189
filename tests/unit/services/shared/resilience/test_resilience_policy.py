import pytest
from pydantic import ValidationError

from services.shared.resilience import ResiliencePolicy


class TestResiliencePolicy:
    """ResiliencePolicy のテスト"""

    def test_defaults(self):
        policy = ResiliencePolicy.from_env(environ={})

        assert policy.max_attempts == 3
        assert policy.wait_duration_seconds == 0.2
        assert policy.deadline_margin_seconds == 1.0
        assert policy.failure_rate_threshold == 50.0
        assert policy.sliding_window_size == 10
        assert policy.minimum_number_of_calls == 5
        assert policy.wait_duration_in_open_state_seconds == 30.0

    def test_from_env_overrides_configured_values(self):
        policy = ResiliencePolicy.from_env(
            environ={
                "FLIGHT_INVENTORY_RETRY_MAX_ATTEMPTS": "5",
                "FLIGHT_INVENTORY_CB_WAIT_SECONDS_IN_OPEN_STATE": "10",
                "UNRELATED": "x",
            }
        )

        assert policy.max_attempts == 5
        assert policy.wait_duration_in_open_state_seconds == 10.0
        assert policy.backoff_multiplier == 2.0

    def test_invalid_value_raises_validation_error(self):
        with pytest.raises(ValidationError):
            ResiliencePolicy.from_env(
                environ={"FLIGHT_INVENTORY_RETRY_MAX_ATTEMPTS": "0"}
            )

    def test_worst_case_seconds(self):
        """3回の試行（各2秒）+ 待機 0.2 + 0.4 秒"""
        policy = ResiliencePolicy()

        assert policy.worst_case_seconds(2.0) == pytest.approx(6.6)

    def test_worst_case_seconds_without_retry(self):
        policy = ResiliencePolicy(max_attempts=1)

        assert policy.worst_case_seconds(2.0) == pytest.approx(2.0)
