import os
from typing import Mapping

from pydantic import BaseModel, Field


class ResiliencePolicy(BaseModel):
    """リトライ・サーキットブレーカーの設定

    Lambda の環境変数（FLIGHT_INVENTORY_*）から組み立てる。
    """

    max_attempts: int = Field(default=3, ge=1, description="最大試行回数")
    wait_duration_seconds: float = Field(
        default=0.2, ge=0, description="初回リトライまでの待機秒数"
    )
    backoff_multiplier: float = Field(default=2.0, ge=1, description="バックオフ倍率")
    deadline_margin_seconds: float = Field(
        default=1.0, ge=0, description="試行後に残しておく実行時間（秒）"
    )

    failure_rate_threshold: float = Field(
        default=50.0, gt=0, le=100, description="OPEN に遷移する失敗率（%）"
    )
    sliding_window_size: int = Field(default=10, ge=1)
    minimum_number_of_calls: int = Field(default=5, ge=1)
    wait_duration_in_open_state_seconds: float = Field(default=30.0, gt=0)
    permitted_calls_in_half_open_state: int = Field(default=1, ge=1)

    model_config = {"frozen": True}

    @classmethod
    def from_env(
        cls,
        prefix: str = "FLIGHT_INVENTORY_",
        environ: Mapping[str, str] | None = None,
    ) -> "ResiliencePolicy":
        """環境変数から生成する（未設定の項目はデフォルト値）"""
        env = os.environ if environ is None else environ
        names = {
            "max_attempts": "RETRY_MAX_ATTEMPTS",
            "wait_duration_seconds": "RETRY_WAIT_SECONDS",
            "backoff_multiplier": "RETRY_BACKOFF_MULTIPLIER",
            "deadline_margin_seconds": "RETRY_DEADLINE_MARGIN_SECONDS",
            "failure_rate_threshold": "CB_FAILURE_RATE_THRESHOLD",
            "sliding_window_size": "CB_SLIDING_WINDOW_SIZE",
            "minimum_number_of_calls": "CB_MINIMUM_NUMBER_OF_CALLS",
            "wait_duration_in_open_state_seconds": "CB_WAIT_SECONDS_IN_OPEN_STATE",
            "permitted_calls_in_half_open_state": "CB_PERMITTED_CALLS_IN_HALF_OPEN_STATE",
        }
        values = {
            field: env[prefix + suffix]
            for field, suffix in names.items()
            if prefix + suffix in env
        }
        return cls.model_validate(values)

    def worst_case_seconds(self, attempt_timeout: float) -> float:
        """1操作がリトライをすべて使い切った場合の最大所要秒数

        attempt_timeout は1回の試行の上限（接続 + 読み取りタイムアウト）。
        """
        backoff = sum(
            self.wait_duration_seconds * self.backoff_multiplier**n
            for n in range(self.max_attempts - 1)
        )
        return self.max_attempts * attempt_timeout + backoff
