import time
from typing import Callable, TypeVar

from aws_lambda_powertools import Logger

logger = Logger(child=True)

T = TypeVar("T")


class RetryExhaustedError(Exception):
    """最大試行回数まで失敗した"""

    def __init__(self, name: str, attempts: int, last_error: BaseException) -> None:
        super().__init__(
            f"Retry '{name}' exhausted after {attempts} attempts: {last_error}"
        )
        self.name = name
        self.attempts = attempts
        self.last_error = last_error


class DeadlineExceededError(Exception):
    """残りの実行時間では次の試行を完了できない"""

    def __init__(
        self,
        name: str,
        attempts: int,
        remaining_seconds: float,
        last_error: BaseException | None = None,
    ) -> None:
        message = (
            f"Retry '{name}' stopped after {attempts} attempts: "
            f"{remaining_seconds:.2f}s left before the invocation deadline"
        )
        if last_error is not None:
            message += f" (last error: {last_error})"
        super().__init__(message)
        self.name = name
        self.attempts = attempts
        self.remaining_seconds = remaining_seconds
        self.last_error = last_error


class Retry:
    """固定回数・指数バックオフのリトライ

    retry_on に含まれる例外のみ再試行する。それ以外の例外は即座に伝播する。
    待機時間は wait_duration * backoff_multiplier ** (attempt - 1)。

    remaining_time（残り秒数を返す関数）が設定されている場合、各試行の前に
    attempt_timeout + deadline_margin 秒が残っているかを確認し、足りなければ
    呼び出さずに DeadlineExceededError を送出する。
    """

    def __init__(
        self,
        name: str,
        max_attempts: int = 3,
        wait_duration: float = 0.5,
        backoff_multiplier: float = 2.0,
        retry_on: tuple[type[BaseException], ...] = (Exception,),
        sleep: Callable[[float], None] = time.sleep,
        attempt_timeout: float = 0.0,
        deadline_margin: float = 0.0,
        remaining_time: Callable[[], float] | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.name = name
        self.max_attempts = max_attempts
        self._wait_duration = wait_duration
        self._backoff_multiplier = backoff_multiplier
        self._retry_on = retry_on
        self._sleep = sleep
        self._attempt_timeout = attempt_timeout
        self._deadline_margin = deadline_margin
        self.remaining_time = remaining_time

    def call(self, func: Callable[..., T], *args, **kwargs) -> T:
        """func を最大 max_attempts 回まで呼び出す"""
        self._ensure_time_left(attempts=0, wait=0.0)
        for attempt in range(1, self.max_attempts + 1):
            try:
                return func(*args, **kwargs)
            except self._retry_on as e:
                if attempt == self.max_attempts:
                    raise RetryExhaustedError(self.name, attempt, e) from e
                delay = self.backoff_for(attempt)
                self._ensure_time_left(attempts=attempt, wait=delay, last_error=e)
                logger.warning(
                    "Retrying after failure",
                    extra={
                        "retry": self.name,
                        "attempt": attempt,
                        "delay_seconds": delay,
                        "error": str(e),
                    },
                )
                self._sleep(delay)
        raise AssertionError("unreachable")

    def backoff_for(self, attempt: int) -> float:
        """attempt 回目の失敗後に待機する秒数"""
        return self._wait_duration * self._backoff_multiplier ** (attempt - 1)

    def _ensure_time_left(
        self, attempts: int, wait: float, last_error: BaseException | None = None
    ) -> None:
        if self.remaining_time is None:
            return
        remaining = self.remaining_time()
        if remaining >= wait + self._attempt_timeout + self._deadline_margin:
            return
        logger.warning(
            "Not enough time left for another attempt",
            extra={
                "retry": self.name,
                "attempts": attempts,
                "remaining_seconds": remaining,
            },
        )
        error = DeadlineExceededError(self.name, attempts, remaining, last_error)
        if last_error is not None:
            raise error from last_error
        raise error
