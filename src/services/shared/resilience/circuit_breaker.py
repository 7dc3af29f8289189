import threading
import time
from collections import deque
from enum import Enum
from typing import Callable, TypeVar

from aws_lambda_powertools import Logger

logger = Logger(child=True)

T = TypeVar("T")


class CircuitState(str, Enum):
    """サーキットブレーカーの状態"""

    CLOSED = "CLOSED"
    OPEN = "OPEN"
    HALF_OPEN = "HALF_OPEN"


class CallNotPermittedError(Exception):
    """OPEN 状態（または HALF_OPEN の試行枠超過）で呼び出しが拒否された"""

    def __init__(self, name: str, state: CircuitState) -> None:
        super().__init__(f"Circuit breaker '{name}' is {state.value}; call not permitted")
        self.name = name
        self.state = state


class CircuitBreaker:
    """件数ベースのスライディングウィンドウで失敗率を判定するサーキットブレーカー

    - CLOSED: 直近 sliding_window_size 件の失敗率が閾値以上で OPEN
      （minimum_number_of_calls 件に満たない間は判定しない）
    - OPEN: wait_duration_in_open_state 経過後の最初の呼び出しで HALF_OPEN
    - HALF_OPEN: permitted_calls_in_half_open_state 件だけ試行を許可し、
      すべて成功すれば CLOSED、1件でも失敗すれば OPEN

    record_on に含まれない例外は失敗として記録しない（業務エラーなど）。
    """

    def __init__(
        self,
        name: str,
        failure_rate_threshold: float = 50.0,
        sliding_window_size: int = 10,
        minimum_number_of_calls: int = 5,
        wait_duration_in_open_state: float = 30.0,
        permitted_calls_in_half_open_state: int = 1,
        record_on: tuple[type[BaseException], ...] = (Exception,),
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.name = name
        self._failure_rate_threshold = failure_rate_threshold
        self._minimum_number_of_calls = minimum_number_of_calls
        self._wait_duration_in_open_state = wait_duration_in_open_state
        self._permitted_calls_in_half_open_state = permitted_calls_in_half_open_state
        self._record_on = record_on
        self._clock = clock

        self._lock = threading.Lock()
        self._state = CircuitState.CLOSED
        self._outcomes: deque[bool] = deque(maxlen=sliding_window_size)
        self._opened_at = 0.0
        self._half_open_in_flight = 0
        self._half_open_successes = 0

    @property
    def state(self) -> CircuitState:
        with self._lock:
            self._maybe_half_open()
            return self._state

    @property
    def failure_rate(self) -> float:
        """ウィンドウ内の失敗率（%）"""
        with self._lock:
            return self._failure_rate()

    def call(self, func: Callable[..., T], *args, **kwargs) -> T:
        """ブレーカー経由で func を呼び出す"""
        self.acquire_permission()
        try:
            result = func(*args, **kwargs)
        except self._record_on:
            self.on_error()
            raise
        except BaseException:
            self.release_permission()
            raise
        self.on_success()
        return result

    def acquire_permission(self) -> None:
        """呼び出し可否を判定する。拒否時は CallNotPermittedError"""
        with self._lock:
            self._maybe_half_open()
            if self._state == CircuitState.OPEN:
                raise CallNotPermittedError(self.name, self._state)
            if self._state == CircuitState.HALF_OPEN:
                if self._half_open_in_flight >= self._permitted_calls_in_half_open_state:
                    raise CallNotPermittedError(self.name, self._state)
                self._half_open_in_flight += 1

    def release_permission(self) -> None:
        """結果を記録せずに試行枠を返却する"""
        with self._lock:
            if self._state == CircuitState.HALF_OPEN and self._half_open_in_flight > 0:
                self._half_open_in_flight -= 1

    def on_success(self) -> None:
        with self._lock:
            if self._state == CircuitState.HALF_OPEN:
                self._half_open_successes += 1
                if self._half_open_successes >= self._permitted_calls_in_half_open_state:
                    self._transition(CircuitState.CLOSED)
                return
            self._outcomes.append(True)

    def on_error(self) -> None:
        with self._lock:
            if self._state == CircuitState.HALF_OPEN:
                self._transition(CircuitState.OPEN)
                return
            self._outcomes.append(False)
            if (
                self._state == CircuitState.CLOSED
                and len(self._outcomes) >= self._minimum_number_of_calls
                and self._failure_rate() >= self._failure_rate_threshold
            ):
                self._transition(CircuitState.OPEN)

    def reset(self) -> None:
        with self._lock:
            self._transition(CircuitState.CLOSED)

    def _failure_rate(self) -> float:
        if not self._outcomes:
            return 0.0
        failures = sum(1 for ok in self._outcomes if not ok)
        return failures * 100.0 / len(self._outcomes)

    def _maybe_half_open(self) -> None:
        if (
            self._state == CircuitState.OPEN
            and self._clock() - self._opened_at >= self._wait_duration_in_open_state
        ):
            self._transition(CircuitState.HALF_OPEN)

    def _transition(self, new_state: CircuitState) -> None:
        old_state = self._state
        self._state = new_state
        self._half_open_in_flight = 0
        self._half_open_successes = 0
        if new_state == CircuitState.OPEN:
            self._opened_at = self._clock()
        if new_state == CircuitState.CLOSED:
            self._outcomes.clear()
        if old_state != new_state:
            logger.info(
                "Circuit breaker state changed",
                extra={
                    "breaker": self.name,
                    "from_state": old_state.value,
                    "to_state": new_state.value,
                },
            )
