from .circuit_breaker import CallNotPermittedError, CircuitBreaker, CircuitState
from .policy import ResiliencePolicy
from .retry import DeadlineExceededError, Retry, RetryExhaustedError

__all__ = [
    "CallNotPermittedError",
    "CircuitBreaker",
    "CircuitState",
    "DeadlineExceededError",
    "ResiliencePolicy",
    "Retry",
    "RetryExhaustedError",
]
