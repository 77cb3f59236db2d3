# common/fail_soft.py
import time
from functools import wraps
from typing import Callable, TypeVar

from ..src.exceptions import MalformedResponse, PolicyViolation, ProviderUnavailable
from ..src.logging import jlog

T = TypeVar("T")

def _failure_kind(exc: Exception) -> str:
    if isinstance(exc, (ProviderUnavailable, MalformedResponse)):
        return type(exc).__name__
    return "Unexpected"

def fail_soft(operation: str, default: Callable[[], T]):
    """
    Degrade any failure of a gateway operation to its documented default result.
    - PolicyViolation is a configuration problem and always propagates.
    - Everything else is logged with operation and failure kind, then swapped
      for a freshly built `default()`.
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            start = time.time()
            try:
                return func(*args, **kwargs)
            except PolicyViolation:
                raise
            except Exception as e:
                dur = int((time.time() - start) * 1000)
                jlog(
                    event="operation_degraded",
                    severity="ERROR",
                    operation=operation,
                    failure_kind=_failure_kind(e),
                    error_type=type(e).__name__,
                    duration_ms=dur,
                )
                return default()
        return wrapper
    return decorator
