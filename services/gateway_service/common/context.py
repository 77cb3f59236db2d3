import contextvars
from typing import Optional

_correlation_id = contextvars.ContextVar("correlation_id", default=None)

def set_context(correlation_id: Optional[str]) -> None:
    _correlation_id.set(correlation_id) # type: ignore

def get_context() -> Optional[str]:
    return _correlation_id.get()
