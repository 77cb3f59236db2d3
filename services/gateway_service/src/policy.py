from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from .config import GatewayConfig
from .exceptions import PolicyViolation
from .logging import jlog
from .redactor import has_risk, match_counts, redact

class Decision(str, Enum):
    PASS = "pass"
    REDACT = "redact"
    REJECT = "reject"

class RedactionOutcome(BaseModel):
    """Request-scoped; never persisted and never logged as raw text."""
    model_config = ConfigDict(frozen=True)

    text: str
    was_redacted: bool = False

def redaction_enabled(config: GatewayConfig) -> bool:
    return config.hipaa_mode and config.deidentify_before_call

def decide(config: GatewayConfig, raw_text: str) -> Decision:
    """
    Decision table:

        hipaa_mode  deidentify_before_call  has_risk  ->  decision
        False       any                     True          REJECT
        False       any                     False         PASS
        True        True                    any           REDACT
        True        False                   any           PASS (operator opted out)
    """
    if not config.hipaa_mode:
        return Decision.REJECT if has_risk(raw_text) else Decision.PASS
    if config.deidentify_before_call:
        return Decision.REDACT
    return Decision.PASS

def apply_policy(config: GatewayConfig, raw_text: str, operation: str = "") -> RedactionOutcome:
    decision = decide(config, raw_text)

    if decision is Decision.REJECT:
        jlog(
            event="policy_violation",
            severity="WARNING",
            operation=operation,
            failure_kind="PolicyViolation",
            entities=match_counts(raw_text),
            text_len=len(raw_text),
        )
        raise PolicyViolation(
            "Potential PHI detected but HIPAA_MODE is not enabled. "
            "Enable HIPAA_MODE=true or de-identify data."
        )

    if decision is Decision.REDACT:
        return RedactionOutcome(text=redact(raw_text), was_redacted=True)

    return RedactionOutcome(text=raw_text, was_redacted=False)

def apply_policy_to_payload(config: GatewayConfig, value: Any, operation: str = "") -> Any:
    """
    Walk a caller payload and gate every string leaf and dict key as raw text.
    Numbers go through as text too, so a bare digit run like a phone number is caught.
    """
    if isinstance(value, str):
        return apply_policy(config, value, operation).text
    if isinstance(value, dict):
        return {
            apply_policy_to_payload(config, key, operation) if isinstance(key, str) else key:
            apply_policy_to_payload(config, item, operation)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [apply_policy_to_payload(config, item, operation) for item in value]
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        outcome = apply_policy(config, str(value), operation)
        return value if outcome.text == str(value) else outcome.text
    # Anything else is serialized with str() later, so gate that rendering
    return apply_policy(config, str(value), operation).text
