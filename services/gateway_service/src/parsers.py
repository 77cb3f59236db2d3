import json
import re
from typing import Annotated, Any, Dict, List, Type, TypeVar

from pydantic import BaseModel, Field, StringConstraints, TypeAdapter, ValidationError

from .exceptions import MalformedResponse
from .logging import jlog
from .schemas import (
    CHAT_EMPTY_REPLY,
    FOLLOW_UP_FALLBACK,
    AppointmentSuggestion,
    InsuranceVerificationResult,
    Level,
    PatientInsight,
)

M = TypeVar("M", bound=BaseModel)

_FENCE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)

_NonBlank = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# Per-field validators; a field that fails its adapter keeps the model default.
_TEXT = TypeAdapter(_NonBlank)
_LEVEL = TypeAdapter(Level)
_TEXT_LIST = TypeAdapter(List[_NonBlank])
_BOOL = TypeAdapter(bool)
_AMOUNT = TypeAdapter(Annotated[float, Field(ge=0, allow_inf_nan=False)])
_MINUTES = TypeAdapter(Annotated[int, Field(gt=0)])

def decode_json_object(raw: str) -> Dict[str, Any]:
    """Decode a provider reply into a dict, tolerating markdown code fences."""
    content = (raw or "").strip()
    fenced = _FENCE.search(content)
    if fenced:
        content = fenced.group(1).strip()
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise MalformedResponse(f"Non-JSON provider response: {e}") from e
    if not isinstance(data, dict):
        raise MalformedResponse("Provider response must be a JSON object")
    return data

def _build(model: Type[M], raw: str, adapters: Dict[str, TypeAdapter], operation: str) -> M:
    try:
        data = decode_json_object(raw)
    except MalformedResponse as e:
        jlog(event="response_malformed", severity="WARNING", operation=operation,
             failure_kind="MalformedResponse", error=str(e))
        data = {}

    values: Dict[str, Any] = {}
    defaulted: List[str] = []
    for name, adapter in adapters.items():
        alias = model.model_fields[name].alias or name
        key = alias if alias in data else name
        if key not in data:
            defaulted.append(alias)
            continue
        try:
            values[name] = adapter.validate_python(data[key])
        except ValidationError:
            defaulted.append(alias)

    if defaulted and data:
        jlog(event="response_fields_defaulted", severity="WARNING", operation=operation,
             failure_kind="MalformedResponse", fields=defaulted)
    return model(**values)

def parse_patient_insight(raw: str) -> PatientInsight:
    return _build(PatientInsight, raw, {
        "summary": _TEXT,
        "risk_level": _LEVEL,
        "recommendations": _TEXT_LIST,
        "flagged_items": _TEXT_LIST,
    }, "analyze_form")

def parse_insurance_verification(raw: str) -> InsuranceVerificationResult:
    return _build(InsuranceVerificationResult, raw, {
        "is_valid": _BOOL,
        "coverage": _TEXT_LIST,
        "copay": _AMOUNT,
        "deductible": _AMOUNT,
        "notes": _TEXT,
    }, "verify_insurance")

def parse_appointment_suggestion(raw: str) -> AppointmentSuggestion:
    return _build(AppointmentSuggestion, raw, {
        "suggested_time": _TEXT,
        "duration": _MINUTES,
        "type": _TEXT,
        "priority": _LEVEL,
        "reason": _TEXT,
    }, "suggest_scheduling")

def parse_chat(raw: str) -> str:
    text = (raw or "").strip()
    return text or CHAT_EMPTY_REPLY

def parse_follow_up(raw: str) -> str:
    text = (raw or "").strip()
    return text or FOLLOW_UP_FALLBACK
