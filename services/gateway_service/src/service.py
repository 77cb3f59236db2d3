from typing import Any, List

from opentelemetry import trace

from ..common.fail_soft import fail_soft
from ..common.sanitize import hash_preview
from .config import GatewayConfig
from .logging import jlog
from .parsers import (
    parse_appointment_suggestion,
    parse_chat,
    parse_follow_up,
    parse_insurance_verification,
    parse_patient_insight,
)
from .patterns import NAME_PLACEHOLDER
from .policy import apply_policy_to_payload, redaction_enabled
from .prompt import (
    FOLLOW_UP_MAX_WORDS,
    Prompt,
    build_chat,
    build_follow_up,
    build_form_analysis,
    build_insurance_verification,
    build_scheduling,
    serialize_payload,
)
from .provider import invoke
from .reidentify import cap_words, mask_identity, restore
from .schemas import (
    CHAT_UNAVAILABLE_REPLY,
    FOLLOW_UP_FALLBACK,
    AppointmentSuggestion,
    ChatReply,
    ChatRequest,
    FollowUpMessage,
    FollowUpRequest,
    FormAnalysisRequest,
    InsuranceVerificationRequest,
    InsuranceVerificationResult,
    OperationRequest,
    OperationResult,
    PatientInsight,
    SchedulingRequest,
    insight_unavailable,
    insurance_unavailable,
    scheduling_unavailable,
)

tracer = trace.get_tracer("gateway.operations")

def _gate(config: GatewayConfig, operation: str, value: Any) -> str:
    # Gate the raw string leaves; JSON escaping would hide whitespace from the rules
    return serialize_payload(apply_policy_to_payload(config, value, operation))

def _call_provider(config: GatewayConfig, operation: str, prompt: Prompt) -> str:
    with tracer.start_as_current_span(operation) as span:
        span.set_attribute("operation", operation)
        span.set_attribute("provider", config.ai_provider)
        span.set_attribute("model_name", config.ai_model)
        span.set_attribute("hipaa_mode", config.hipaa_mode)
        span.set_attribute("redaction", redaction_enabled(config))
        span.set_attribute("user_content_preview", hash_preview(prompt.user_content))

        raw = invoke(
            config,
            prompt.system_instruction,
            prompt.user_content,
            prompt.response_shape,
            operation=operation,
        )
    jlog(event="operation_ok", operation=operation, reply=hash_preview(raw))
    return raw

@fail_soft("analyze_form", insight_unavailable)
def analyze_form(config: GatewayConfig, form_data: Any) -> PatientInsight:
    form_text = _gate(config, "analyze_form", form_data)
    prompt = build_form_analysis(form_text)
    return parse_patient_insight(_call_provider(config, "analyze_form", prompt))

@fail_soft("verify_insurance", insurance_unavailable)
def verify_insurance(
    config: GatewayConfig,
    provider: str,
    policy_number: str,
    patient_info: Any,
) -> InsuranceVerificationResult:
    prompt = build_insurance_verification(
        _gate(config, "verify_insurance", provider),
        _gate(config, "verify_insurance", policy_number),
        _gate(config, "verify_insurance", patient_info),
    )
    return parse_insurance_verification(_call_provider(config, "verify_insurance", prompt))

@fail_soft("suggest_scheduling", scheduling_unavailable)
def suggest_scheduling(config: GatewayConfig, patient_history: Any, urgency: str) -> AppointmentSuggestion:
    prompt = build_scheduling(
        _gate(config, "suggest_scheduling", patient_history),
        _gate(config, "suggest_scheduling", urgency),
    )
    return parse_appointment_suggestion(_call_provider(config, "suggest_scheduling", prompt))

@fail_soft("chat", lambda: CHAT_UNAVAILABLE_REPLY)
def chat(config: GatewayConfig, message: str, context: Any = None) -> str:
    prompt = build_chat(
        _gate(config, "chat", message),
        _gate(config, "chat", context),
    )
    return parse_chat(_call_provider(config, "chat", prompt))

@fail_soft("follow_up", lambda: FOLLOW_UP_FALLBACK)
def generate_follow_up(
    config: GatewayConfig,
    patient_name: str,
    appointment_type: str,
    next_steps: List[str],
) -> str:
    """
    The one human-facing operation: with de-identification on, the name goes out
    as a placeholder whatever the HIPAA mode, and is put back afterwards from the
    caller's own argument. Appointment type and next steps still pass the gate.
    """
    masking = config.deidentify_before_call

    if masking:
        # The whole name is masked even when no catalog rule would match it
        name_text = NAME_PLACEHOLDER
        appointment_type = mask_identity(appointment_type, patient_name)
        next_steps = [mask_identity(step, patient_name) for step in next_steps]
    else:
        name_text = _gate(config, "follow_up", patient_name)

    prompt = build_follow_up(
        name_text,
        _gate(config, "follow_up", appointment_type),
        [_gate(config, "follow_up", step) for step in next_steps],
    )
    message = parse_follow_up(_call_provider(config, "follow_up", prompt))

    if masking:
        message = restore(message, patient_name)
    return cap_words(message, FOLLOW_UP_MAX_WORDS)

def execute(config: GatewayConfig, request: OperationRequest) -> OperationResult:
    """Dispatch a tagged operation request to its gateway operation."""
    if isinstance(request, FormAnalysisRequest):
        return analyze_form(config, request.form_data)
    if isinstance(request, InsuranceVerificationRequest):
        return verify_insurance(config, request.provider, request.policy_number, request.patient_info)
    if isinstance(request, SchedulingRequest):
        return suggest_scheduling(config, request.patient_history, request.urgency)
    if isinstance(request, ChatRequest):
        return ChatReply(text=chat(config, request.message, request.context))
    if isinstance(request, FollowUpRequest):
        return FollowUpMessage(
            text=generate_follow_up(config, request.patient_name, request.appointment_type, request.next_steps)
        )
    raise TypeError(f"Unsupported operation request: {type(request).__name__}")
