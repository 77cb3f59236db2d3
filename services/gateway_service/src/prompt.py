import json
from enum import Enum
from typing import Any, List

from pydantic import BaseModel, ConfigDict

class ResponseShape(str, Enum):
    STRUCTURED = "structured"
    FREE_TEXT = "free_text"

class Prompt(BaseModel):
    model_config = ConfigDict(frozen=True)

    system_instruction: str
    user_content: str
    response_shape: ResponseShape

FOLLOW_UP_MAX_WORDS = 200

_DEIDENTIFIED_NOTICE = (
    "All content you receive has been de-identified. Bracketed tokens such as "
    "[PATIENT_NAME], [PHONE], [SSN], [EMAIL], [DATE] and [ADDRESS] stand in for removed details. "
    "Never attempt to guess, infer or reconstruct the identity or details behind them."
)

form_analysis_prompt = f"""
You are a medical AI assistant that analyzes de-identified patient intake forms for healthcare providers.
Provide concise, professional insights while maintaining HIPAA compliance. Never reference specific patient identifiers.
{_DEIDENTIFIED_NOTICE}

Respond only with a JSON object in this format (no additional commentary):
{{
  "summary": "<short clinical summary>",
  "riskLevel": "low" | "medium" | "high",
  "recommendations": ["<recommendation>"],
  "flaggedItems": ["<item needing clinician attention>"]
}}
""".strip()

insurance_prompt = f"""
You are an insurance verification system. Provide realistic verification results for de-identified data.
{_DEIDENTIFIED_NOTICE}

Respond only with a JSON object in this format (no additional commentary):
{{
  "isValid": true | false,
  "coverage": ["<covered service>"],
  "copay": <number>,
  "deductible": <number>,
  "notes": "<short note>"
}}
""".strip()

scheduling_prompt = f"""
You are a medical scheduling AI that optimizes appointment timing and duration based on de-identified patient needs.
{_DEIDENTIFIED_NOTICE}

Respond only with a JSON object in this format (no additional commentary):
{{
  "suggestedTime": "<when to book>",
  "duration": <minutes as integer>,
  "type": "<appointment type>",
  "priority": "low" | "medium" | "high",
  "reason": "<short justification>"
}}
""".strip()

chat_prompt = f"""
You are a medical practice AI assistant. Help with scheduling, patient management, and administrative tasks.
Always maintain HIPAA compliance and provide professional assistance. Work only with de-identified data.
{_DEIDENTIFIED_NOTICE}
""".strip()

follow_up_prompt = f"""
You are a medical practice communication assistant. Generate professional, caring follow-up messages for patients
using de-identified information. Address the patient exactly as [PATIENT_NAME]; keep that token unchanged in your reply.
{_DEIDENTIFIED_NOTICE}
""".strip()

def _dump(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)

def serialize_payload(value: Any) -> str:
    """Render a caller payload as the text that goes through the policy gate."""
    if isinstance(value, str):
        return value
    return _dump(value)

def build_form_analysis(form_text: str) -> Prompt:
    return Prompt(
        system_instruction=form_analysis_prompt,
        user_content=f"Analyze this de-identified patient intake form.\n\nForm data: {form_text}",
        response_shape=ResponseShape.STRUCTURED,
    )

def build_insurance_verification(provider: str, policy_number: str, patient_text: str) -> Prompt:
    return Prompt(
        system_instruction=insurance_prompt,
        user_content=(
            "Simulate insurance verification for:\n"
            f"Provider: {provider}\n"
            f"Policy: {policy_number}\n"
            f"Patient: {patient_text}"
        ),
        response_shape=ResponseShape.STRUCTURED,
    )

def build_scheduling(history_text: str, urgency: str) -> Prompt:
    return Prompt(
        system_instruction=scheduling_prompt,
        user_content=(
            "Based on de-identified patient history and urgency level, suggest optimal appointment scheduling.\n"
            f"Patient history: {history_text}\n"
            f"Urgency: {urgency}"
        ),
        response_shape=ResponseShape.STRUCTURED,
    )

def build_chat(message: str, context_text: str) -> Prompt:
    return Prompt(
        system_instruction=chat_prompt,
        user_content=f"Context: {context_text}\n\nQuestion: {message}",
        response_shape=ResponseShape.FREE_TEXT,
    )

def build_follow_up(patient_name: str, appointment_type: str, next_steps: List[str]) -> Prompt:
    return Prompt(
        system_instruction=follow_up_prompt,
        user_content=(
            "Generate a professional follow-up message for:\n"
            f"Patient: {patient_name}\n"
            f"Appointment type: {appointment_type}\n"
            f"Next steps: {', '.join(next_steps)}\n\n"
            f"Keep it warm, professional, and under {FOLLOW_UP_MAX_WORDS} words."
        ),
        response_shape=ResponseShape.FREE_TEXT,
    )
