from typing import Annotated, Any, Dict, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

Level = Literal["low", "medium", "high"]

# -----------------------
# Requests
# -----------------------

class FormAnalysisRequest(BaseModel):
    kind: Literal["analyze_form"] = "analyze_form"
    form_data: Dict[str, Any] = Field(..., alias="formData", description="Intake form fields as submitted")

    model_config = ConfigDict(populate_by_name=True)

class InsuranceVerificationRequest(BaseModel):
    kind: Literal["verify_insurance"] = "verify_insurance"
    provider: str = Field(..., min_length=1, description="Insurance carrier name")
    policy_number: str = Field(..., alias="policyNumber", min_length=1)
    patient_info: Dict[str, Any] = Field(default_factory=dict, alias="patientInfo")

    model_config = ConfigDict(populate_by_name=True)

class SchedulingRequest(BaseModel):
    kind: Literal["suggest_scheduling"] = "suggest_scheduling"
    patient_history: Any = Field(default=None, alias="patientHistory")
    urgency: str = Field(default="routine")

    model_config = ConfigDict(populate_by_name=True)

class ChatRequest(BaseModel):
    kind: Literal["chat"] = "chat"
    message: str = Field(..., min_length=1)
    context: Any = None

class FollowUpRequest(BaseModel):
    kind: Literal["follow_up"] = "follow_up"
    patient_name: str = Field(..., alias="patientName", min_length=1)
    appointment_type: str = Field(..., alias="appointmentType")
    next_steps: List[str] = Field(default_factory=list, alias="nextSteps")

    model_config = ConfigDict(populate_by_name=True)

OperationRequest = Annotated[
    Union[
        FormAnalysisRequest,
        InsuranceVerificationRequest,
        SchedulingRequest,
        ChatRequest,
        FollowUpRequest,
    ],
    Field(discriminator="kind"),
]

# -----------------------
# Results
# -----------------------

class PatientInsight(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    summary: str = "No summary available"
    risk_level: Level = Field(default="low", alias="riskLevel")
    recommendations: List[str] = Field(default_factory=list)
    flagged_items: List[str] = Field(default_factory=list, alias="flaggedItems")

class InsuranceVerificationResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_valid: bool = Field(default=False, alias="isValid")
    coverage: List[str] = Field(default_factory=list)
    copay: float = 0
    deductible: float = 0
    notes: str = "No verification notes provided"

class AppointmentSuggestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    suggested_time: str = Field(default="Next available", alias="suggestedTime")
    duration: int = Field(default=30, description="Minutes")
    type: str = "standard consultation"
    priority: Level = "medium"
    reason: str = "Standard appointment scheduling"

class ChatReply(BaseModel):
    text: str

class FollowUpMessage(BaseModel):
    text: str

OperationResult = Union[
    PatientInsight,
    InsuranceVerificationResult,
    AppointmentSuggestion,
    ChatReply,
    FollowUpMessage,
]

# -----------------------
# Failure defaults
# -----------------------

CHAT_EMPTY_REPLY = "I'm sorry, I couldn't process your request at this time."
CHAT_UNAVAILABLE_REPLY = "I'm experiencing technical difficulties. Please try again later."
FOLLOW_UP_FALLBACK = "Thank you for your visit. Please contact us if you have any questions."

def insight_unavailable() -> PatientInsight:
    return PatientInsight(summary="Unable to analyze form at this time")

def insurance_unavailable() -> InsuranceVerificationResult:
    return InsuranceVerificationResult(notes="Unable to verify insurance at this time")

def scheduling_unavailable() -> AppointmentSuggestion:
    return AppointmentSuggestion(type="consultation", reason="Unable to analyze scheduling requirements")
