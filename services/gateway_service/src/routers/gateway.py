from typing import Optional

from anyio import to_thread
from fastapi import APIRouter, Header, HTTPException, status

from ...common.context import set_context
from ..config import settings
from ..exceptions import PolicyViolation
from ..logging import jlog
from ..schemas import (
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
)
from ..service import execute

router = APIRouter(prefix="/ai")

async def _run(payload: OperationRequest, correlation_id: Optional[str]) -> OperationResult:
    set_context(correlation_id)
    try:
        # Offload to a worker thread so we don't block the event loop
        return await to_thread.run_sync(execute, settings, payload)
    except PolicyViolation as e:
        jlog(event="operation_rejected", operation=payload.kind, failure_kind="PolicyViolation")
        raise HTTPException(status_code=422, detail=str(e))

@router.post(
    "/analyze-form",
    response_model=PatientInsight,
    summary="Analyze an intake form",
    status_code=status.HTTP_200_OK,
)
async def analyze_form(
    payload: FormAnalysisRequest,
    x_correlation_id: Optional[str] = Header(default=None),
):
    return await _run(payload, x_correlation_id)

@router.post(
    "/verify-insurance",
    response_model=InsuranceVerificationResult,
    summary="Simulate insurance verification",
    status_code=status.HTTP_200_OK,
)
async def verify_insurance(
    payload: InsuranceVerificationRequest,
    x_correlation_id: Optional[str] = Header(default=None),
):
    return await _run(payload, x_correlation_id)

@router.post(
    "/suggest-appointment",
    response_model=AppointmentSuggestion,
    summary="Suggest appointment scheduling",
    status_code=status.HTTP_200_OK,
)
async def suggest_appointment(
    payload: SchedulingRequest,
    x_correlation_id: Optional[str] = Header(default=None),
):
    return await _run(payload, x_correlation_id)

@router.post(
    "/chat",
    response_model=ChatReply,
    summary="Ask the practice assistant",
    status_code=status.HTTP_200_OK,
)
async def chat(
    payload: ChatRequest,
    x_correlation_id: Optional[str] = Header(default=None),
):
    return await _run(payload, x_correlation_id)

@router.post(
    "/follow-up",
    response_model=FollowUpMessage,
    summary="Generate a patient follow-up message",
    status_code=status.HTTP_200_OK,
)
async def follow_up(
    payload: FollowUpRequest,
    x_correlation_id: Optional[str] = Header(default=None),
):
    return await _run(payload, x_correlation_id)
