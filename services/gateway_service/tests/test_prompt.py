import pytest

from services.gateway_service.src.prompt import (
    ResponseShape,
    build_chat,
    build_follow_up,
    build_form_analysis,
    build_insurance_verification,
    build_scheduling,
    serialize_payload,
)

BUILDERS = [
    (build_form_analysis, ('{"complaint": "headache"}',), ResponseShape.STRUCTURED),
    (build_insurance_verification, ("[PATIENT_NAME]", "POL123", '{"name": "[PATIENT_NAME]"}'), ResponseShape.STRUCTURED),
    (build_scheduling, ('{"visits": 3}', "urgent"), ResponseShape.STRUCTURED),
    (build_chat, ("When is the next opening?", "{}"), ResponseShape.FREE_TEXT),
    (build_follow_up, ("[PATIENT_NAME]", "checkup", ["Take medication"]), ResponseShape.FREE_TEXT),
]

@pytest.mark.parametrize("builder, args, shape", BUILDERS)
def test_builders_are_pure(builder, args, shape):
    assert builder(*args) == builder(*args)

@pytest.mark.parametrize("builder, args, shape", BUILDERS)
def test_response_shape(builder, args, shape):
    assert builder(*args).response_shape is shape

@pytest.mark.parametrize("builder, args, shape", BUILDERS)
def test_system_instruction_forbids_reconstruction(builder, args, shape):
    instruction = builder(*args).system_instruction
    assert "de-identified" in instruction
    assert "Never attempt to guess, infer or reconstruct" in instruction

def test_structured_prompts_name_their_fields():
    assert '"riskLevel"' in build_form_analysis("{}").system_instruction
    assert '"copay"' in build_insurance_verification("A", "B", "{}").system_instruction
    assert '"suggestedTime"' in build_scheduling("{}", "low").system_instruction

def test_payload_lands_in_user_content():
    prompt = build_insurance_verification("carrier", "POL123", '{"age": 40}')
    assert "Provider: carrier" in prompt.user_content
    assert "Policy: POL123" in prompt.user_content
    assert 'Patient: {"age": 40}' in prompt.user_content

def test_follow_up_asks_for_word_limit():
    prompt = build_follow_up("[PATIENT_NAME]", "checkup", ["Take medication", "Rest"])
    assert "under 200 words" in prompt.user_content
    assert "Next steps: Take medication, Rest" in prompt.user_content

def test_chat_layout():
    prompt = build_chat("Any openings?", '{"day": "monday"}')
    assert prompt.user_content == 'Context: {"day": "monday"}\n\nQuestion: Any openings?'

def test_serialize_payload():
    assert serialize_payload("plain") == "plain"
    assert serialize_payload({"name": "José"}) == '{"name": "José"}'
    assert serialize_payload(None) == "null"
