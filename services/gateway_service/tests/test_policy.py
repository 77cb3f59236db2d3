import pytest

from services.gateway_service.src.config import GatewayConfig
from services.gateway_service.src.exceptions import PHIPolicyViolation, PolicyViolation
from services.gateway_service.src.policy import Decision, apply_policy, decide, redaction_enabled

RISKY = "Patient Jane Doe, SSN 123-45-6789, phone 555-123-4567"
CLEAN = "Routine follow up for seasonal allergies."

def _config(hipaa, deidentify):
    return GatewayConfig(hipaa_mode=hipaa, deidentify_before_call=deidentify)

@pytest.mark.parametrize(
    "hipaa, deidentify, text, expected",
    [
        (False, True, RISKY, Decision.REJECT),
        (False, False, RISKY, Decision.REJECT),
        (False, True, CLEAN, Decision.PASS),
        (False, False, CLEAN, Decision.PASS),
        (True, True, RISKY, Decision.REDACT),
        (True, True, CLEAN, Decision.REDACT),
        (True, False, RISKY, Decision.PASS),
        (True, False, CLEAN, Decision.PASS),
    ],
)
def test_decision_table(hipaa, deidentify, text, expected):
    assert decide(_config(hipaa, deidentify), text) is expected

@pytest.mark.parametrize("text", ["Jane Doe", "call 555-123-4567", "SSN 123-45-6789"])
def test_plain_mode_rejects_risky_text(text):
    with pytest.raises(PolicyViolation):
        apply_policy(_config(False, True), text)

def test_violation_alias():
    assert PHIPolicyViolation is PolicyViolation

def test_violation_message_does_not_echo_payload():
    with pytest.raises(PolicyViolation) as exc:
        apply_policy(_config(False, True), RISKY)
    assert "Jane Doe" not in str(exc.value)
    assert "123-45-6789" not in str(exc.value)

def test_hipaa_mode_redacts():
    outcome = apply_policy(_config(True, True), RISKY)
    assert outcome.was_redacted
    assert "Jane Doe" not in outcome.text
    assert "123-45-6789" not in outcome.text
    assert "555-123-4567" not in outcome.text

def test_opt_out_passes_unmodified():
    outcome = apply_policy(_config(True, False), RISKY)
    assert outcome.text == RISKY
    assert not outcome.was_redacted

def test_clean_text_passes_in_plain_mode():
    outcome = apply_policy(_config(False, True), CLEAN)
    assert outcome.text == CLEAN
    assert not outcome.was_redacted

def test_defaults_fail_closed(monkeypatch):
    monkeypatch.delenv("HIPAA_MODE", raising=False)
    monkeypatch.delenv("DEIDENTIFY_BEFORE_CALL", raising=False)
    config = GatewayConfig(_env_file=None)
    assert config.hipaa_mode is False
    assert config.deidentify_before_call is True
    assert not redaction_enabled(config)
    with pytest.raises(PolicyViolation):
        apply_policy(config, RISKY)

def test_flags_come_from_environment(monkeypatch):
    monkeypatch.setenv("HIPAA_MODE", "true")
    monkeypatch.setenv("DEIDENTIFY_BEFORE_CALL", "false")
    config = GatewayConfig(_env_file=None)
    assert config.hipaa_mode is True
    assert config.deidentify_before_call is False

def test_config_is_immutable():
    config = _config(True, True)
    with pytest.raises(Exception):
        config.hipaa_mode = False

def test_unknown_provider_rejected():
    with pytest.raises(Exception):
        GatewayConfig(ai_provider="mystery")

def test_payload_walk_gates_raw_leaves():
    from services.gateway_service.src.policy import apply_policy_to_payload
    config = _config(True, True)
    gated = apply_policy_to_payload(config, {"Jane Doe": ["Mary\tAnn", 5551234567, 3, None, True]})
    assert gated == {"[PATIENT_NAME]": ["[PATIENT_NAME]", "[PHONE]", 3, None, True]}

def test_payload_walk_rejects_escaped_whitespace_names():
    from services.gateway_service.src.policy import apply_policy_to_payload
    with pytest.raises(PolicyViolation):
        apply_policy_to_payload(_config(False, True), {"patient": "Jane\nDoe"})
