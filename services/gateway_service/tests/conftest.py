import pytest

from services.gateway_service.src import provider as provider_module
from services.gateway_service.src.config import GatewayConfig

# Helper dummy classes to simulate the OpenAI client and responses
class _Usage:
    def __init__(self, prompt_tokens, completion_tokens, total_tokens):
        self.prompt_tokens = prompt_tokens
        self.completion_tokens = completion_tokens
        self.total_tokens = total_tokens

class _DummyChoiceMsg:
    def __init__(self, content):
        self.content = content

class _DummyChoice:
    def __init__(self, content):
        self.message = _DummyChoiceMsg(content)

class _DummyResponse:
    def __init__(self, content, usage=None):
        self.choices = [_DummyChoice(content)]
        if usage is not None:
            self.usage = usage

class DummyOpenAI:
    """Stands in for openai.OpenAI; replies are queued per test, calls are recorded."""
    replies = []
    calls = []
    error = None
    init_kwargs = None

    def __init__(self, base_url=None, api_key=None):
        DummyOpenAI.init_kwargs = {"base_url": base_url, "api_key": api_key}
        self.chat = type("Chat", (), {})()
        self.chat.completions = type("Completions", (), {})()

        def _create(**kwargs):
            DummyOpenAI.calls.append(kwargs)
            if DummyOpenAI.error is not None:
                raise DummyOpenAI.error
            return _DummyResponse(DummyOpenAI.replies.pop(0), _Usage(10, 20, 30))

        self.chat.completions.create = _create

    @classmethod
    def sent_text(cls) -> str:
        return "\n".join(m["content"] for call in cls.calls for m in call["messages"])

@pytest.fixture
def fake_openai(monkeypatch):
    DummyOpenAI.replies = []
    DummyOpenAI.calls = []
    DummyOpenAI.error = None
    DummyOpenAI.init_kwargs = None
    monkeypatch.setattr(provider_module, "OpenAI", DummyOpenAI)
    return DummyOpenAI

@pytest.fixture
def hipaa_config():
    return GatewayConfig(openai_api_key="sk-test", hipaa_mode=True, deidentify_before_call=True)

@pytest.fixture
def plain_config():
    return GatewayConfig(openai_api_key="sk-test", hipaa_mode=False, deidentify_before_call=True)

@pytest.fixture
def opted_out_config():
    return GatewayConfig(openai_api_key="sk-test", hipaa_mode=True, deidentify_before_call=False)
