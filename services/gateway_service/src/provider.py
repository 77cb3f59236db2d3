import time
from typing import Any, Dict

from openai import APIConnectionError, APIError, APITimeoutError, OpenAI, OpenAIError, RateLimitError

from .config import GatewayConfig
from .exceptions import ProviderUnavailable
from .logging import jlog
from .prompt import ResponseShape

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"

def _make_client(config: GatewayConfig) -> OpenAI:
    if config.ai_provider == "ollama":
        if not config.ollama_base_url:
            raise ProviderUnavailable("Missing OLLAMA_BASE_URL for ollama provider")
        return OpenAI(base_url=f"{config.ollama_base_url.rstrip('/')}/v1", api_key="dummy")
    if config.ai_provider == "openrouter":
        if not config.openrouter_api_key:
            raise ProviderUnavailable("OPENROUTER_API_KEY not found")
        return OpenAI(base_url=OPENROUTER_BASE_URL, api_key=config.openrouter_api_key)
    if not config.openai_api_key:
        raise ProviderUnavailable("OPENAI_API_KEY not found")
    return OpenAI(api_key=config.openai_api_key)

def invoke(
    config: GatewayConfig,
    system_instruction: str,
    user_content: str,
    response_shape: ResponseShape,
    operation: str = "",
) -> str:
    """
    The single outbound call to the text-generation provider. One attempt, no retries.
    Returns the raw reply content; interpreting it is the parser's job.
    """
    messages = [
        {"role": "system", "content": system_instruction},
        {"role": "user", "content": user_content},
    ]
    kwargs: Dict[str, Any] = dict(
        model=config.ai_model,
        messages=messages,
        temperature=config.temperature,
        timeout=config.provider_timeout_s,
    )
    if response_shape is ResponseShape.STRUCTURED:
        kwargs["response_format"] = {"type": "json_object"}

    try:
        client = _make_client(config)
        start = time.time()
        completion = client.chat.completions.create(**kwargs)  # type: ignore
        elapsed = time.time() - start
    except ProviderUnavailable:
        raise
    except (APITimeoutError, APIConnectionError) as e:
        raise ProviderUnavailable(f"LLM timeout/conn: {e}") from e
    except RateLimitError as e:
        raise ProviderUnavailable(f"LLM rate limit: {e}") from e
    except APIError as e:
        raise ProviderUnavailable(f"LLM API error: {e}") from e
    except OpenAIError as e:
        raise ProviderUnavailable(f"LLM client error: {e}") from e

    try:
        content = completion.choices[0].message.content or ""
    except (AttributeError, IndexError, TypeError) as e:
        raise ProviderUnavailable(f"LLM reply had no choices: {e}") from e

    usage = getattr(completion, "usage", None)
    jlog(
        event="provider_ok",
        operation=operation,
        provider=config.ai_provider,
        model_name=config.ai_model,
        latency_ms=int(elapsed * 1000),
        prompt_tokens=getattr(usage, "prompt_tokens", None),
        completion_tokens=getattr(usage, "completion_tokens", None),
        total_tokens=getattr(usage, "total_tokens", None),
    )
    return content.strip()
