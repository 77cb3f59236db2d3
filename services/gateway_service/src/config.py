from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

class GatewayConfig(BaseSettings):

    # Read once per process; passed explicitly into every gateway call
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    # Core
    service_name: str = "ai-gateway"
    environment: str = "local"
    log_level: str = "INFO"
    use_cloud_trace: bool = False

    # Provider
    ai_provider: Literal["openai", "ollama", "openrouter"] = "openai"
    ai_model: str = "gpt-4o-mini"
    openai_api_key: Optional[str] = None
    openrouter_api_key: Optional[str] = None
    ollama_base_url: Optional[str] = None
    provider_timeout_s: float = 60.0
    temperature: float = 0.4

    # Compliance policy
    hipaa_mode: bool = False
    deidentify_before_call: bool = True

settings = GatewayConfig()
