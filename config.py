"""Relay configuration, read from the environment on every invocation."""
import os
from typing import Optional

from pydantic import BaseModel, ConfigDict

# --- Config ---
API_KEY_ENV = "DEEPSEEK_API_KEY"
DEEPSEEK_URL = "https://api.deepseek.com/v1/chat/completions"
DEEPSEEK_MODEL = "deepseek-chat"
MAX_TOKENS = 1200
TEMPERATURE = 0.7
UPSTREAM_TIMEOUT = 30.0  # seconds, whole exchange
USER_AGENT = "English-Learning-App/1.0"


class RelayConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_key: Optional[str] = None
    api_url: str = DEEPSEEK_URL
    model: str = DEEPSEEK_MODEL
    max_tokens: int = MAX_TOKENS
    temperature: float = TEMPERATURE
    timeout: float = UPSTREAM_TIMEOUT
    user_agent: str = USER_AGENT


def get_config() -> RelayConfig:
    """FastAPI dependency. Not cached: the key may be rotated between requests."""
    return RelayConfig(api_key=os.environ.get(API_KEY_ENV) or None)
