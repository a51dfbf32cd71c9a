import logging
import os
import litellm
from typing import Optional, Dict, Any, List

from app.config import settings

logger = logging.getLogger(__name__)

litellm.drop_params = True

# Providers whose model strings need a litellm routing prefix
PREFIXED_PROVIDERS = ("groq", "openrouter", "ollama")

PROVIDER_ENV_KEYS = {
    "groq": "GROQ_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}


class AIClient:

    def __init__(self):
        self.provider = settings.ai_provider
        self.model = self._get_model_string()
        self._configure_provider()

    def _get_model_string(self) -> str:
        model = settings.ai_model

        if self.provider in PREFIXED_PROVIDERS and not model.startswith(f"{self.provider}/"):
            return f"{self.provider}/{model}"
        return model

    def _configure_provider(self):
        if self.provider == "openrouter":
            litellm.api_base = "https://openrouter.ai/api/v1"
        elif self.provider == "ollama":
            litellm.api_base = settings.ai_base_url or "http://localhost:11434"

    def _api_key(self) -> Optional[str]:
        return {
            "groq": settings.groq_api_key,
            "openrouter": settings.openrouter_api_key,
            "openai": settings.openai_api_key,
            "anthropic": settings.anthropic_api_key,
        }.get(self.provider)

    async def chat(
        self,
        messages: List[Dict[str, str]],
        temperature: float = 0.3,
        max_tokens: int = 800
    ) -> Optional[str]:
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

        env_name = PROVIDER_ENV_KEYS.get(self.provider)
        env_key = self._api_key()

        try:
            if env_name and env_key:
                os.environ[env_name] = env_key

            response = await litellm.acompletion(**kwargs)
            return response.choices[0].message.content
        except Exception as e:
            logger.error(f"AI completion error: {e}")
            raise
        finally:
            if env_name and env_key:
                os.environ.pop(env_name, None)


_ai_client: Optional[AIClient] = None

def get_ai_client() -> AIClient:
    global _ai_client
    if _ai_client is None:
        _ai_client = AIClient()
    return _ai_client
