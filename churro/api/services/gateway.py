import logging
from typing import Optional, Sequence

import requests

from churro.api.services.config import (
    ANTHROPIC_API_BASE,
    ANTHROPIC_API_KEY,
    ANTHROPIC_VERSION,
    MAX_TOKENS,
    MODEL_NAME,
    REQUEST_TIMEOUT,
)
from churro.api.services.models import ConversationTurn

logger = logging.getLogger(__name__)


class GatewayError(RuntimeError):
    """Base class for model gateway failures."""


class GatewayConfigurationError(GatewayError):
    """The gateway cannot be built, e.g. no API key."""


class GatewayTransportError(GatewayError):
    """The model call failed: network error, timeout or non-2xx status."""


class AnthropicGateway:
    """Sends one chat turn to the Anthropic Messages API and returns the raw text."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = MODEL_NAME,
        api_base: str = ANTHROPIC_API_BASE,
        max_tokens: int = MAX_TOKENS,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise GatewayConfigurationError("ANTHROPIC_API_KEY is not set in the environment")
        self.api_key = api_key
        self.model = model
        self.api_base = api_base.rstrip("/")
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def headers(self):
        return {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
        }

    def build_payload(self, user_message: str, system: Optional[str], history: Sequence[ConversationTurn]) -> dict:
        messages = [{"role": turn.role, "content": turn.content} for turn in history]
        messages.append({"role": "user", "content": user_message})
        payload = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": messages,
        }
        if system:
            payload["system"] = system
        return payload

    def complete(self, user_message: str, system: Optional[str] = None, history: Sequence[ConversationTurn] = ()) -> str:
        """Return the text the model produced, without interpreting it."""
        payload = self.build_payload(user_message, system, history)
        try:
            resp = self.session.post(
                f"{self.api_base}/messages",
                headers=self.headers,
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise GatewayTransportError(f"chat failed: {e}") from e

        if not resp.ok:
            raise GatewayTransportError(f"chat failed: {resp.status_code} {resp.text}")

        try:
            data = resp.json()
        except ValueError as e:
            raise GatewayTransportError(f"chat returned a non-JSON body: {e}") from e

        content = data.get("content") if isinstance(data, dict) else None
        if not content or not isinstance(content[0], dict):
            return ""
        return content[0].get("text") or ""


def create_gateway(api_key: Optional[str] = ANTHROPIC_API_KEY) -> Optional[AnthropicGateway]:
    """Build the gateway from config, or None when it is not configured."""
    try:
        return AnthropicGateway(api_key)
    except GatewayConfigurationError as e:
        logger.warning(f"{e}; /api/chat will answer with a not-configured message")
        return None
