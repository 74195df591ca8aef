import logging
from typing import Dict, List

import requests

from webgen.inference.base import LLMClient
from webgen.ir.errors import ConfigurationError, TransportError


logger = logging.getLogger(__name__)

# Provider error bodies are kept for logs, not for users
MAX_ERROR_BODY = 2000


class ChatCompletionsClient(LLMClient):
    """
    Single-shot client for an OpenAI-compatible /chat/completions endpoint.

    One POST per call, no streaming, no retries. Any failure surfaces as
    TransportError.
    """

    def __init__(
        self,
        base_url: str,
        model: str,
        api_key: str,
        temperature: float = 0.7,
        max_tokens: int = 4000,
        top_p: float = 1.0,
        frequency_penalty: float = 0.0,
        presence_penalty: float = 0.0,
        timeout: float = 300,
    ):
        if not api_key:
            raise ConfigurationError("model provider API key is not configured")

        self.base_url = base_url.rstrip("/")
        self.model = model
        self.api_key = api_key
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.top_p = top_p
        self.frequency_penalty = frequency_penalty
        self.presence_penalty = presence_penalty
        self.timeout = timeout

    def build_payload(self, messages: List[Dict[str, str]]) -> dict:
        return {
            "messages": messages,
            "model": self.model,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "top_p": self.top_p,
            "frequency_penalty": self.frequency_penalty,
            "presence_penalty": self.presence_penalty,
        }

    def generate(self, messages: List[Dict[str, str]]) -> str:
        url = f"{self.base_url}/chat/completions"

        try:
            response = requests.post(
                url,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json=self.build_payload(messages),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("[Transport] request to %s failed: %s", url, e)
            raise TransportError(f"model provider unreachable: {e}") from e

        if not response.ok:
            body = response.text[:MAX_ERROR_BODY]
            logger.error(
                "[Transport] provider returned %s %s: %s",
                response.status_code,
                response.reason,
                body,
            )
            raise TransportError(
                f"model provider error: {response.status_code} {response.reason}",
                status_code=response.status_code,
                body=body,
            )

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            body = response.text[:MAX_ERROR_BODY]
            logger.error("[Transport] unexpected response shape: %s", body)
            raise TransportError(
                "model provider returned an unexpected response body",
                status_code=response.status_code,
                body=body,
            ) from e

        if not isinstance(content, str):
            raise TransportError(
                "model provider returned non-text content",
                status_code=response.status_code,
                body=response.text[:MAX_ERROR_BODY],
            )

        return content
