"""Gemini completion client over the REST generateContent endpoint."""

import logging
from typing import Any, Optional

import httpx

from ..config import DEFAULT_GEMINI_BASE_URL, DEFAULT_GEMINI_MODEL, GeneratorConfig

logger = logging.getLogger(__name__)


class RemoteGenerationError(RuntimeError):
    def __init__(self, message: str, kind: str, status_code: Optional[int] = None):
        super().__init__(f"Gemini request failed ({kind}): {message}")
        self.kind = kind
        self.status_code = status_code


class GeminiClient:
    """Single-shot Gemini text completion. Every failure surfaces as RemoteGenerationError."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_GEMINI_MODEL,
        base_url: str = DEFAULT_GEMINI_BASE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise RuntimeError("api_key is required for GeminiClient")
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_config(
        cls,
        config: GeneratorConfig,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "GeminiClient":
        return cls(
            api_key=api_key or config.gemini_api_key or "",
            model=config.gemini_model,
            base_url=config.gemini_base_url,
            timeout=config.request_timeout_seconds,
            transport=transport,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def complete(self, prompt_text: str) -> str:
        payload = {"contents": [{"role": "user", "parts": [{"text": prompt_text}]}]}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                logger.info("Calling Gemini model %s", self.model)
                response = await client.post(
                    self.endpoint,
                    params={"key": self.api_key},
                    json=payload,
                )
            except httpx.TimeoutException as e:
                raise RemoteGenerationError(str(e) or "request timed out", kind="timeout") from e
            except httpx.HTTPError as e:
                raise RemoteGenerationError(str(e) or e.__class__.__name__, kind="transport") from e

        if response.status_code == 429:
            raise RemoteGenerationError(
                response.text, kind="quota_exceeded", status_code=response.status_code
            )
        if response.status_code != 200:
            raise RemoteGenerationError(
                f"returned {response.status_code}: {response.text}",
                kind="http_status",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise RemoteGenerationError("response body is not JSON", kind="malformed_response") from e

        return _extract_text(data)


def _extract_text(data: Any) -> str:
    try:
        parts = data["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError) as e:
        raise RemoteGenerationError(
            "response has no candidate content", kind="malformed_response"
        ) from e

    text = "".join(part.get("text", "") for part in parts if isinstance(part, dict))
    if not text.strip():
        raise RemoteGenerationError("no text content found in response", kind="empty_output")
    return text
