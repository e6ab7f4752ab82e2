"""
LLM Client - hosted chat-completion endpoint (Azure OpenAI deployment).

Requests authenticate with the ``api-key`` header. Each call is a single
request: failures are raised as UpstreamHttpError and never retried.
"""
import logging
from typing import Dict, List, Optional

import httpx

from meeting_tracker.core.config import settings
from meeting_tracker.core.exceptions import MalformedModelOutputError, UpstreamHttpError

logger = logging.getLogger(__name__)


class LLMClient:
    """Client for an OpenAI-style chat completions deployment."""

    def __init__(
        self,
        api_base: Optional[str] = None,
        deployment: Optional[str] = None,
        api_version: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        max_tokens: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_base = (api_base or settings.LLM_API_BASE).rstrip("/")
        self.deployment = deployment or settings.LLM_DEPLOYMENT
        self.api_version = api_version or settings.LLM_API_VERSION
        self.api_key = api_key if api_key is not None else settings.LLM_API_KEY
        self.timeout = timeout or float(settings.LLM_TIMEOUT)
        self.max_tokens = max_tokens or settings.LLM_MAX_TOKENS
        self.transport = transport

    @property
    def completions_url(self) -> str:
        return (
            f"{self.api_base}/openai/deployments/{self.deployment}"
            f"/chat/completions?api-version={self.api_version}"
        )

    def _headers(self) -> Dict[str, str]:
        if not self.api_key:
            raise UpstreamHttpError("LLM API key not configured")
        return {"api-key": self.api_key, "Content-Type": "application/json"}

    def _client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=timeout, transport=self.transport)

    async def chat(
        self,
        messages: List[Dict],
        temperature: float = 0.3,
        max_tokens: Optional[int] = None,
    ) -> str:
        """
        Send a chat completion request and return the response content.

        Args:
            messages: List of message dicts with 'role' and 'content' keys
            temperature: Sampling temperature (0.0 - 1.0)
            max_tokens: Maximum tokens to generate

        Returns:
            The assistant's response content, or "" if the response has none

        Raises:
            UpstreamHttpError: On transport failure or a non-2xx response
            MalformedModelOutputError: If a 2xx body is not a completion object
        """
        tokens_limit = max_tokens or self.max_tokens
        headers = self._headers()

        try:
            async with self._client(self.timeout) as client:
                resp = await client.post(
                    self.completions_url,
                    headers=headers,
                    json={
                        "messages": messages,
                        "max_tokens": tokens_limit,
                        "temperature": temperature,
                    },
                )
        except httpx.HTTPError as e:
            logger.error(f"LLM request failed: {e}")
            raise UpstreamHttpError(f"Failed to reach the LLM endpoint: {e}")

        if resp.status_code < 200 or resp.status_code >= 300:
            body = resp.text
            logger.error(
                f"LLM API error: {resp.status_code} {resp.reason_phrase} - {body[:500]}"
            )
            raise UpstreamHttpError(
                f"LLM API error: {resp.status_code}",
                upstream_status=resp.status_code,
                body=body,
            )

        try:
            data = resp.json()
            choices = data.get("choices") or []
            if not choices:
                logger.warning("No choices in LLM response")
                return ""
            content = (choices[0].get("message") or {}).get("content") or ""
        except (ValueError, AttributeError, TypeError, IndexError, KeyError) as e:
            logger.error(f"Unreadable LLM response body: {e} - {resp.text[:500]}")
            raise MalformedModelOutputError("LLM returned an unreadable response body")

        if not isinstance(content, str):
            raise MalformedModelOutputError("LLM returned non-text message content")
        return content

    async def health_check(self) -> Dict:
        """
        Check if the deployment is reachable and the key is accepted.

        Returns:
            Dict with 'status', 'deployment', 'api_base' and optional 'error' keys
        """
        try:
            async with self._client(10.0) as client:
                resp = await client.post(
                    self.completions_url,
                    headers=self._headers(),
                    json={
                        "messages": [{"role": "user", "content": "ping"}],
                        "max_tokens": 1,
                    },
                )

            if resp.status_code == 200:
                return {
                    "status": "healthy",
                    "deployment": self.deployment,
                    "api_base": self.api_base,
                }
            return {
                "status": "unhealthy",
                "deployment": self.deployment,
                "error": f"HTTP {resp.status_code}",
            }
        except (httpx.HTTPError, UpstreamHttpError) as e:
            return {
                "status": "unreachable",
                "deployment": self.deployment,
                "api_base": self.api_base,
                "error": str(e),
            }


# Default client instance
_default_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """Get the default LLM client instance (singleton)."""
    global _default_client
    if _default_client is None:
        _default_client = LLMClient()
    return _default_client
