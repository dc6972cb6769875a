"""Anthropic Messages API client used as the rename-inference oracle.

This module provides an async HTTP client with bounded retries, error mapping
and request logging. It implements :class:`SemanticOracle`.
"""

import time
from typing import Any

import httpx

from tf_schema_diff.config import OracleConfig
from tf_schema_diff.exceptions import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    NetworkError,
    RateLimitError,
    ServerError,
)
from tf_schema_diff.utils.logging import get_logger, log_api_request, truncate_payload
from tf_schema_diff.utils.retry import call_with_retry

logger = get_logger(__name__)

MESSAGES_ENDPOINT = "/v1/messages"


class AnthropicOracle:
    """Async client for the Anthropic Messages API.

    Each prompt is sent as a single user message. Network errors, rate limits
    and 5xx responses are retried up to ``config.max_retries`` attempts;
    everything else surfaces immediately as an :class:`OracleError`.
    """

    def __init__(
        self,
        config: OracleConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the oracle client.

        Args:
            config: Oracle configuration (API key, model, retry policy)
            transport: Optional httpx transport, used to stub the network
        """
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

        logger.debug(
            "oracle_client_initialized",
            base_url=config.base_url,
            model=config.model,
            max_retries=config.max_retries,
        )

    def _build_headers(self) -> dict[str, str]:
        return {
            "x-api-key": self.config.api_key or "",
            "anthropic-version": self.config.api_version,
            "content-type": "application/json",
            "accept": "application/json",
        }

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the underlying HTTP client.

        Raises:
            ConfigurationError: If no API key is configured
        """
        if self._client is None:
            if not self.config.api_key:
                raise ConfigurationError(
                    "No oracle API key configured. Set CLAUDE_API_KEY (or ANTHROPIC_API_KEY)."
                )
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                headers=self._build_headers(),
                timeout=httpx.Timeout(self.config.timeout, connect=10.0),
                transport=self._transport,
            )
        return self._client

    def _build_payload(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.config.model,
            "max_tokens": self.config.max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }

    async def complete(self, prompt: str) -> str:
        """Send ``prompt`` and return the text of the first content block.

        Raises:
            OracleError: When the call fails after all retry attempts
        """
        response = await call_with_retry(
            self._send,
            self._build_payload(prompt),
            max_attempts=self.config.max_retries,
            min_wait=self.config.retry_min_wait,
            max_wait=self.config.retry_max_wait,
        )
        return self._extract_text(response)

    async def _send(self, payload: dict[str, Any]) -> dict[str, Any]:
        client = self.client
        url = MESSAGES_ENDPOINT

        logger.debug(
            "oracle_request_payload",
            url=url,
            payload=truncate_payload(payload),
        )

        start_time = time.time()

        try:
            response = await client.post(url, json=payload)
        except httpx.TimeoutException as e:
            logger.error("timeout_error", url=url, error=str(e))
            raise NetworkError(f"Request timeout: {e}") from e
        except httpx.TransportError as e:
            logger.error("network_error", url=url, error=str(e))
            raise NetworkError(f"Network error: {e}") from e

        duration_ms = (time.time() - start_time) * 1000
        log_api_request(
            logger,
            method="POST",
            url=url,
            status_code=response.status_code,
            duration_ms=duration_ms,
            model=payload["model"],
        )

        if response.status_code >= 400:
            self._handle_error_response(response)

        try:
            return response.json()
        except ValueError as e:
            raise APIError(
                message=f"Response is not JSON: {truncate_payload(response.text, 500)}",
                status_code=response.status_code,
            ) from e

    def _handle_error_response(self, response: httpx.Response) -> None:
        """Raise the exception matching an error response.

        Raises:
            AuthenticationError: For 401/403 responses
            RateLimitError: For 429 responses
            ServerError: For 5xx responses (529 overloaded included)
            APIError: For other error responses
        """
        status_code = response.status_code

        try:
            error_data = response.json()
        except ValueError:
            error_data = {"detail": response.text}

        if not isinstance(error_data, dict):
            error_data = {"detail": str(error_data)}

        error = error_data.get("error")
        if isinstance(error, dict):
            error_message = error.get("message", "Unknown error")
        else:
            error_message = error_data.get("detail", "Unknown error")

        if status_code in (401, 403):
            raise AuthenticationError(
                message=f"Authentication failed: {error_message}",
                status_code=status_code,
                response=error_data,
            )
        elif status_code == 429:
            retry_after = response.headers.get("retry-after")
            raise RateLimitError(
                message="Rate limit exceeded",
                status_code=status_code,
                response=error_data,
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
            )
        elif status_code >= 500:
            raise ServerError(
                message=f"Server error: {error_message}",
                status_code=status_code,
                response=error_data,
            )
        else:
            raise APIError(
                message=f"API error: {error_message}",
                status_code=status_code,
                response=error_data,
            )

    @staticmethod
    def _extract_text(response: dict[str, Any]) -> str:
        content = response.get("content")
        if not content or not isinstance(content, list):
            raise APIError(message="Response has no content blocks", response=response)

        first = content[0]
        if not isinstance(first, dict) or first.get("type") != "text":
            raise APIError(message="First content block is not text", response=response)

        return first.get("text", "")

    async def close(self) -> None:
        """Close the HTTP client and clean up resources."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.debug("oracle_client_closed")

    async def __aenter__(self) -> "AnthropicOracle":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
