# storycomic/services/api_client.py

import httpx
from typing import Any, Dict, Optional, Type

from storycomic.utils.error_handler import ErrorCategory, ExternalServiceError
from storycomic.utils.logger import get_logger, summarize_for_logging

logger = get_logger(__name__)


class OpenAIApiClient:
    """
    Thin JSON-over-HTTP client shared by the completion and image services.
    Every request carries the bearer credential; non-2xx statuses, transport
    errors and unparseable bodies are raised as `error_cls`.
    """
    DEFAULT_TIMEOUT = 60.0

    def __init__(self, api_key: str, client: Optional[httpx.AsyncClient] = None):
        if not api_key:
            raise ValueError("API key must be provided.")
        self.api_key = api_key
        self.client = client or httpx.AsyncClient(timeout=self.DEFAULT_TIMEOUT)
        self.headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        }

    async def post_json(
            self,
            url: str,
            payload: Dict[str, Any],
            *,
            timeout: Optional[float] = None,
            error_cls: Type[ExternalServiceError] = ExternalServiceError,
            error_kwargs: Optional[Dict[str, Any]] = None,
            trace_id: str = "N/A",
    ) -> Dict[str, Any]:
        error_kwargs = error_kwargs or {}
        extra_log = {"trace_id": trace_id}
        request_timeout = timeout if timeout is not None else self.DEFAULT_TIMEOUT

        logger.debug(f"POST {url} payload={summarize_for_logging(payload)}", extra=extra_log)
        try:
            response = await self.client.post(url, json=payload, headers=self.headers, timeout=request_timeout)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.error(f"Request to {url} timed out after {request_timeout}s", extra=extra_log)
            raise error_cls(f"Request to {url} timed out", category=ErrorCategory.TIMEOUT, **error_kwargs) from e
        except httpx.HTTPStatusError as e:
            logger.error(
                f"API error: Status={e.response.status_code}, Response={e.response.text[:200]}",
                extra=extra_log
            )
            raise error_cls(
                f"API call failed (Status {e.response.status_code})",
                details={"status_code": e.response.status_code, "body": e.response.text[:500]},
                **error_kwargs
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Network error calling {url}: {e}", extra=extra_log)
            raise error_cls(f"Network error: {e}", category=ErrorCategory.NETWORK, **error_kwargs) from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from {url}: {response.text[:200]}", extra=extra_log)
            raise error_cls(f"Invalid JSON response: {e}", **error_kwargs) from e

        if not isinstance(data, dict):
            raise error_cls(f"Unexpected response type: {type(data).__name__}", **error_kwargs)
        return data

    async def close(self):
        if self.client and not self.client.is_closed:
            await self.client.aclose()
            logger.info("httpx client closed.")
