"""HTTP transport for the SUBJCT REST API.

This module provides the SubjctClient class which issues exactly one HTTP
request per call and returns the decoded response body.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Optional

import aiohttp

from ..config import SubjctConfig
from .errors import APIRequestError, APITimeoutError
from .models import HTTPMethod


class SubjctClient:
    """Issues requests against the SUBJCT API

    Args:
        config: Connection settings, read from the environment when omitted
    """

    def __init__(self, config: Optional[SubjctConfig] = None):
        self.config = config or SubjctConfig.from_env()

    def build_headers(self, use_secret_key: bool = False, headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """Build request headers, attaching the matching credential

        Privileged requests carry X-Secret-Key when a secret key is
        configured; everything else falls back to the bearer token.
        """
        request_headers = {"Content-Type": "application/json", **(headers or {})}

        if use_secret_key and self.config.secret_key:
            request_headers["X-Secret-Key"] = self.config.secret_key
        elif self.config.api_key:
            request_headers["Authorization"] = f"Bearer {self.config.api_key}"
        return request_headers

    async def request(
        self,
        path: str,
        method: HTTPMethod = HTTPMethod.GET,
        body: Optional[Any] = None,
        use_secret_key: bool = False,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Call one API endpoint

        Args:
            path: Endpoint path including any query string
            method: HTTP method to use
            body: JSON-serializable payload, None sends no body at all
            use_secret_key: Attach the secret-key credential
            headers: Extra headers merged over the defaults

        Returns:
            Decoded JSON when the response declares application/json,
            otherwise the raw response text

        Raises:
            APIRequestError: If the API answers with a non-2xx status
        """
        url = f"{self.config.base_url.rstrip('/')}{path}"
        request_headers = self.build_headers(use_secret_key, headers)
        data = json.dumps(body) if body is not None else None
        timeout = aiohttp.ClientTimeout(total=self.config.timeout)

        logging.info(f"[SubjctClient] {method.value} {url}")
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.request(method.value, url, data=data, headers=request_headers) as response:
                    return await self._process_response(response)
        except asyncio.TimeoutError:
            error = APITimeoutError(url, self.config.timeout)
            logging.error(f"[SubjctClient] {error}")
            raise error from None

    async def _process_response(self, response: aiohttp.ClientResponse) -> Any:
        """Turn the HTTP response into a result or an APIRequestError"""
        if not 200 <= response.status < 300:
            error_text = await response.text()
            logging.warning(f"[SubjctClient] API call failed: {response.method} {response.url} returned {response.status}")
            raise APIRequestError(response.status, response.reason or "", error_text)

        content_type = response.headers.get("Content-Type", "")
        if "application/json" in content_type:
            return json.loads(await response.text())
        return await response.text()


__all__ = [
    "SubjctClient",
]
