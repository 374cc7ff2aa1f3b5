import asyncio
import time
from typing import Any, Dict, Mapping, Optional

import httpx

from tours_bridge.adapters.interfaces.connector import APIConnector, HttpMethod
from tours_bridge.core.exceptions import UpstreamError
from tours_bridge.core.logging import get_logger

logger = get_logger(__name__)


class BokunConnector(APIConnector):
    """
    Connector for the Bokun activities API.

    Issues exactly one request per call over a shared ``httpx.AsyncClient``.
    There is no retry and no cache; every failure surfaces as UpstreamError.
    """

    def __init__(
        self,
        base_url: str,
        headers: Mapping[str, str],
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the Bokun connector.

        Args:
            base_url: Base URL for the provider API
            headers: Resolved credential headers attached to every call
            timeout: Deadline for one call, in seconds
            transport: Optional httpx transport (used to fake the provider in tests)
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.client = httpx.AsyncClient(
            headers=dict(headers),
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

        logger.info(f"Bokun connector initialized for {self.base_url}")

    async def request(
        self,
        method: HttpMethod,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> Any:
        url = self.build_url(self.base_url, path)

        try:
            start_time = time.time()

            # httpx timeouts apply per phase; wait_for caps the whole call.
            response = await asyncio.wait_for(
                self.client.request(
                    method.value,
                    url,
                    params=params or None,
                    json=json,
                ),
                timeout=self.timeout,
            )

            duration = time.time() - start_time
            logger.debug(
                f"Bokun API request completed in {duration:.2f}s",
                extra={"url": url, "method": method.value, "status_code": response.status_code}
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.error(f"Bokun API timeout after {self.timeout}s: {method.value} {url}")
            raise UpstreamError(
                detail=f"Upstream request timed out after {self.timeout:g}s",
                context={"url": url},
                original_exception=e,
            )
        except httpx.HTTPError as e:
            logger.error(f"Bokun API connection error: {str(e)}")
            raise UpstreamError(
                detail=f"Upstream connection failed: {str(e) or e.__class__.__name__}",
                context={"url": url},
                original_exception=e,
            )

        if not response.is_success:
            error_body = self._parse_error_response(response)
            logger.error(
                f"Bokun API error: {response.status_code}",
                extra={"url": url, "status_code": response.status_code, "error_info": error_body}
            )
            raise UpstreamError(
                status_code=response.status_code,
                detail=error_body,
                context={"url": url},
            )

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Bokun API returned a non-JSON body for {url}")
            raise UpstreamError(
                detail="Upstream returned an invalid JSON body",
                context={"url": url},
                original_exception=e,
            )

    def _parse_error_response(self, response: httpx.Response) -> Any:
        """
        Pull the most useful error description out of a failed response.

        Returns:
            The JSON body when it parses, else the body text, else the reason phrase
        """
        try:
            return response.json()
        except ValueError:
            text = response.text.strip()
            return text or response.reason_phrase or f"Upstream error {response.status_code}"

    async def aclose(self) -> None:
        await self.client.aclose()
