from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from enum import Enum


class HttpMethod(str, Enum):
    """Enum defining supported HTTP methods."""
    GET = "GET"
    POST = "POST"


class APIConnector(ABC):
    """
    Abstract base interface for API connectors.

    A connector owns transport concerns only: building URLs, attaching
    credentials, enforcing the timeout, and turning every failure into an
    UpstreamError. It knows nothing about the shape of the payloads.
    """

    @abstractmethod
    async def request(
        self,
        method: HttpMethod,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> Any:
        """
        Makes a single HTTP request to the external API.

        Args:
            method: HTTP method to use
            path: Path relative to the API base URL
            params: Optional query parameters
            json: Optional JSON request body

        Returns:
            Any: Parsed JSON response body

        Raises:
            UpstreamError: On a non-2xx response, a transport failure,
                a timeout, or an unreadable response body
        """

    @abstractmethod
    async def aclose(self) -> None:
        """Release the underlying HTTP resources."""

    def build_url(self, base_url: str, path: str, version: Optional[str] = None) -> str:
        """
        Builds a complete URL from components.

        Args:
            base_url: The base URL of the API
            path: The path to the specific resource
            version: Optional API version string

        Returns:
            str: The complete URL
        """
        url = base_url.rstrip('/')
        if version:
            url += f"/{version.strip('/')}"
        url += f"/{path.lstrip('/')}"
        return url
