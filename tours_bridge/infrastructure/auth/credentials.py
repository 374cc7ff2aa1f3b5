"""
Credential resolution for the tours provider.

The provider's exact header contract is not pinned down, so keypair mode sends
the access key and secret key under every header name it has been seen to
accept. Unknown headers are ignored upstream.
"""
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from tours_bridge.core.config import Settings
from tours_bridge.core.exceptions import ConfigurationError
from tours_bridge.core.logging import get_logger

logger = get_logger(__name__)


# Canonical name first. Keep every variant until the provider confirms one.
ACCESS_KEY_HEADER_ALIASES: Tuple[str, ...] = (
    "X-Bokun-AccessKey",
    "X-Bokun-Access-Key",
    "Bokun-AccessKey",
    "X-Access-Key",
    "X-Api-Key",
)

SECRET_KEY_HEADER_ALIASES: Tuple[str, ...] = (
    "X-Bokun-SecretKey",
    "X-Bokun-Secret-Key",
    "Bokun-SecretKey",
    "X-Secret-Key",
    "X-Api-Secret",
)

VENDOR_ID_HEADER = "X-Bokun-VendorId"

BASE_HEADERS: Mapping[str, str] = MappingProxyType({
    "Accept": "application/json",
    "Content-Type": "application/json",
})


class AuthMode(str, Enum):
    """Authentication schemes the resolver can select, in precedence order."""
    TOKEN = "token"
    KEYPAIR = "keypair"


@dataclass(frozen=True)
class ResolvedCredentials:
    """The selected auth mode and the read-only header set for every upstream call."""
    mode: AuthMode
    headers: Mapping[str, str] = field(default_factory=dict)

    def describe(self) -> Dict[str, object]:
        """Log-safe summary: header names only, never values."""
        return {"mode": self.mode.value, "headers": sorted(self.headers)}


class CredentialResolver:
    """Selects exactly one authentication scheme from the configured material."""

    def __init__(
        self,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        token: Optional[str] = None,
        vendor_id: Optional[str] = None,
    ):
        self.access_key = access_key or None
        self.secret_key = secret_key or None
        self.token = token or None
        self.vendor_id = vendor_id or None

    @classmethod
    def from_settings(cls, settings: Settings) -> "CredentialResolver":
        return cls(
            access_key=settings.BOKUN_ACCESS_KEY,
            secret_key=settings.BOKUN_SECRET_KEY,
            token=settings.BOKUN_API_TOKEN,
            vendor_id=settings.BOKUN_VENDOR_ID,
        )

    def select_mode(self) -> AuthMode:
        """
        Pick the authentication mode.

        Token mode wins over keypair mode. A lone access key or secret key is
        not enough for keypair mode.

        Raises:
            ConfigurationError: If neither a token nor a full keypair is configured
        """
        if self.token:
            return AuthMode.TOKEN
        if self.access_key and self.secret_key:
            return AuthMode.KEYPAIR

        missing = []
        if not self.access_key:
            missing.append("BOKUN_ACCESS_KEY")
        if not self.secret_key:
            missing.append("BOKUN_SECRET_KEY")
        raise ConfigurationError(
            "No provider credentials configured: set BOKUN_API_TOKEN, or both "
            f"BOKUN_ACCESS_KEY and BOKUN_SECRET_KEY (missing: {', '.join(missing)})"
        )

    def build_headers(self, mode: AuthMode) -> Dict[str, str]:
        headers = dict(BASE_HEADERS)

        if mode is AuthMode.TOKEN:
            headers["Authorization"] = f"Bearer {self.token}"
        else:
            for name in ACCESS_KEY_HEADER_ALIASES:
                headers[name] = self.access_key
            for name in SECRET_KEY_HEADER_ALIASES:
                headers[name] = self.secret_key

        if self.vendor_id:
            headers[VENDOR_ID_HEADER] = self.vendor_id

        return headers

    def resolve(self) -> ResolvedCredentials:
        """
        Resolve the credential material into the header set for upstream calls.

        Returns:
            ResolvedCredentials: Selected mode and immutable headers

        Raises:
            ConfigurationError: If no usable credentials are configured
        """
        mode = self.select_mode()
        credentials = ResolvedCredentials(
            mode=mode,
            headers=MappingProxyType(self.build_headers(mode)),
        )
        logger.info("Resolved provider credentials", extra={"auth": credentials.describe()})
        return credentials
