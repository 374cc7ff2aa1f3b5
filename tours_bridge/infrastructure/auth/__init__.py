"""Authentication handlers for the tours provider."""

from tours_bridge.infrastructure.auth.credentials import (
    ACCESS_KEY_HEADER_ALIASES,
    SECRET_KEY_HEADER_ALIASES,
    VENDOR_ID_HEADER,
    AuthMode,
    CredentialResolver,
    ResolvedCredentials,
)

__all__ = [
    "ACCESS_KEY_HEADER_ALIASES",
    "SECRET_KEY_HEADER_ALIASES",
    "VENDOR_ID_HEADER",
    "AuthMode",
    "CredentialResolver",
    "ResolvedCredentials",
]
