import pytest

from tours_bridge.core.config import Settings
from tours_bridge.core.exceptions import ConfigurationError
from tours_bridge.infrastructure.auth import (
    ACCESS_KEY_HEADER_ALIASES,
    SECRET_KEY_HEADER_ALIASES,
    VENDOR_ID_HEADER,
    AuthMode,
    CredentialResolver,
)


def test_keypair_mode_sends_every_alias():
    credentials = CredentialResolver(access_key="ak", secret_key="sk").resolve()

    assert credentials.mode is AuthMode.KEYPAIR
    for name in ACCESS_KEY_HEADER_ALIASES:
        assert credentials.headers[name] == "ak"
    for name in SECRET_KEY_HEADER_ALIASES:
        assert credentials.headers[name] == "sk"
    assert "Authorization" not in credentials.headers
    assert credentials.headers["Content-Type"] == "application/json"


def test_canonical_header_names_lead_the_alias_lists():
    assert ACCESS_KEY_HEADER_ALIASES[0] == "X-Bokun-AccessKey"
    assert SECRET_KEY_HEADER_ALIASES[0] == "X-Bokun-SecretKey"


def test_token_mode_takes_precedence_over_keypair():
    credentials = CredentialResolver(access_key="ak", secret_key="sk", token="tok").resolve()

    assert credentials.mode is AuthMode.TOKEN
    assert credentials.headers["Authorization"] == "Bearer tok"
    for name in ACCESS_KEY_HEADER_ALIASES + SECRET_KEY_HEADER_ALIASES:
        assert name not in credentials.headers


def test_vendor_header_attached_when_configured():
    with_vendor = CredentialResolver(token="tok", vendor_id="v-9").resolve()
    without_vendor = CredentialResolver(token="tok").resolve()

    assert with_vendor.headers[VENDOR_ID_HEADER] == "v-9"
    assert VENDOR_ID_HEADER not in without_vendor.headers


@pytest.mark.parametrize(
    "material",
    [
        {},
        {"access_key": "ak"},
        {"secret_key": "sk"},
        {"access_key": "", "secret_key": "", "token": ""},
    ],
)
def test_missing_credentials_is_a_configuration_error(material):
    with pytest.raises(ConfigurationError):
        CredentialResolver(**material).resolve()


def test_headers_are_read_only():
    credentials = CredentialResolver(token="tok").resolve()

    with pytest.raises(TypeError):
        credentials.headers["Authorization"] = "Bearer other"


def test_describe_never_exposes_values():
    credentials = CredentialResolver(access_key="ak-secret-value", secret_key="sk-secret-value").resolve()

    summary = repr(credentials.describe())
    assert "ak-secret-value" not in summary
    assert "sk-secret-value" not in summary
    assert "X-Bokun-AccessKey" in summary


def test_from_settings_treats_blank_values_as_missing():
    settings = Settings(_env_file=None, BOKUN_API_TOKEN="  ", BOKUN_ACCESS_KEY="ak", BOKUN_SECRET_KEY="sk")

    credentials = CredentialResolver.from_settings(settings).resolve()

    assert credentials.mode is AuthMode.KEYPAIR
