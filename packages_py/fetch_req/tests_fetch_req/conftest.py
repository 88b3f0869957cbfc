import pytest

ENV_VARS = [
    "FETCH_REQ_TIMEOUT",
    "FETCH_REQ_RETRIES",
    "FETCH_REQ_DEBUG",
    "SSL_CERT_VERIFY",
    "NODE_TLS_REJECT_UNAUTHORIZED",
    "SSL_CERT_FILE",
    "REQUESTS_CA_BUNDLE",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep host environment from changing option defaults."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
