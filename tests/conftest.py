# tests/conftest.py

import pytest

from initres.models.connection import ConnectionConfig


@pytest.fixture(autouse=True)
def isolate_service_account_token(monkeypatch, tmp_path):
    """
    Autouse fixture pointing the service account token path at a file that
    does not exist, so tests never pick up a real in-cluster token. Tests that
    need a token write it to the returned path.
    """
    from initres.core.config import config

    token_path = tmp_path / "serviceaccount" / "token"
    monkeypatch.setattr(config, "SERVICE_ACCOUNT_TOKEN_FILE", str(token_path))
    return token_path


@pytest.fixture
def connection():
    """A plain-HTTP connection to a test Hawkular endpoint."""
    return ConnectionConfig(url="http://hawkular:8080", tenant="heapster", token="secret-token")
