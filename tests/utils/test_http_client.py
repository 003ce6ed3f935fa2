# tests/utils/test_http_client.py

import ssl

import pytest

from initres.models.connection import ConnectionConfig, TLSSettings
from initres.utils.http_client import TENANT_HEADER, build_ssl_context, get_async_http_client


def test_insecure_without_client_cert_disables_verification():
    assert build_ssl_context(TLSSettings(insecure_skip_verify=True)) is False


def test_default_settings_verify_certificates():
    context = build_ssl_context(TLSSettings())

    assert isinstance(context, ssl.SSLContext)
    assert context.verify_mode == ssl.CERT_REQUIRED
    assert context.check_hostname is True


def test_missing_client_certificate_raises():
    with pytest.raises(OSError):
        build_ssl_context(TLSSettings(cert_file="/nonexistent/client.crt", key_file="/nonexistent/client.key"))


@pytest.mark.asyncio
async def test_client_carries_tenant_and_token(connection):
    async with get_async_http_client(connection) as client:
        assert client.headers[TENANT_HEADER] == "heapster"
        assert client.headers["Authorization"] == "Bearer secret-token"
        assert "User-Agent" in client.headers


@pytest.mark.asyncio
async def test_client_without_token_sends_no_authorization():
    connection = ConnectionConfig(url="http://hawkular:8080", tenant="team-a")
    async with get_async_http_client(connection, connect_timeout=1, read_timeout=2) as client:
        assert "Authorization" not in client.headers
        assert client.timeout.connect == 1
        assert client.timeout.read == 2
