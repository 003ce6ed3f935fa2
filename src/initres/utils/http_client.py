import logging
import ssl
from typing import Union

import httpx

from ..core.config import config
from ..models.connection import ConnectionConfig, TLSSettings

logger = logging.getLogger(__name__)

TENANT_HEADER = "Hawkular-Tenant"


def build_ssl_context(tls: TLSSettings) -> Union[ssl.SSLContext, bool]:
    """
    Translate TLSSettings into the value httpx expects for 'verify'.

    Returns False when verification is skipped and no client certificate is
    configured, otherwise an SSLContext.
    """
    if tls.insecure_skip_verify and not tls.cert_file:
        return False

    context = ssl.create_default_context(cafile=tls.ca_file)
    if tls.insecure_skip_verify:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    if tls.cert_file:
        context.load_cert_chain(certfile=tls.cert_file, keyfile=tls.key_file)
    return context


def get_async_http_client(
    connection: ConnectionConfig,
    connect_timeout: float = None,
    read_timeout: float = None,
) -> httpx.AsyncClient:
    """
    Returns a configured httpx.AsyncClient for the metrics backend with:
    - Default timeouts (connect and read).
    - Standard User-Agent, tenant and bearer token headers.
    - TLS verification and client certificate from the connection.
    """
    c_timeout = connect_timeout if connect_timeout is not None else config.DEFAULT_TIMEOUT_CONNECT
    r_timeout = read_timeout if read_timeout is not None else config.DEFAULT_TIMEOUT_READ

    timeout = httpx.Timeout(r_timeout, connect=c_timeout)

    headers = {
        "User-Agent": config.USER_AGENT,
        TENANT_HEADER: connection.tenant,
    }
    if connection.token:
        headers["Authorization"] = f"Bearer {connection.token}"

    # No retries: a failed call is reported to the caller as-is.
    return httpx.AsyncClient(
        timeout=timeout,
        headers=headers,
        verify=build_ssl_context(connection.tls),
        follow_redirects=True,
    )
