# src/initres/core/connection.py
"""
Resolves a backend endpoint URI into an immutable ConnectionConfig.

Recognized query parameters:
- tenant: overrides DEFAULT_TENANT.
- useNamespace: stored on the connection, no further effect.
- useServiceAccount: read the in-cluster service account token as bearer token.
- auth: path to a kubeconfig file from which TLS settings are derived.
- insecure: skip certificate verification.
"""

import logging
from typing import Awaitable, Callable, Dict, NamedTuple, Optional, Sequence
from urllib.parse import parse_qs, urlsplit, urlunsplit

from kubernetes_asyncio import client as k8s_client
from kubernetes_asyncio import config as k8s_config

from ..models.connection import ConnectionConfig, CredentialSource, TLSSettings
from .config import config
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Heapster writes its usage metrics under this tenant.
DEFAULT_TENANT = "heapster"

# Boolean spellings accepted in Heapster-style source URIs.
_TRUE_VALUES = frozenset(("1", "t", "T", "TRUE", "true", "True"))
_FALSE_VALUES = frozenset(("0", "f", "F", "FALSE", "false", "False"))


class Credentials(NamedTuple):
    source: CredentialSource
    token: Optional[str]
    tls: TLSSettings


CredentialLink = Callable[[Dict[str, str]], Awaitable[Optional[Credentials]]]


def parse_bool(value: str) -> bool:
    """Parse a boolean query parameter, raising ValueError on anything unknown."""
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean value: {value!r}")


def _is_enabled(opts: Dict[str, str], key: str) -> bool:
    # Switches other than 'insecure' are lenient: unparsable means off.
    try:
        return parse_bool(opts.get(key, "false"))
    except ValueError:
        logger.debug("Ignoring unparsable value %r for '%s'", opts.get(key), key)
        return False


def read_service_account_token() -> Optional[str]:
    """Return the service account token, or None when it is not readable."""
    path = config.SERVICE_ACCOUNT_TOKEN_FILE
    try:
        with open(path, "r") as f:
            token = f.read().strip()
    except OSError as e:
        logger.debug("Service account token %s is not readable: %s", path, e)
        return None
    return token or None


async def load_tls_settings(path: str) -> TLSSettings:
    """
    Derive TLS settings from the kubeconfig at path.

    Raises:
        ConfigurationError: If the file cannot be loaded.
    """
    configuration = k8s_client.Configuration()
    try:
        await k8s_config.load_kube_config(
            config_file=path,
            client_configuration=configuration,
            persist_config=False,
        )
    except Exception as e:
        raise ConfigurationError(f"Failed to load auth configuration from '{path}': {e}") from e

    return TLSSettings(
        insecure_skip_verify=not configuration.verify_ssl,
        ca_file=configuration.ssl_ca_cert or None,
        cert_file=configuration.cert_file or None,
        key_file=configuration.key_file or None,
    )


async def _service_account_link(opts: Dict[str, str]) -> Optional[Credentials]:
    if not _is_enabled(opts, "useServiceAccount"):
        return None
    token = read_service_account_token()
    if token is None:
        return None
    return Credentials(CredentialSource.SERVICE_ACCOUNT, token, TLSSettings())


async def _auth_file_link(opts: Dict[str, str]) -> Optional[Credentials]:
    path = opts.get("auth")
    if not path:
        return None
    return Credentials(CredentialSource.AUTH_FILE, None, await load_tls_settings(path))


async def _default_link(opts: Dict[str, str]) -> Optional[Credentials]:
    return Credentials(CredentialSource.DEFAULT, None, TLSSettings())


# Ordered: the first link returning credentials wins.
CREDENTIAL_CHAIN: Sequence[CredentialLink] = (
    _service_account_link,
    _auth_file_link,
    _default_link,
)


async def resolve_credentials(opts: Dict[str, str]) -> Credentials:
    for link in CREDENTIAL_CHAIN:
        credentials = await link(opts)
        if credentials is not None:
            return credentials
    # _default_link always answers
    raise ConfigurationError("No credential source applied")


async def configure(endpoint_uri: str) -> ConnectionConfig:
    """
    Parse endpoint_uri and resolve tenant, credentials and TLS settings.

    Raises:
        ConfigurationError: On a malformed URI, an unparsable 'insecure'
            parameter or an auth file that cannot be loaded.
    """
    try:
        parts = urlsplit(endpoint_uri)
        # Accessing the port validates it.
        parts.port
    except ValueError as e:
        raise ConfigurationError(f"Malformed endpoint URI '{endpoint_uri}': {e}") from e

    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigurationError(f"Endpoint URI '{endpoint_uri}' must be an absolute http(s) URL")

    opts = {key: values[0] for key, values in parse_qs(parts.query, keep_blank_values=True).items()}

    insecure = None
    if "insecure" in opts:
        try:
            insecure = parse_bool(opts["insecure"])
        except ValueError as e:
            raise ConfigurationError(f"Invalid 'insecure' parameter: {e}") from e

    credentials = await resolve_credentials(opts)
    tls = credentials.tls
    if insecure is not None:
        tls = tls.model_copy(update={"insecure_skip_verify": insecure})

    connection = ConnectionConfig(
        url=urlunsplit((parts.scheme, parts.netloc, parts.path, "", "")),
        tenant=opts.get("tenant", DEFAULT_TENANT),
        token=credentials.token,
        tls=tls,
        use_namespace=_is_enabled(opts, "useNamespace"),
        credential_source=credentials.source,
    )
    logger.info("Resolved usage source connection %s", connection)
    return connection
