from .base_source import UsageSource
from .hawkular_client import HawkularClient
from .hawkular_source import HawkularSource

__all__ = [
    "HawkularClient",
    "HawkularSource",
    "UsageSource",
]
