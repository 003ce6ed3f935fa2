# src/initres/core/factory.py
"""
Factory function to instantiate the configured usage source.
"""

import logging

from ..collectors.base_source import UsageSource
from ..collectors.hawkular_source import HawkularSource
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

SOURCES = {
    "hawkular": HawkularSource,
}


async def create_data_source(uri: str, kind: str = "hawkular") -> UsageSource:
    """
    Build the usage source of the given kind from its endpoint URI.

    Raises:
        ConfigurationError: For an unknown source kind or an unusable URI.
    """
    source_cls = SOURCES.get(kind.lower())
    if source_cls is None:
        raise ConfigurationError(f"Unknown usage source '{kind}'. Supported: {', '.join(sorted(SOURCES))}")

    logger.info("Using %s usage source.", kind.lower())
    return await source_cls.create(uri)
