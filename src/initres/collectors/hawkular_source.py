# src/initres/collectors/hawkular_source.py

"""
HawkularSource estimates historical usage of a container image from the
usage series Heapster stores in Hawkular Metrics.
"""

import asyncio
import logging
import ssl
from datetime import datetime
from typing import List, Optional, Sequence, Union

from ..core.config import config
from ..core.connection import configure
from ..core.exceptions import ConfigurationError
from ..core.percentile import compute_percentile, to_samples, validate_percentile
from ..core.tag_query import build_tag_filter
from ..models.connection import ConnectionConfig
from ..models.metrics import Datapoint, MetricDefinition, ResourceKind, UsageEstimate
from ..utils.date_utils import ensure_utc
from .base_source import UsageSource
from .hawkular_client import HawkularClient

logger = logging.getLogger(__name__)


class HawkularSource(UsageSource):
    """
    Usage source backed by Hawkular Metrics.

    Use HawkularSource.create() to build one from an endpoint URI; the
    connection settings are fixed for the lifetime of the instance.
    """

    def __init__(
        self,
        connection: ConnectionConfig,
        client: HawkularClient,
        max_concurrent_reads: Optional[int] = None,
    ):
        self.connection = connection
        self.client = client
        self.max_concurrent_reads = max_concurrent_reads or config.MAX_CONCURRENT_READS

    @classmethod
    async def create(cls, uri: str) -> "HawkularSource":
        """
        Configure a source from its endpoint URI.

        Raises:
            ConfigurationError: If the URI or its credentials cannot be used.
        """
        connection = await configure(uri)
        try:
            client = HawkularClient(connection)
        except (ssl.SSLError, OSError, ValueError) as e:
            raise ConfigurationError(f"Failed to create Hawkular client for {connection.url}: {e}") from e

        logger.info("Initialised Hawkular source at %s for tenant '%s'", connection.url, connection.tenant)
        return cls(connection, client)

    @property
    def use_namespace(self) -> bool:
        # Stored for compatibility; queries are not scoped by namespace.
        return self.connection.use_namespace

    async def close(self):
        await self.client.close()

    async def get_usage_percentile(
        self,
        kind: Union[ResourceKind, str],
        percentile: int,
        image: str,
        namespace: str,
        exact_match: bool,
        start: datetime,
        end: datetime,
    ) -> UsageEstimate:
        """
        Merge every series matching the image and compute the percentile over
        their datapoints in [start, end).

        A failure of the definitions lookup or of any single read aborts the
        call; no partial estimate is returned.
        """
        validate_percentile(percentile)
        start, end = ensure_utc(start), ensure_utc(end)
        if start > end:
            raise ValueError(f"start ({start.isoformat()}) must not be after end ({end.isoformat()})")

        tags = build_tag_filter(kind, image, exact_match)
        definitions = await self.client.definitions(tags)
        logger.debug("Found %d metric definition(s) for %s", len(definitions), tags)

        datapoints = await self._read_all(definitions, start, end)
        samples = to_samples(dp.value for dp in datapoints)
        value, count = compute_percentile(samples, percentile)

        logger.info(
            "Estimated p%d %s usage of '%s' as %d from %d sample(s)",
            percentile,
            ResourceKind(kind).value,
            image,
            value,
            count,
        )
        return UsageEstimate(value=value, count=count)

    async def _read_all(
        self, definitions: Sequence[MetricDefinition], start: datetime, end: datetime
    ) -> List[Datapoint]:
        """
        Read all series concurrently. The first failure cancels the reads
        still in flight and is re-raised.
        """
        semaphore = asyncio.Semaphore(self.max_concurrent_reads)

        async def _read(definition: MetricDefinition) -> List[Datapoint]:
            async with semaphore:
                return await self.client.read_metric(definition.type, definition.id, start, end)

        tasks = [asyncio.create_task(_read(definition)) for definition in definitions]
        try:
            results = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        return [datapoint for series in results for datapoint in series]
