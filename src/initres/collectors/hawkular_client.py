# src/initres/collectors/hawkular_client.py
"""
Minimal async client for the Hawkular Metrics REST API: listing metric
definitions by tags and reading raw datapoints of one series.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional
from urllib.parse import quote, urlsplit

import httpx
from pydantic import ValidationError

from ..core.exceptions import BackendQueryError
from ..models.connection import ConnectionConfig
from ..models.metrics import Datapoint, MetricDefinition
from ..utils.date_utils import to_unix_millis
from ..utils.http_client import get_async_http_client

logger = logging.getLogger(__name__)

BASE_PATH = "hawkular/metrics"

# Series type -> REST collection name.
TYPE_ENDPOINTS = {
    "gauge": "gauges",
    "counter": "counters",
    "availability": "availability",
    "string": "strings",
}


class HawkularClient:
    """
    Talks to one Hawkular Metrics endpoint on behalf of one tenant.
    """

    def __init__(self, connection: ConnectionConfig, http_client: Optional[httpx.AsyncClient] = None):
        self.connection = connection
        base = connection.url.rstrip("/")
        # An explicit path in the endpoint URI is used as the API root.
        if urlsplit(connection.url).path.strip("/"):
            self.base_url = base
        else:
            self.base_url = f"{base}/{BASE_PATH}"
        self._client = http_client if http_client is not None else get_async_http_client(connection)

    async def close(self):
        await self._client.aclose()

    async def definitions(self, tags: Dict[str, str]) -> List[MetricDefinition]:
        """
        List the metric definitions whose tags match every entry of tags.
        Tag values may contain '*' wildcards.
        """
        params = {"tags": ",".join(f"{key}:{value}" for key, value in tags.items())}
        payload = await self._get_json(f"{self.base_url}/metrics", params)
        try:
            return [MetricDefinition.model_validate(item) for item in payload]
        except ValidationError as e:
            raise BackendQueryError(f"Malformed metric definition returned by {self.base_url}: {e}") from e

    async def read_metric(self, metric_type: str, metric_id: str, start: datetime, end: datetime) -> List[Datapoint]:
        """Read the raw datapoints of one series within [start, end)."""
        endpoint = TYPE_ENDPOINTS.get(metric_type)
        if endpoint is None:
            raise BackendQueryError(f"Unknown metric type '{metric_type}' for metric '{metric_id}'")

        url = f"{self.base_url}/{endpoint}/{quote(metric_id, safe='')}/data"
        params = {"start": to_unix_millis(start), "end": to_unix_millis(end)}
        payload = await self._get_json(url, params)
        try:
            return [Datapoint.model_validate(item) for item in payload]
        except ValidationError as e:
            raise BackendQueryError(f"Malformed datapoint returned for metric '{metric_id}': {e}") from e

    async def _get_json(self, url: str, params: Dict[str, Any]) -> List[Any]:
        try:
            logger.debug("Querying Hawkular at %s with %s", url, params)
            response = await self._client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise BackendQueryError(f"Request to {url} failed: {e}") from e

        # Hawkular answers 204 when nothing matches.
        if response.status_code == 204 or not response.content.strip():
            return []

        try:
            payload = response.json()
        except ValueError as e:
            logger.debug("Raw response content from %s: %s", url, response.text[:500])
            raise BackendQueryError(f"Non-JSON response from {url}") from e

        if not isinstance(payload, list):
            raise BackendQueryError(f"Expected a JSON list from {url}, got {type(payload).__name__}")
        return payload
