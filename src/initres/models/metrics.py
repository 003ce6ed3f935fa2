# src/initres/models/metrics.py
"""
Pydantic models for the data exchanged with the metrics backend and the
estimate returned to admission-time callers.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ResourceKind(str, Enum):
    """Resource kinds that can be estimated from historical usage."""

    CPU = "cpu"
    MEMORY = "memory"


# Metric descriptor names under which Heapster stores container usage.
METRIC_NAMES = {
    ResourceKind.CPU: "cpu/usage",
    ResourceKind.MEMORY: "memory/usage",
}


class MetricDefinition(BaseModel):
    """
    Backend identity of one time series matching a tag filter.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: str
    type: str = Field(..., description="Series type, e.g. 'gauge' or 'counter'")
    tenant_id: Optional[str] = Field(None, alias="tenantId")
    tags: Dict[str, str] = Field(default_factory=dict)


class Datapoint(BaseModel):
    """
    A single raw sample of a series. The value is kept as returned by the
    backend and converted to float only during aggregation.
    """

    model_config = ConfigDict(extra="ignore")

    timestamp: int = Field(..., description="Unix timestamp in milliseconds")
    value: Any = None


class UsageEstimate(BaseModel):
    """
    Percentile usage estimate for one image and resource kind.
    """

    value: int = Field(..., description="Percentile usage, truncated toward zero")
    count: int = Field(..., description="Number of samples the estimate was computed from")
