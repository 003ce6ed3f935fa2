# src/initres/collectors/base_source.py
"""
This module defines the abstract base class for historical usage sources.
Admission-time callers only depend on this interface, so backends are
interchangeable.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Union

from ..models.metrics import ResourceKind, UsageEstimate


class UsageSource(ABC):
    """
    Abstract Base Class for all historical usage sources.
    """

    @abstractmethod
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
        Estimate the given usage percentile of containers running image
        between start and end. Any failure means no estimate is available.
        """
        pass

    async def close(self):
        """
        Clean up resources (e.g., close HTTP sessions or API clients).
        """
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
