# src/initres/core/percentile.py
"""
Percentile selection over flattened usage samples.
"""

import logging
import math
from typing import Any, Iterable, List, Sequence, Tuple

from .exceptions import EmptyResultError

logger = logging.getLogger(__name__)


def to_samples(values: Iterable[Any]) -> List[float]:
    """
    Convert raw backend values to floats.

    Values that cannot be converted (availability strings, None, integers
    too large for a float, NaN or infinities) are dropped rather than failing
    the whole computation.
    """
    samples = []
    skipped = 0
    for value in values:
        try:
            f = float(value)
        except (TypeError, ValueError, OverflowError):
            skipped += 1
            continue
        if not math.isfinite(f):
            skipped += 1
            continue
        samples.append(f)

    if skipped:
        logger.debug("Skipped %d datapoint value(s) that could not be converted to float", skipped)
    return samples


def validate_percentile(percentile: int) -> None:
    """Raise ValueError unless percentile is an integer in (0, 100]."""
    if isinstance(percentile, bool) or not isinstance(percentile, int) or not 0 < percentile <= 100:
        raise ValueError(f"percentile must be an integer in (0, 100], got {percentile!r}")


def compute_percentile(samples: Sequence[float], percentile: int) -> Tuple[int, int]:
    """
    Return (value, count) for the given percentile of samples.

    The samples are sorted ascending and the value at index
    ceil(count * percentile / 100) - 1 is returned truncated toward zero,
    which is what downstream consumers expect for integer resource quantities.

    Raises:
        ValueError: If percentile is not an integer in (0, 100].
        EmptyResultError: If samples is empty.
    """
    validate_percentile(percentile)

    count = len(samples)
    if count == 0:
        raise EmptyResultError("No samples available to compute a percentile")

    ordered = sorted(samples)
    index = math.ceil(count * percentile / 100) - 1
    return int(ordered[index]), count
