# src/initres/core/tag_query.py
"""
Builds the tag filter that selects the usage series of a container image.
"""

from typing import Dict, Union

from ..models.metrics import METRIC_NAMES, ResourceKind
from .exceptions import UnsupportedResourceError

CONTAINER_IMAGE_TAG = "container_base_image"
DESCRIPTOR_TAG = "descriptor_name"


def metric_name(kind: Union[ResourceKind, str]) -> str:
    """Return the Heapster metric descriptor name for a resource kind."""
    try:
        return METRIC_NAMES[ResourceKind(kind)]
    except (ValueError, KeyError):
        raise UnsupportedResourceError(f"Unsupported resource kind: {kind!r}") from None


def build_tag_filter(kind: Union[ResourceKind, str], image: str, exact_match: bool) -> Dict[str, str]:
    """
    Create the tag filter used to look up metric definitions.

    With exact_match the image must match as given; otherwise any tag of the
    same repository matches ("repo:tag" and "repo" both become "repo:*").
    """
    if not image:
        raise ValueError("image must not be empty")

    if exact_match:
        image_pattern = image
    else:
        repository = image.split(":", 1)[0]
        image_pattern = f"{repository}:*"

    return {
        DESCRIPTOR_TAG: metric_name(kind),
        CONTAINER_IMAGE_TAG: image_pattern,
    }
