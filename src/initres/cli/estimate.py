# src/initres/cli/estimate.py
import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.config import config
from ..core.exceptions import InitresError
from ..core.factory import create_data_source
from ..models.metrics import ResourceKind, UsageEstimate
from ..utils.date_utils import parse_duration

logger = logging.getLogger(__name__)


async def _estimate(
    uri: str,
    source_kind: str,
    kind: ResourceKind,
    percentile: int,
    image: str,
    namespace: str,
    exact_match: bool,
    start: datetime,
    end: datetime,
) -> UsageEstimate:
    async with await create_data_source(uri, kind=source_kind) as source:
        return await source.get_usage_percentile(kind, percentile, image, namespace, exact_match, start, end)


def estimate(
    image: Annotated[str, typer.Option("--image", help="Container image, e.g. 'nginx:1.25'.")],
    kind: Annotated[ResourceKind, typer.Option("--kind", help="Resource to estimate.")] = ResourceKind.CPU,
    percentile: Annotated[
        int, typer.Option("--percentile", min=1, max=100, help="Usage percentile to report.")
    ] = config.DEFAULT_PERCENTILE,
    window: Annotated[
        str, typer.Option("--window", help="How far back to look (e.g. '12h', '7d').")
    ] = config.DEFAULT_WINDOW,
    namespace: Annotated[str, typer.Option("--namespace", help="Namespace of the workload.")] = "",
    exact: Annotated[
        bool, typer.Option("--exact/--no-exact", help="Match the image tag exactly instead of any tag.")
    ] = False,
    source: Annotated[
        Optional[str], typer.Option("--source", help="Metrics backend URI. Defaults to INITRES_SOURCE_URI.")
    ] = None,
    source_kind: Annotated[str, typer.Option("--source-kind", help="Usage source implementation.")] = "hawkular",
):
    """
    Estimate the usage percentile of containers running an image.
    """
    uri = source or config.INITRES_SOURCE_URI
    if not uri:
        raise typer.BadParameter("No metrics backend configured; set INITRES_SOURCE_URI.", param_hint="--source")

    try:
        duration = parse_duration(window)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--window")

    end = datetime.now(timezone.utc)
    start = end - duration

    try:
        result = asyncio.run(_estimate(uri, source_kind, kind, percentile, image, namespace, exact, start, end))
    except (InitresError, ValueError) as e:
        logger.error(f"Error in estimate command: {e}")
        typer.echo(f"No estimate available: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"p{percentile} {kind.value} usage of {image}: {result.value} ({result.count} samples)")
