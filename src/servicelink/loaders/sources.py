"""
Loading records from both sources.

Fetching is delegated to callables supplied by the caller (an API client,
a cached snapshot, a test double); this module only turns what they return
into normalized records and runs both sources concurrently.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Awaitable, Callable

import structlog
import yaml

from servicelink.core.errors import ConfigurationError, LoaderError
from servicelink.loaders.backstage import catalog_records_from_payload
from servicelink.loaders.pagerduty import incident_records_from_payload
from servicelink.matching.models import NormalizedService

logger = structlog.get_logger()

Payload = list[dict[str, Any]] | dict[str, Any]
Fetcher = Callable[[], Awaitable[Payload]]


@dataclass
class LoaderContext:
    """
    Dependencies needed to load records from both sources.

    Attributes:
        fetch_services: Returns PagerDuty services
        fetch_entities: Returns Backstage catalog entities
        use_advanced: Use advanced preprocessing when normalizing
    """

    fetch_services: Fetcher
    fetch_entities: Fetcher
    use_advanced: bool = False


@dataclass
class LoadedSources:
    """Normalized records from both sources, ready for matching."""

    incident_records: list[NormalizedService]
    catalog_records: list[NormalizedService]

    @property
    def comparisons(self) -> int:
        return len(self.incident_records) * len(self.catalog_records)


async def load_incident_services(context: LoaderContext) -> list[NormalizedService]:
    """
    Load and normalize all PagerDuty services.

    Raises:
        LoaderError: If fetching or converting the services fails
    """
    try:
        payload = await context.fetch_services()
        return incident_records_from_payload(payload, use_advanced=context.use_advanced)
    except Exception as e:
        raise LoaderError(f"Failed to load PagerDuty services: {e}") from e


async def load_catalog_components(context: LoaderContext) -> list[NormalizedService]:
    """
    Load and normalize all Backstage components.

    Raises:
        LoaderError: If fetching or converting the entities fails
    """
    try:
        payload = await context.fetch_entities()
        return catalog_records_from_payload(payload, use_advanced=context.use_advanced)
    except Exception as e:
        raise LoaderError(f"Failed to load Backstage components: {e}") from e


async def load_both_sources(context: LoaderContext) -> LoadedSources:
    """
    Load both sources concurrently.

    Raises:
        LoaderError: If either source fails
    """
    try:
        incident_records, catalog_records = await asyncio.gather(
            load_incident_services(context),
            load_catalog_components(context),
        )
    except LoaderError as e:
        logger.warning("load_failed", error=e.message)
        raise LoaderError(f"Failed to load sources: {e.message}") from e

    loaded = LoadedSources(incident_records=incident_records, catalog_records=catalog_records)
    logger.info(
        "sources_loaded",
        incident_records=len(incident_records),
        catalog_records=len(catalog_records),
        comparisons=loaded.comparisons,
    )
    return loaded


def load_payload_file(path: str | Path) -> Payload:
    """
    Read a JSON or YAML payload file.

    Raises:
        ConfigurationError: If the file is missing or cannot be parsed
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Payload file not found: {path}", details={"path": str(path)})

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(
            f"Could not read payload file {path}: {e}", details={"path": str(path)}
        ) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Could not parse payload file {path}: {e}", details={"path": str(path)}
        ) from e

    if data is None:
        return []
    if not isinstance(data, (list, dict)):
        raise ConfigurationError(
            f"Payload file {path} must contain a list or an object",
            details={"path": str(path)},
        )

    logger.debug("loaded_payload", path=str(path))
    return data
