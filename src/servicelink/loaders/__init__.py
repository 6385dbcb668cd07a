"""
Record loading for PagerDuty services and Backstage components.

Converts provider payloads into normalized records for matching.
"""

from servicelink.loaders.backstage import (
    catalog_record_from_entity,
    catalog_records_from_payload,
    entity_ref,
    owner_team_name,
)
from servicelink.loaders.pagerduty import (
    incident_record_from_service,
    incident_records_from_payload,
    service_team_name,
)
from servicelink.loaders.sources import (
    LoadedSources,
    LoaderContext,
    load_both_sources,
    load_catalog_components,
    load_incident_services,
    load_payload_file,
)

__all__ = [
    # PagerDuty
    "incident_record_from_service",
    "incident_records_from_payload",
    "service_team_name",
    # Backstage
    "catalog_record_from_entity",
    "catalog_records_from_payload",
    "entity_ref",
    "owner_team_name",
    # Loading
    "LoaderContext",
    "LoadedSources",
    "load_incident_services",
    "load_catalog_components",
    "load_both_sources",
    "load_payload_file",
]
