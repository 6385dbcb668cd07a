"""
PagerDuty service records.

Converts PagerDuty REST API service objects (GET /services) into normalized
records. A PagerDuty service can belong to several teams; the first team is
treated as the owner.
"""

from __future__ import annotations

from typing import Any

from servicelink.matching.models import NormalizedService, ServiceSource
from servicelink.matching.normalizer import build_normalized_record


def service_team_name(service: dict[str, Any]) -> str:
    """First team of a PagerDuty service, or "" when it has none."""
    teams = service.get("teams") or []
    if not teams:
        return ""
    team = teams[0] or {}
    return team.get("summary") or team.get("name") or ""


def incident_record_from_service(
    service: dict[str, Any],
    use_advanced: bool = False,
) -> NormalizedService:
    """Build a normalized record from a PagerDuty service object."""
    return build_normalized_record(
        raw_name=service.get("name") or "",
        team_name=service_team_name(service),
        source_id=service.get("id") or "",
        source=ServiceSource.INCIDENT,
        use_advanced=use_advanced,
    )


def incident_records_from_payload(
    payload: list[dict[str, Any]] | dict[str, Any],
    use_advanced: bool = False,
) -> list[NormalizedService]:
    """
    Build records from a list of services or a {"services": [...]} response.

    Args:
        payload: PagerDuty services
        use_advanced: Use advanced preprocessing

    Returns:
        Normalized PagerDuty services in payload order
    """
    services = payload.get("services", []) if isinstance(payload, dict) else payload
    return [incident_record_from_service(s, use_advanced=use_advanced) for s in services]
