"""
Backstage component records.

Converts Backstage catalog entities (GET /api/catalog/entities) into
normalized records keyed by entity reference, with the owning team taken
from spec.owner.
"""

from __future__ import annotations

from typing import Any

from servicelink.matching.models import NormalizedService, ServiceSource
from servicelink.matching.normalizer import build_normalized_record

COMPONENT_KIND = "component"
DEFAULT_NAMESPACE = "default"


def entity_ref(entity: dict[str, Any]) -> str:
    """
    Build the lowercase entity reference of a catalog entity.

    Examples:
        {"kind": "Component", "metadata": {"name": "Auth"}} → component:default/auth
    """
    metadata = entity.get("metadata") or {}
    kind = entity.get("kind", "")
    namespace = metadata.get("namespace") or DEFAULT_NAMESPACE
    name = metadata.get("name") or ""
    return f"{kind}:{namespace}/{name}".lower()


def owner_team_name(owner: str | None) -> str:
    """
    Extract the team name from a Backstage owner reference.

    Examples:
        group:default/platform-team → platform-team
        group:platform-team → platform-team
        platform-team → platform-team
    """
    if not owner:
        return ""
    for prefix in ("group:", "user:"):
        if owner.startswith(prefix):
            owner = owner[len(prefix) :]
            break
    return owner.split("/")[-1]


def catalog_record_from_entity(
    entity: dict[str, Any],
    use_advanced: bool = False,
) -> NormalizedService:
    """Build a normalized record from a Backstage catalog entity."""
    metadata = entity.get("metadata") or {}
    spec = entity.get("spec") or {}
    return build_normalized_record(
        raw_name=metadata.get("name") or "",
        team_name=owner_team_name(spec.get("owner")),
        source_id=entity_ref(entity),
        source=ServiceSource.CATALOG,
        use_advanced=use_advanced,
    )


def catalog_records_from_payload(
    payload: list[dict[str, Any]] | dict[str, Any],
    use_advanced: bool = False,
) -> list[NormalizedService]:
    """
    Build records for the Component entities in a list or {"items": [...]} response.

    Args:
        payload: Backstage catalog entities
        use_advanced: Use advanced preprocessing

    Returns:
        Normalized Backstage components in payload order
    """
    entities = payload.get("items", []) if isinstance(payload, dict) else payload
    return [
        catalog_record_from_entity(e, use_advanced=use_advanced)
        for e in entities
        if str(e.get("kind", "")).lower() == COMPONENT_KIND
    ]
