"""
Match finding across the full PagerDuty x Backstage cross product.

Every incident-management record is scored against every catalog record,
filtered by threshold and sorted by score (highest first), then by
incident-management service name so equal scores render in a stable order.
"""

from __future__ import annotations

from typing import Sequence

import structlog

from servicelink.matching.models import MatchingConfig, MatchResult, NormalizedService
from servicelink.matching.scorer import score_pair

logger = structlog.get_logger()


def _ranking_key(match: MatchResult) -> tuple[float, str]:
    return (-match.score, match.incident_record.raw_name)


def find_matches(
    incident_records: Sequence[NormalizedService],
    catalog_records: Sequence[NormalizedService],
    config: MatchingConfig,
) -> list[MatchResult]:
    """
    Find all matches at or above the threshold.

    Example:
        matches = find_matches(pd_services, bs_components, MatchingConfig(threshold=80))

    Args:
        incident_records: Normalized PagerDuty services
        catalog_records: Normalized Backstage components
        config: Matching configuration (threshold)

    Returns:
        Matches sorted by score (highest first), then incident service name
    """
    matches = []
    for incident in incident_records:
        for catalog in catalog_records:
            match = score_pair(incident, catalog)
            if match.score >= config.threshold:
                matches.append(match)

    matches.sort(key=_ranking_key)

    logger.debug(
        "matching_completed",
        incident_records=len(incident_records),
        catalog_records=len(catalog_records),
        comparisons=len(incident_records) * len(catalog_records),
        matches=len(matches),
        threshold=config.threshold,
    )
    return matches


def group_by_incident_record(
    matches: Sequence[MatchResult],
) -> dict[str, list[MatchResult]]:
    """Group matches by PagerDuty service ID, keeping input order within each group."""
    grouped: dict[str, list[MatchResult]] = {}
    for match in matches:
        grouped.setdefault(match.incident_record.source_id, []).append(match)
    return grouped


def best_match_per_incident_record(matches: Sequence[MatchResult]) -> list[MatchResult]:
    """
    Keep only the best match for each PagerDuty service.

    Input is expected to be sorted already (as returned by find_matches); the
    first match of each service is taken as its best.

    Args:
        matches: Sorted match results

    Returns:
        One match per PagerDuty service, sorted like find_matches
    """
    best = [group[0] for group in group_by_incident_record(matches).values()]
    best.sort(key=_ranking_key)
    return best


def best_match_for_record(
    incident_record: NormalizedService,
    catalog_records: Sequence[NormalizedService],
    config: MatchingConfig,
) -> MatchResult | None:
    """
    Find the best catalog match for a single PagerDuty service.

    Among equal scores the first catalog record wins.

    Returns:
        Best match, or None if nothing meets the threshold
    """
    best: MatchResult | None = None
    for catalog in catalog_records:
        match = score_pair(incident_record, catalog)
        if match.score >= config.threshold and (best is None or match.score > best.score):
            best = match
    return best
