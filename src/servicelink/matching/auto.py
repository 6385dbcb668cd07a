"""
Auto-matching of PagerDuty services to Backstage components.

Runs the finder over already-loaded records, optionally restricted to one
owning team, and reports which services found a component and which did not.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

import structlog

from servicelink.matching.finder import best_match_per_incident_record, find_matches
from servicelink.matching.models import (
    MatchConfidence,
    MatchingConfig,
    MatchResult,
    NormalizedService,
)
from servicelink.matching.normalizer import normalize_basic, preprocess_advanced

logger = structlog.get_logger()

ALL_TEAMS = "all"


@dataclass
class AutoMatchReport:
    """Result of an auto-match run."""

    threshold: float
    team: str | None
    incident_count: int
    catalog_count: int
    matches: list[MatchResult] = field(default_factory=list)
    unmatched_incident_ids: list[str] = field(default_factory=list)

    @property
    def matched_count(self) -> int:
        """Number of PagerDuty services with at least one match."""
        return len({m.incident_record.source_id for m in self.matches})

    @property
    def comparisons(self) -> int:
        """Number of pairs scored."""
        return self.incident_count * self.catalog_count

    def count_confidence(self, confidence: MatchConfidence) -> int:
        return sum(1 for m in self.matches if m.confidence == confidence)

    @property
    def exact_matches(self) -> int:
        return self.count_confidence(MatchConfidence.EXACT)

    @property
    def high_confidence_matches(self) -> int:
        return self.count_confidence(MatchConfidence.HIGH)

    @property
    def medium_confidence_matches(self) -> int:
        return self.count_confidence(MatchConfidence.MEDIUM)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "threshold": self.threshold,
            "team": self.team,
            "incident_count": self.incident_count,
            "catalog_count": self.catalog_count,
            "comparisons": self.comparisons,
            "matched_count": self.matched_count,
            "exact_matches": self.exact_matches,
            "high_confidence_matches": self.high_confidence_matches,
            "medium_confidence_matches": self.medium_confidence_matches,
            "matches": [m.to_dict() for m in self.matches],
            "unmatched_incident_ids": self.unmatched_incident_ids,
        }


def filter_by_team(
    records: Sequence[NormalizedService],
    team: str | None,
    use_advanced: bool = False,
) -> list[NormalizedService]:
    """
    Keep records owned by a team.

    The team is normalized the same way the records' teams were, so a raw
    Backstage group name ("platform-team") selects records normalized from it.
    None or "all" keeps every record.
    """
    if team is None or team.lower() == ALL_TEAMS:
        return list(records)
    wanted = preprocess_advanced(team) if use_advanced else normalize_basic(team)
    return [r for r in records if r.team_name == wanted]


def auto_match(
    incident_records: Sequence[NormalizedService],
    catalog_records: Sequence[NormalizedService],
    config: MatchingConfig,
    team: str | None = None,
    best_only: bool = True,
    use_advanced: bool = False,
) -> AutoMatchReport:
    """
    Match PagerDuty services to Backstage components.

    Args:
        incident_records: Normalized PagerDuty services
        catalog_records: Normalized Backstage components
        config: Matching configuration (threshold)
        team: Only consider components owned by this team
        best_only: Collapse to one component per PagerDuty service
        use_advanced: Records were built with advanced preprocessing

    Returns:
        AutoMatchReport with ranked matches and unmatched service IDs
    """
    candidates = filter_by_team(catalog_records, team, use_advanced=use_advanced)

    matches = find_matches(incident_records, candidates, config)
    if best_only:
        matches = best_match_per_incident_record(matches)

    matched_ids = {m.incident_record.source_id for m in matches}
    unmatched = [r.source_id for r in incident_records if r.source_id not in matched_ids]

    report = AutoMatchReport(
        threshold=config.threshold,
        team=team,
        incident_count=len(incident_records),
        catalog_count=len(candidates),
        matches=matches,
        unmatched_incident_ids=unmatched,
    )

    logger.info(
        "auto_match_completed",
        team=team or ALL_TEAMS,
        threshold=config.threshold,
        matched=report.matched_count,
        unmatched=len(unmatched),
    )
    return report
