"""
Matching models for service reconciliation.

Provides the canonical comparable form of a service record from either
source, plus the scored pairing produced when two records are compared.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from servicelink.core.errors import ValidationError


class ServiceSource(Enum):
    """Registry a record was loaded from."""

    INCIDENT = "incident-source"  # PagerDuty service registry
    CATALOG = "catalog-source"  # Backstage component catalog


class MatchConfidence(Enum):
    """Confidence band of a match score."""

    EXACT = "exact"  # Canonical name and team identical
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# Lowest score in each band
HIGH_CONFIDENCE_SCORE = 90.0
MEDIUM_CONFIDENCE_SCORE = 80.0


def classify_confidence(score: float, exact_match: bool = False) -> MatchConfidence:
    """
    Band a match score.

    Examples:
        classify_confidence(100, exact_match=True) → EXACT
        classify_confidence(100) → HIGH
        classify_confidence(85) → MEDIUM
        classify_confidence(62.5) → LOW
    """
    if exact_match:
        return MatchConfidence.EXACT
    if score >= HIGH_CONFIDENCE_SCORE:
        return MatchConfidence.HIGH
    if score >= MEDIUM_CONFIDENCE_SCORE:
        return MatchConfidence.MEDIUM
    return MatchConfidence.LOW


@dataclass(frozen=True)
class NormalizedService:
    """Canonical comparable form of a raw service record."""

    raw_name: str  # Original display name, never modified
    normalized_name: str
    team_name: str  # "" means no team
    acronym: str  # "" means no acronym
    source_id: str  # PagerDuty service ID or Backstage entity ref
    source: ServiceSource

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "raw_name": self.raw_name,
            "normalized_name": self.normalized_name,
            "team_name": self.team_name,
            "acronym": self.acronym,
            "source_id": self.source_id,
            "source": self.source.value,
        }


@dataclass(frozen=True)
class ScoreBreakdown:
    """How a match score was derived. Explains the score, never recomputes it."""

    base_score: float  # Jaro-Winkler similarity on normalized names (0-100)
    exact_match: bool  # Canonical name AND team identical
    team_match: bool  # +10
    acronym_match: bool  # +5
    raw_score: float  # Before capping at 100

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "base_score": self.base_score,
            "exact_match": self.exact_match,
            "team_match": self.team_match,
            "acronym_match": self.acronym_match,
            "raw_score": self.raw_score,
        }


@dataclass(frozen=True)
class MatchResult:
    """A scored pairing of an incident-management service and a catalog component."""

    incident_record: NormalizedService
    catalog_record: NormalizedService
    score: float  # 0-100, rounded to 2 decimals
    score_breakdown: ScoreBreakdown

    @property
    def confidence(self) -> MatchConfidence:
        return classify_confidence(self.score, self.score_breakdown.exact_match)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "incident_record": self.incident_record.to_dict(),
            "catalog_record": self.catalog_record.to_dict(),
            "score": self.score,
            "confidence": self.confidence.value,
            "score_breakdown": self.score_breakdown.to_dict(),
        }


@dataclass(frozen=True)
class MatchingConfig:
    """Per-invocation matching configuration."""

    threshold: float  # Minimum acceptable score (0-100)

    def __post_init__(self) -> None:
        if not 0 <= self.threshold <= 100:
            raise ValidationError(
                f"Threshold must be between 0 and 100, got {self.threshold}",
                details={"threshold": self.threshold},
            )
