"""
Match scoring for a single pair of normalized records.

Scoring:
1. Canonical name AND canonical team identical → 100 (exact match)
2. Base score: Jaro-Winkler similarity of normalized names (0-100)
3. +10 if team names match
4. +5 if acronyms match
5. Cap at 100, round to 2 decimals
"""

from __future__ import annotations

import math

from rapidfuzz.distance import JaroWinkler

from servicelink.matching.models import MatchResult, NormalizedService, ScoreBreakdown

TEAM_BONUS = 10.0
ACRONYM_BONUS = 5.0
MAX_SCORE = 100.0


def name_similarity(a: str, b: str) -> float:
    """
    Jaro-Winkler similarity of two normalized names (0.0 - 1.0).

    Two empty names are identical (1.0); one empty name never matches (0.0).
    """
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    return JaroWinkler.similarity(a, b, prefix_weight=0.1)


def round_score(value: float) -> float:
    """Round half-up to 2 decimal places."""
    return math.floor(value * 100 + 0.5) / 100


def _both_equal(a: str, b: str) -> bool:
    # Empty on either side is "absent", never a match
    return a != "" and b != "" and a == b


def score_pair(incident: NormalizedService, catalog: NormalizedService) -> MatchResult:
    """
    Score an incident-management record against a catalog record.

    Args:
        incident: Normalized PagerDuty service
        catalog: Normalized Backstage component

    Returns:
        MatchResult with score and breakdown
    """
    team_match = _both_equal(incident.team_name, catalog.team_name)
    acronym_match = _both_equal(incident.acronym, catalog.acronym)

    if team_match and incident.normalized_name == catalog.normalized_name:
        return MatchResult(
            incident_record=incident,
            catalog_record=catalog,
            score=MAX_SCORE,
            score_breakdown=ScoreBreakdown(
                base_score=MAX_SCORE,
                exact_match=True,
                team_match=True,
                acronym_match=acronym_match,
                raw_score=MAX_SCORE,
            ),
        )

    base_score = name_similarity(incident.normalized_name, catalog.normalized_name) * 100

    raw_score = base_score
    if team_match:
        raw_score += TEAM_BONUS
    if acronym_match:
        raw_score += ACRONYM_BONUS

    return MatchResult(
        incident_record=incident,
        catalog_record=catalog,
        score=round_score(min(raw_score, MAX_SCORE)),
        score_breakdown=ScoreBreakdown(
            base_score=round_score(base_score),
            exact_match=False,
            team_match=team_match,
            acronym_match=acronym_match,
            raw_score=round_score(raw_score),
        ),
    )
