"""
Service matching between PagerDuty and Backstage.

Normalizes service and team names from both registries, scores every
candidate pair, and reduces the scored pairs to a ranked result set.
"""

from servicelink.matching.auto import AutoMatchReport, auto_match, filter_by_team
from servicelink.matching.finder import (
    best_match_for_record,
    best_match_per_incident_record,
    find_matches,
    group_by_incident_record,
)
from servicelink.matching.models import (
    MatchConfidence,
    MatchingConfig,
    MatchResult,
    NormalizedService,
    ScoreBreakdown,
    ServiceSource,
    classify_confidence,
)
from servicelink.matching.normalizer import (
    ADVANCED_RULES,
    BASIC_RULES,
    NormalizationRule,
    NormalizationStep,
    build_normalized_record,
    extract_acronym,
    normalize_basic,
    normalize_with_steps,
    preprocess_advanced,
)
from servicelink.matching.scorer import name_similarity, score_pair

__all__ = [
    # Models
    "ServiceSource",
    "NormalizedService",
    "ScoreBreakdown",
    "MatchResult",
    "MatchingConfig",
    "MatchConfidence",
    "classify_confidence",
    # Normalizer
    "normalize_basic",
    "preprocess_advanced",
    "extract_acronym",
    "build_normalized_record",
    "normalize_with_steps",
    "NormalizationRule",
    "NormalizationStep",
    "BASIC_RULES",
    "ADVANCED_RULES",
    # Scorer
    "name_similarity",
    "score_pair",
    # Finder
    "find_matches",
    "group_by_incident_record",
    "best_match_per_incident_record",
    "best_match_for_record",
    # Auto-match
    "AutoMatchReport",
    "auto_match",
    "filter_by_team",
]
