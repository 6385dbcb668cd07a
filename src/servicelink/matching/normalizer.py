"""
Service name normalization for cross-source matching.

Turns raw PagerDuty service names and Backstage component names (and their
team names) into comparable keys, and derives an acronym from the raw name
as an extra matching signal.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from servicelink.matching.models import NormalizedService, ServiceSource


@dataclass(frozen=True)
class NormalizationRule:
    """A single normalization rule."""

    pattern: str
    replacement: str
    description: str

    def apply(self, value: str) -> str:
        return re.sub(self.pattern, self.replacement, value)


@dataclass
class NormalizationStep:
    """A single step in the normalization process."""

    rule_name: str
    input_value: str
    output_value: str
    changed: bool


# Basic rules (applied in order, after lowercasing)
BASIC_RULES = [
    NormalizationRule(
        pattern=r"[_-]",
        replacement=" ",
        description="Replace underscores and hyphens with spaces",
    ),
    NormalizationRule(
        pattern=r"\s+",
        replacement=" ",
        description="Collapse whitespace",
    ),
    NormalizationRule(
        pattern=r"^ | $",
        replacement="",
        description="Trim whitespace",
    ),
]

# Advanced rules (applied in order, lowercased at the end)
ADVANCED_RULES = [
    NormalizationRule(
        pattern=r"^\[.*?\]\s*",
        replacement="",
        description="Remove leading [tag] prefix",
    ),
    NormalizationRule(
        pattern=r"\s*\(.*?\)",
        replacement="",
        description="Remove (parenthetical) notes",
    ),
    NormalizationRule(
        pattern=r"[\s_]+",
        replacement="-",
        description="Replace underscores and whitespace with hyphens",
    ),
    NormalizationRule(
        pattern=r"-+",
        replacement="-",
        description="Collapse repeated hyphens",
    ),
    NormalizationRule(
        pattern=r"^-+|-+$",
        replacement="",
        description="Trim hyphens",
    ),
]

_ALL_CAPS = re.compile(r"[A-Z]+")
_WORD_SEPARATOR = re.compile(r"[\s_-]+")
_LOWER_THEN_UPPER = re.compile(r"([a-z])([A-Z])")
_CAPS_THEN_WORD = re.compile(r"([A-Z]+)([A-Z][a-z])")
_UPPER = re.compile(r"[A-Z]")

# Longest all-caps name treated as an acronym already
MAX_ACRONYM_LENGTH = 5


def _run_rules(
    name: str,
    rules: list[NormalizationRule],
    *,
    lowercase_first: bool,
    steps: list[NormalizationStep] | None = None,
) -> str:
    def record(rule_name: str, before: str, after: str) -> None:
        if steps is not None:
            steps.append(
                NormalizationStep(
                    rule_name=rule_name,
                    input_value=before,
                    output_value=after,
                    changed=before != after,
                )
            )

    current = name
    if lowercase_first:
        record("Lowercase", current, current.lower())
        current = current.lower()

    for rule in rules:
        before = current
        current = rule.apply(current)
        record(rule.description, before, current)

    if not lowercase_first:
        record("Lowercase", current, current.lower())
        current = current.lower()

    return current


def normalize_basic(name: str) -> str:
    """
    Normalize a name for basic fuzzy matching.

    Examples:
        My_Service-Name   API → my service name api
        Postman/Webhook Incoming → postman/webhook incoming
        ___ → (empty)

    Args:
        name: Raw service or team name

    Returns:
        Lowercase, space-separated name
    """
    if not name:
        return ""
    return _run_rules(name, BASIC_RULES, lowercase_first=True)


def preprocess_advanced(name: str) -> str:
    """
    Preprocess a name for matching across sources with structural noise.

    Strips a leading [tag] and any (parenthetical) notes, then joins the
    remaining words with hyphens.

    Examples:
        [Platform] Auth Service (on-call) → auth-service
        API_Gateway → api-gateway
        [Team] (deprecated) → (empty)

    Args:
        name: Raw service or team name

    Returns:
        Lowercase, hyphen-joined name
    """
    if not name:
        return ""
    return _run_rules(name, ADVANCED_RULES, lowercase_first=False)


def normalize_with_steps(
    name: str,
    use_advanced: bool = False,
) -> tuple[str, list[NormalizationStep]]:
    """Normalize a name and return all steps applied."""
    steps: list[NormalizationStep] = []
    if use_advanced:
        result = _run_rules(name, ADVANCED_RULES, lowercase_first=False, steps=steps)
    else:
        result = _run_rules(name, BASIC_RULES, lowercase_first=True, steps=steps)
    return result, steps


def extract_acronym(name: str) -> str:
    """
    Extract an uppercase acronym from a raw service name.

    Strategies (first that applies wins):
    1. Short all-caps name is already an acronym: API → API
    2. Separated words: my-service-api → MSA
    3. CamelCase words: APIGatewayService → AGS
    4. Scattered capitals: aBcDeF → ABDF
    5. First letter: Service123 → S

    Args:
        name: Raw service name (not normalized)

    Returns:
        Acronym, or "" for empty input
    """
    if not name:
        return ""

    if len(name) <= MAX_ACRONYM_LENGTH and _ALL_CAPS.fullmatch(name):
        return name

    if _WORD_SEPARATOR.search(name):
        words = [word for word in _WORD_SEPARATOR.split(name) if word]
        return "".join(word[0].upper() for word in words)

    # "myService" → "my|Service", "APIGateway" → "API|Gateway"
    segmented = _LOWER_THEN_UPPER.sub(r"\1|\2", name)
    segmented = _CAPS_THEN_WORD.sub(r"\1|\2", segmented)
    words = [word for word in segmented.split("|") if word]
    if len(words) > 1:
        return "".join(word[0].upper() for word in words)

    capitals = _UPPER.findall(name)
    if len(capitals) > 1:
        return "".join(capitals)

    return name[0].upper()


def build_normalized_record(
    raw_name: str,
    team_name: str,
    source_id: str,
    source: ServiceSource,
    use_advanced: bool = False,
) -> NormalizedService:
    """
    Build the canonical comparable record for a raw service.

    Examples:
        build_normalized_record(
            "[Platform] Auth Service (on-call)",
            "Platform Team",
            "P4H6SXP",
            ServiceSource.INCIDENT,
            use_advanced=True,
        ) → normalized_name "auth-service", team_name "platform-team"

    Args:
        raw_name: Original service name
        team_name: Owning team name ("" if none)
        source_id: PagerDuty service ID or Backstage entity ref
        source: Registry the record came from
        use_advanced: Use preprocess_advanced instead of normalize_basic

    Returns:
        NormalizedService ready for scoring
    """
    normalize = preprocess_advanced if use_advanced else normalize_basic
    return NormalizedService(
        raw_name=raw_name,
        normalized_name=normalize(raw_name),
        team_name=normalize(team_name),
        acronym=extract_acronym(raw_name),
        source_id=source_id,
        source=source,
    )
