"""Tests for service name normalization and acronym extraction."""

import pytest

from servicelink.matching.models import ServiceSource
from servicelink.matching.normalizer import (
    NormalizationRule,
    build_normalized_record,
    extract_acronym,
    normalize_basic,
    normalize_with_steps,
    preprocess_advanced,
)

REALISTIC_NAMES = [
    "[Platform] Authentication Service (on-call)",
    "Payment_Gateway_API",
    "#2 Jira Cloud",
    "Postman/Webhook Incoming",
    "  __Leading Underscores__  ",
    "my-repo - open source repo",
    "Service (v2) (deprecated)",
    "APIGatewayService",
    "notification-worker",
    "",
]


class TestNormalizeBasic:
    """Tests for normalize_basic."""

    def test_mixed_separators(self):
        """Underscores, hyphens and repeated spaces collapse to single spaces."""
        assert normalize_basic("My_Service-Name   API") == "my service name api"

    def test_empty_string(self):
        """Empty input stays empty."""
        assert normalize_basic("") == ""

    def test_only_separators(self):
        """A name made only of separators normalizes to empty."""
        assert normalize_basic("___") == ""
        assert normalize_basic("- - -") == ""

    def test_preserves_punctuation(self):
        """Characters other than underscore, hyphen and whitespace are kept."""
        assert normalize_basic("#2 Jira Cloud") == "#2 jira cloud"
        assert normalize_basic("Postman/Webhook Incoming") == "postman/webhook incoming"
        assert normalize_basic("[Team] Special_Service") == "[team] special service"

    def test_tabs_and_newlines(self):
        """Any whitespace run becomes one space."""
        assert normalize_basic("tab\t\tspaces") == "tab spaces"
        assert normalize_basic("line\nbreak") == "line break"

    def test_trims_edges(self):
        """Leading and trailing separators are removed."""
        assert normalize_basic("  _payment gateway-  ") == "payment gateway"

    @pytest.mark.parametrize("name", REALISTIC_NAMES)
    def test_idempotent(self, name):
        """Normalizing twice gives the same result as normalizing once."""
        once = normalize_basic(name)
        assert normalize_basic(once) == once

    @pytest.mark.parametrize("name", REALISTIC_NAMES)
    def test_output_has_no_separators_or_uppercase(self, name):
        """Output is lowercase with no hyphens, underscores or double spaces."""
        result = normalize_basic(name)
        assert result == result.lower()
        assert "_" not in result
        assert "-" not in result
        assert "  " not in result
        assert result == result.strip()


class TestPreprocessAdvanced:
    """Tests for preprocess_advanced."""

    def test_strips_tag_and_parenthetical(self):
        """Leading [tag] and (notes) are removed, words hyphen-joined."""
        assert preprocess_advanced("[Platform] Auth Service (on-call)") == "auth-service"

    def test_underscores_become_hyphens(self):
        """Underscores become hyphens."""
        assert preprocess_advanced("API_Gateway") == "api-gateway"

    def test_trailing_parenthetical(self):
        """A trailing note is removed."""
        assert preprocess_advanced("Payment Service (on-call)") == "payment-service"

    def test_multiple_parentheticals(self):
        """Every parenthetical is removed."""
        assert preprocess_advanced("Service (v2) (deprecated)") == "service"

    def test_inner_parenthetical(self):
        """A parenthetical inside the name is removed."""
        assert preprocess_advanced("Auth (internal) Service") == "auth-service"

    def test_only_tag_and_note(self):
        """A name made only of a tag and a note becomes empty."""
        assert preprocess_advanced("[Team] (deprecated)") == ""
        assert preprocess_advanced("[Team]") == ""

    def test_tag_not_at_start_is_kept(self):
        """Only a leading [tag] is stripped."""
        assert preprocess_advanced("Not [tag] prefix") == "not-[tag]-prefix"

    def test_only_first_tag_is_stripped(self):
        """A second leading tag survives."""
        assert preprocess_advanced("[A] [B] Service") == "[b]-service"

    def test_leading_punctuation_preserved(self):
        """Punctuation other than hyphens is kept at the start."""
        assert preprocess_advanced("#2 Jira Cloud") == "#2-jira-cloud"

    def test_collapses_hyphen_runs(self):
        """Spaced hyphens collapse into one."""
        assert preprocess_advanced("my-repo - open source repo") == "my-repo-open-source-repo"

    def test_trims_edge_hyphens(self):
        """Leading and trailing separators are removed."""
        assert preprocess_advanced("  __Leading__  ") == "leading"

    def test_empty_string(self):
        """Empty input stays empty."""
        assert preprocess_advanced("") == ""

    @pytest.mark.parametrize("name", REALISTIC_NAMES)
    def test_idempotent(self, name):
        """Preprocessing twice gives the same result as preprocessing once."""
        once = preprocess_advanced(name)
        assert preprocess_advanced(once) == once

    @pytest.mark.parametrize(
        "name,once",
        [
            ("[A] [B] Service", "[b]-service"),
            (" [Platform] Auth", "[platform]-auth"),
            ("-[Platform] Auth", "[platform]-auth"),
            ("_[Ops] svc", "[ops]-svc"),
        ],
    )
    def test_tag_behind_leading_separator_needs_second_pass(self, name, once):
        """A tag that is not the very first character survives one pass only."""
        assert preprocess_advanced(name) == once
        assert preprocess_advanced(once) != once

    @pytest.mark.parametrize("name", REALISTIC_NAMES)
    def test_output_shape(self, name):
        """Output is lowercase with no whitespace, underscores or hyphen runs."""
        result = preprocess_advanced(name)
        assert result == result.lower()
        assert " " not in result
        assert "_" not in result
        assert "--" not in result
        assert not result.startswith("-")
        assert not result.endswith("-")


class TestNormalizeWithSteps:
    """Tests for normalize_with_steps."""

    @pytest.mark.parametrize("name", REALISTIC_NAMES)
    def test_basic_result_matches_normalize_basic(self, name):
        """The stepwise result equals normalize_basic."""
        result, _ = normalize_with_steps(name)
        assert result == normalize_basic(name)

    @pytest.mark.parametrize("name", REALISTIC_NAMES)
    def test_advanced_result_matches_preprocess_advanced(self, name):
        """The stepwise result equals preprocess_advanced."""
        result, _ = normalize_with_steps(name, use_advanced=True)
        assert result == preprocess_advanced(name)

    def test_basic_lowercases_first(self):
        """Basic mode lowercases before applying rules."""
        _, steps = normalize_with_steps("My_Service")
        assert steps[0].rule_name == "Lowercase"
        assert steps[0].changed is True
        assert steps[0].output_value == "my_service"

    def test_advanced_lowercases_last(self):
        """Advanced mode lowercases after applying rules."""
        _, steps = normalize_with_steps("My_Service", use_advanced=True)
        assert steps[-1].rule_name == "Lowercase"
        assert steps[-1].input_value == "My-Service"
        assert steps[-1].output_value == "my-service"

    def test_steps_chain(self):
        """Each step starts from the previous step's output."""
        result, steps = normalize_with_steps("[Platform] Auth Service (on-call)", use_advanced=True)
        for previous, current in zip(steps, steps[1:]):
            assert current.input_value == previous.output_value
        assert steps[-1].output_value == result

    def test_unchanged_steps_are_flagged(self):
        """Rules that do nothing are recorded as unchanged."""
        _, steps = normalize_with_steps("auth")
        assert all(not step.changed for step in steps)


class TestNormalizationRule:
    """Tests for NormalizationRule."""

    def test_apply(self):
        """A rule substitutes every match of its pattern."""
        rule = NormalizationRule(r"\d+", "#", "Mask digits")
        assert rule.apply("api-v2-build-123") == "api-v#-build-#"


class TestExtractAcronym:
    """Tests for extract_acronym."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("API", "API"),
            ("SRE", "SRE"),
            ("A", "A"),
        ],
    )
    def test_short_all_caps_returned_as_is(self, name, expected):
        """All-caps names of up to five letters are already acronyms."""
        assert extract_acronym(name) == expected

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("my-service-api", "MSA"),
            ("my_service_api", "MSA"),
            ("my service api", "MSA"),
            ("my-service_API", "MSA"),
            ("API V2", "AV"),
            ("HTTPS_PROXY", "HP"),
            ("v2-api-gateway", "VAG"),
        ],
    )
    def test_separated_words(self, name, expected):
        """Words split on separators contribute their first letter."""
        assert extract_acronym(name) == expected

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("MyServiceAPI", "MSA"),
            ("APIGatewayService", "AGS"),
            ("HTTPSProxy", "HP"),
            ("AuthenticationService", "AS"),
            ("myService", "MS"),
        ],
    )
    def test_camel_case(self, name, expected):
        """CamelCase boundaries split words."""
        assert extract_acronym(name) == expected

    def test_long_all_caps_is_one_word(self):
        """A long all-caps name has no word boundaries, so all capitals are used."""
        assert extract_acronym("POSTGRESQL") == "POSTGRESQL"

    def test_alternating_case(self):
        """Every lower-to-upper transition starts a new word."""
        assert extract_acronym("aBcDeF") == "ABDF"
        assert extract_acronym("aUtHeNtIcAtIoN") == "AUHNIAIN"

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("authentication", "A"),
            ("Service123", "S"),
            ("a", "A"),
        ],
    )
    def test_first_letter_fallback(self, name, expected):
        """Single words fall back to their uppercased first character."""
        assert extract_acronym(name) == expected

    def test_empty_and_separator_only(self):
        """Empty input and separator-only names have no acronym."""
        assert extract_acronym("") == ""
        assert extract_acronym("---") == ""

    @pytest.mark.parametrize("name", REALISTIC_NAMES)
    def test_always_uppercase(self, name):
        """Acronyms are always uppercase."""
        acronym = extract_acronym(name)
        assert acronym == acronym.upper()


class TestBuildNormalizedRecord:
    """Tests for build_normalized_record."""

    def test_basic_mode(self):
        """Name and team are normalized with normalize_basic."""
        record = build_normalized_record(
            "Payment_Gateway_API", "Payments Team", "PXYZ789", ServiceSource.INCIDENT
        )
        assert record.raw_name == "Payment_Gateway_API"
        assert record.normalized_name == "payment gateway api"
        assert record.team_name == "payments team"
        assert record.acronym == "PGA"
        assert record.source_id == "PXYZ789"
        assert record.source == ServiceSource.INCIDENT

    def test_advanced_mode(self):
        """Name and team are normalized with preprocess_advanced."""
        record = build_normalized_record(
            "[Platform] Auth Service (on-call)",
            "Platform Team",
            "P4H6SXP",
            ServiceSource.INCIDENT,
            use_advanced=True,
        )
        assert record.normalized_name == "auth-service"
        assert record.team_name == "platform-team"

    def test_acronym_from_raw_name_in_both_modes(self):
        """The acronym comes from the raw name regardless of mode."""
        basic = build_normalized_record("APIGatewayService", "", "x", ServiceSource.CATALOG)
        advanced = build_normalized_record(
            "APIGatewayService", "", "x", ServiceSource.CATALOG, use_advanced=True
        )
        assert basic.acronym == advanced.acronym == "AGS"

    def test_no_team(self):
        """A missing team becomes the empty string."""
        record = build_normalized_record("billing", "", "x", ServiceSource.CATALOG)
        assert record.team_name == ""

    def test_to_dict(self):
        """Serialization uses the source's wire value."""
        record = build_normalized_record("billing", "Finance", "x", ServiceSource.CATALOG)
        data = record.to_dict()
        assert data["source"] == "catalog-source"
        assert data["team_name"] == "finance"
        assert data["raw_name"] == "billing"
