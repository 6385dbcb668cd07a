"""
CLI commands for service name normalization and matching.

Commands:
    servicelink normalize <name>                          - Show normalization steps
    servicelink score <name-a> <name-b>                   - Score a single pair
    servicelink match --services F --entities F           - Match PagerDuty to Backstage
"""

from __future__ import annotations

import argparse
from typing import Any, Optional

from rich.markup import escape
from rich.table import Table

from servicelink.cli.ux import confidence_style, console, error, header, success, warning
from servicelink.config.settings import get_settings
from servicelink.core.errors import ConfigurationError, ExitCode, main_with_error_handling
from servicelink.loaders import (
    catalog_records_from_payload,
    incident_records_from_payload,
    load_payload_file,
)
from servicelink.logging import bind_context
from servicelink.matching.auto import AutoMatchReport, auto_match
from servicelink.matching.models import MatchingConfig, ServiceSource
from servicelink.matching.normalizer import (
    NormalizationStep,
    build_normalized_record,
    extract_acronym,
    normalize_with_steps,
)
from servicelink.matching.scorer import score_pair


# Demo data for testing without real exports
def create_demo_services() -> list[dict[str, Any]]:
    """Create demo PagerDuty services."""
    return [
        {
            "id": "PABC123",
            "name": "[Platform] Authentication Service (on-call)",
            "teams": [{"id": "PT1", "summary": "Platform Team"}],
        },
        {
            "id": "PXYZ789",
            "name": "Payment_Gateway_API",
            "teams": [{"id": "PT2", "summary": "Payments Team"}],
        },
        {
            "id": "P4H6SXP",
            "name": "#2 Jira Cloud",
            "teams": [],
        },
    ]


def create_demo_entities() -> list[dict[str, Any]]:
    """Create demo Backstage catalog entities."""
    return [
        {
            "kind": "Component",
            "metadata": {"name": "platform-auth-service", "namespace": "default"},
            "spec": {"owner": "group:default/platform-team"},
        },
        {
            "kind": "Component",
            "metadata": {"name": "payment-gateway-api"},
            "spec": {"owner": "payments-team"},
        },
        {
            "kind": "Component",
            "metadata": {"name": "billing-worker"},
            "spec": {"owner": "group:finance"},
        },
        {
            "kind": "Group",
            "metadata": {"name": "platform-team"},
            "spec": {},
        },
    ]


# --- Normalize subcommand ---


def normalize_command(
    name: str,
    advanced: bool = False,
    verbose: bool = False,
    output_format: str = "table",
) -> int:
    """
    Show how a service name gets normalized.

    Exit codes:
        0 - Success

    Args:
        name: Service name to normalize
        advanced: Use advanced preprocessing
        verbose: If True, show each step
        output_format: Output format ("table" or "json")

    Returns:
        Exit code
    """
    result, steps = normalize_with_steps(name, use_advanced=advanced)
    acronym = extract_acronym(name)

    if output_format == "json":
        console.print_json(
            data={
                "input": name,
                "output": result,
                "acronym": acronym,
                "mode": "advanced" if advanced else "basic",
                "steps": [
                    {
                        "rule": s.rule_name,
                        "input": s.input_value,
                        "output": s.output_value,
                        "changed": s.changed,
                    }
                    for s in steps
                ],
            }
        )
    else:
        _print_normalize_output(name, result, acronym, steps, verbose)

    return ExitCode.SUCCESS


def _print_normalize_output(
    name: str,
    result: str,
    acronym: str,
    steps: list[NormalizationStep],
    verbose: bool,
) -> None:
    header(f"Normalization: {escape(name)}")
    console.print()

    if verbose:
        step_num = 0
        for step in steps:
            if step.changed:
                step_num += 1
                console.print(f"[bold]Step {step_num}:[/bold] {escape(step.rule_name)}")
                before = escape(repr(step.input_value))
                after = escape(repr(step.output_value))
                console.print(f"  {before} [dim]->[/dim] {after}")
                console.print()

        if step_num == 0:
            console.print("[muted]No transformations applied[/muted]")
            console.print()

    console.print(f"[bold]Result:[/bold] [cyan]{escape(result)}[/cyan]")
    console.print(f"[bold]Acronym:[/bold] {escape(acronym) or '-'}")
    console.print()


# --- Score subcommand ---


@main_with_error_handling()
def score_command(
    name_a: str,
    name_b: str,
    team_a: str = "",
    team_b: str = "",
    advanced: bool = False,
    threshold: Optional[float] = None,
    output_format: str = "table",
) -> int:
    """
    Score a PagerDuty service name against a Backstage component name.

    Exit codes:
        0 - Score meets the threshold
        1 - Score below the threshold
        12 - Invalid threshold

    Args:
        name_a: PagerDuty service name
        name_b: Backstage component name
        team_a: PagerDuty team name
        team_b: Backstage owner team name
        advanced: Use advanced preprocessing
        threshold: Minimum score (defaults to settings)
        output_format: Output format ("table" or "json")

    Returns:
        Exit code
    """
    if threshold is None:
        threshold = get_settings().default_threshold
    config = MatchingConfig(threshold=threshold)

    incident = build_normalized_record(name_a, team_a, name_a, ServiceSource.INCIDENT, advanced)
    catalog = build_normalized_record(name_b, team_b, name_b, ServiceSource.CATALOG, advanced)
    match = score_pair(incident, catalog)

    if output_format == "json":
        console.print_json(data=match.to_dict())
    else:
        breakdown = match.score_breakdown
        header(f"Score: {escape(name_a)} <-> {escape(name_b)}")
        console.print()
        console.print(
            f"[bold]Normalized:[/bold] {escape(incident.normalized_name)} | "
            f"{escape(catalog.normalized_name)}"
        )
        console.print(f"[bold]Base score:[/bold] {breakdown.base_score:.2f}")
        console.print(f"[bold]Exact match:[/bold] {'yes' if breakdown.exact_match else 'no'}")
        console.print(f"[bold]Team bonus:[/bold] {'+10' if breakdown.team_match else 'none'}")
        console.print(f"[bold]Acronym bonus:[/bold] {'+5' if breakdown.acronym_match else 'none'}")
        style = confidence_style(match.confidence)
        console.print(
            f"[bold]Score:[/bold] [{style}]{match.score:.2f} ({match.confidence.value})[/{style}]"
        )
        console.print()

    return ExitCode.SUCCESS if match.score >= config.threshold else ExitCode.NO_MATCH


# --- Match subcommand ---


@main_with_error_handling()
def match_command(
    services_path: Optional[str] = None,
    entities_path: Optional[str] = None,
    threshold: Optional[float] = None,
    team: Optional[str] = None,
    all_candidates: bool = False,
    advanced: Optional[bool] = None,
    output_format: str = "table",
    demo: bool = False,
) -> int:
    """
    Match PagerDuty services to Backstage components from exported payloads.

    Exit codes:
        0 - At least one match found
        1 - No matches found
        10 - Payload file missing or invalid
        12 - Invalid threshold

    Args:
        services_path: PagerDuty services file (JSON or YAML)
        entities_path: Backstage entities file (JSON or YAML)
        threshold: Minimum score (defaults to settings)
        team: Only match components owned by this team
        all_candidates: Keep every candidate instead of the best per service
        advanced: Use advanced preprocessing (defaults to settings)
        output_format: Output format ("table" or "json")
        demo: If True, use demo data

    Returns:
        Exit code
    """
    settings = get_settings()
    if threshold is None:
        threshold = settings.default_threshold
    if advanced is None:
        advanced = settings.use_advanced_normalization

    log = bind_context(command="match", threshold=threshold, team=team or "all")

    if demo:
        log.debug("using_demo_data")
        services: Any = create_demo_services()
        entities: Any = create_demo_entities()
    else:
        if not services_path or not entities_path:
            raise ConfigurationError("Both --services and --entities are required (or use --demo)")
        services = load_payload_file(services_path)
        entities = load_payload_file(entities_path)
        log.debug("payloads_loaded", services_path=services_path, entities_path=entities_path)

    config = MatchingConfig(threshold=threshold)
    report = auto_match(
        incident_records_from_payload(services, use_advanced=advanced),
        catalog_records_from_payload(entities, use_advanced=advanced),
        config,
        team=team,
        best_only=not all_candidates,
        use_advanced=advanced,
    )

    if output_format == "json":
        console.print_json(data=report.to_dict())
    else:
        _print_match_report(report)

    return ExitCode.SUCCESS if report.matches else ExitCode.NO_MATCH


def _print_match_report(report: AutoMatchReport) -> None:
    header("Service Matches")
    console.print()

    if not report.matches:
        warning(f"No matches at or above {report.threshold:g}")
        console.print()
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("PagerDuty Service")
    table.add_column("Backstage Component", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Confidence")
    table.add_column("Signals", style="muted")

    for match in report.matches:
        breakdown = match.score_breakdown
        signals = []
        if breakdown.team_match:
            signals.append("team")
        if breakdown.acronym_match:
            signals.append("acronym")
        style = confidence_style(match.confidence)
        table.add_row(
            escape(match.incident_record.raw_name),
            escape(match.catalog_record.source_id),
            f"[{style}]{match.score:.2f}[/{style}]",
            f"[{style}]{match.confidence.value}[/{style}]",
            ", ".join(signals) or "-",
        )

    console.print(table)
    console.print()
    success(
        f"{report.matched_count} of {report.incident_count} services matched "
        f"against {report.catalog_count} components"
    )
    console.print(
        f"[muted]{report.comparisons} comparisons: {report.exact_matches} exact, "
        f"{report.high_confidence_matches} high, "
        f"{report.medium_confidence_matches} medium confidence[/muted]"
    )
    console.print()


# --- Parser registration ---


def register_matching_parsers(subparsers: argparse._SubParsersAction) -> None:
    """Register normalize, score and match subcommands."""

    def add_format(parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--format",
            "-f",
            dest="output_format",
            choices=["table", "json"],
            default="table",
            help="Output format (default: table)",
        )

    normalize_parser = subparsers.add_parser(
        "normalize",
        help="Show how a service name gets normalized",
    )
    normalize_parser.add_argument("name", help="Service name to normalize")
    normalize_parser.add_argument(
        "--advanced",
        action="store_true",
        help="Strip [tag] prefixes and (notes), join words with hyphens",
    )
    normalize_parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show each normalization step",
    )
    add_format(normalize_parser)

    score_parser = subparsers.add_parser(
        "score",
        help="Score a PagerDuty service name against a Backstage component name",
    )
    score_parser.add_argument("name_a", help="PagerDuty service name")
    score_parser.add_argument("name_b", help="Backstage component name")
    score_parser.add_argument("--team-a", default="", help="PagerDuty team name")
    score_parser.add_argument("--team-b", default="", help="Backstage owner team name")
    score_parser.add_argument("--advanced", action="store_true", help="Use advanced preprocessing")
    score_parser.add_argument("--threshold", type=float, help="Minimum score for exit code 0")
    add_format(score_parser)

    match_parser = subparsers.add_parser(
        "match",
        help="Match PagerDuty services to Backstage components",
    )
    match_parser.add_argument("--services", dest="services_path", help="PagerDuty services file")
    match_parser.add_argument("--entities", dest="entities_path", help="Backstage entities file")
    match_parser.add_argument("--threshold", type=float, help="Minimum score (0-100)")
    match_parser.add_argument("--team", help="Only match components owned by this team")
    match_parser.add_argument(
        "--all-candidates",
        action="store_true",
        help="Show every candidate above the threshold, not only the best per service",
    )
    match_parser.add_argument(
        "--advanced",
        action="store_true",
        default=None,
        help="Use advanced preprocessing",
    )
    match_parser.add_argument("--demo", action="store_true", help="Use demo data")
    add_format(match_parser)


def handle_matching_command(args: argparse.Namespace) -> int:
    """Handle normalize/score/match commands from CLI args."""
    command = getattr(args, "command", None)

    if command == "normalize":
        return normalize_command(
            name=args.name,
            advanced=getattr(args, "advanced", False),
            verbose=getattr(args, "verbose", False),
            output_format=getattr(args, "output_format", "table"),
        )
    elif command == "score":
        return score_command(
            name_a=args.name_a,
            name_b=args.name_b,
            team_a=getattr(args, "team_a", ""),
            team_b=getattr(args, "team_b", ""),
            advanced=getattr(args, "advanced", False),
            threshold=getattr(args, "threshold", None),
            output_format=getattr(args, "output_format", "table"),
        )
    elif command == "match":
        return match_command(
            services_path=getattr(args, "services_path", None),
            entities_path=getattr(args, "entities_path", None),
            threshold=getattr(args, "threshold", None),
            team=getattr(args, "team", None),
            all_candidates=getattr(args, "all_candidates", False),
            advanced=getattr(args, "advanced", None),
            output_format=getattr(args, "output_format", "table"),
            demo=getattr(args, "demo", False),
        )
    else:
        error("No command specified. Use --help for usage.")
        return ExitCode.VALIDATION_ERROR
