"""CLI interface for Skill Scorecard."""

import asyncio
import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from scorecard.models.model_config import ScorecardConfig
from scorecard.models.model_score import Category, Grade, ScoreComponent, ScoreResult
from scorecard.scoring.engine import ScoringEngine
from scorecard.scoring.grading import exit_code_for_grade
from scorecard.scoring.recommendations import is_critical

app = typer.Typer(
    name="scorecard",
    help="Skill Scorecard - Quality and security assessment for skill packages",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

console = Console()

CATEGORY_LABELS = {
    Category.SECURITY: "Security",
    Category.DOCUMENTATION: "Documentation",
    Category.CODE_QUALITY: "Code Quality",
    Category.MAINTENANCE: "Maintenance",
}

GRADE_STYLES = {
    Grade.A: "green",
    Grade.B: "cyan",
    Grade.C: "yellow",
    Grade.D: "red",
    Grade.F: "bold red",
}

SCORING_EPILOG = (
    "Scoring: Security 40 (reputation + scanner), Documentation 20, "
    "Code Quality 20, Maintenance 20. "
    "Grades: A (90+), B (80-89), C (70-79), D (60-69), F (<60). "
    "Exit code is 0 for A-C and 1 for D, F or errors."
)


def _get_score_color(score: int, max_score: int) -> str:
    """Get color for score display."""
    percentage = score / max_score * 100 if max_score else 0
    if percentage >= 80:
        return "green"
    elif percentage >= 60:
        return "yellow"
    else:
        return "red"


def _component_notes(component: ScoreComponent) -> str:
    """Collect error annotations for a breakdown row."""
    details = component.details
    notes = [details.error] if details.error else []
    if component.category == Category.SECURITY:
        if details.reputation.error:
            notes.append(f"reputation: {details.reputation.error}")
        if not details.scanner.scanner_available and details.scanner.error:
            notes.append("scanner unavailable")
    return "; ".join(notes)


def print_results(result: ScoreResult) -> None:
    """Print a scorecard as a human-readable report."""
    console.print("\n" + "=" * 60)
    console.print(f"  SKILL SCORECARD: [bold]{escape(result.skill)}[/bold]")
    console.print("=" * 60)
    console.print(f"  Path: {escape(result.path)}")
    console.print(f"  Scanned: {result.scanned_at.astimezone():%Y-%m-%d %H:%M:%S}")
    console.print(f"  Duration: {result.scan_duration_ms}ms")
    console.print("=" * 60)

    overall_color = _get_score_color(result.overall_score, result.max_score)
    grade_style = GRADE_STYLES[result.grade]
    console.print(
        f"\n  Overall Score: [{overall_color}]{result.overall_score}/{result.max_score}"
        f"[/{overall_color}]"
    )
    console.print(f"  Grade: [{grade_style}]{result.grade.value}[/{grade_style}]\n")

    table = Table(title="Breakdown")
    table.add_column("Category", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Notes", style="dim")

    for category, component in result.breakdown.items():
        color = _get_score_color(component.score, component.max)
        table.add_row(
            CATEGORY_LABELS[category],
            f"[{color}]{component.score}/{component.max}[/{color}]",
            escape(_component_notes(component)),
        )

    console.print(table)

    if result.recommendations:
        console.print("\n  [bold]Recommendations:[/bold]")
        for recommendation in result.recommendations:
            if is_critical(recommendation):
                console.print(f"    [bold red]{escape(recommendation)}[/bold red]")
            else:
                console.print(f"    • {escape(recommendation)}")

    console.print("\n" + "=" * 60 + "\n")


@app.command(no_args_is_help=True, epilog=SCORING_EPILOG)
def score(
    path: Path = typer.Argument(..., help="Path to the skill directory"),
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON"),
    name: str = typer.Option(None, "--name", "-n", help="Override skill name"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show analyzer progress logs"),
    reputation_endpoint: str = typer.Option(
        None, "--reputation-endpoint", help="Reputation service base URL"
    ),
    scanner_path: str = typer.Option(None, "--scanner-path", help="Skill scanner executable"),
    scanner_timeout: float = typer.Option(
        None, "--scanner-timeout", help="Scanner timeout (seconds)"
    ),
) -> None:
    """Score a skill directory for quality and security."""
    # Logs go to stderr so --json output stays parseable
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        config = ScorecardConfig.from_env(
            reputation_endpoint=reputation_endpoint,
            scanner_path=scanner_path,
            scanner_timeout=scanner_timeout,
        )
        result = asyncio.run(ScoringEngine(config).score(path, name))
    except Exception as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if json_output:
        typer.echo(json.dumps(result.to_json_dict(), indent=2, ensure_ascii=False))
    else:
        print_results(result)

    raise typer.Exit(exit_code_for_grade(result.grade))


if __name__ == "__main__":
    app()
