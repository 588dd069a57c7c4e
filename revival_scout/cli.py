"""
Command-line interface for Revival Scout.
"""

import json

import typer
from rich.console import Console
from rich.table import Table

from revival_scout.config import (
    OUTPUT_FORMATS,
    get_default_filters,
    get_max_results,
    get_output_format,
    set_verify_ssl,
)
from revival_scout.core import Analyzer, parse_full_name
from revival_scout.errors import DataUnavailable, MalformedTimestamp
from revival_scout.forks import analyze_forks
from revival_scout.http_client import close_http_client
from revival_scout.hunter import hunt as run_hunt
from revival_scout.models import (
    FORK_SORT_FIELDS,
    PROJECT_CATEGORIES,
    SEARCH_SORT_FIELDS,
    SORT_ORDERS,
    AnalysisResult,
    ForkComparison,
    ForkInfo,
    HuntResults,
)
from revival_scout.vcs import get_vcs_provider

# --- Typer App ---
app = typer.Typer(help="Find abandoned repositories worth reviving.")
console = Console()

# --- Helper Functions ---


def _score_color(score: int, inverse: bool = False) -> str:
    """Green for good, red for bad. ``inverse`` flips the scale."""
    if inverse:
        score = 100 - score
    if score >= 70:
        return "green"
    if score >= 40:
        return "yellow"
    return "red"


def format_response_time(days: float | None) -> str:
    if days is None:
        return "unknown"
    return f"{days:.1f} days"


def resolve_output_format(output_format: str | None) -> str:
    """Validate an explicit format or fall back to the configured default."""
    if output_format is None:
        return get_output_format()
    if output_format not in OUTPUT_FORMATS:
        supported = ", ".join(OUTPUT_FORMATS)
        raise typer.BadParameter(
            f"Unsupported format: {output_format}. Choose from: {supported}"
        )
    return output_format


def display_summary_table(results: list[AnalysisResult], title: str) -> None:
    """Display several analysis results as one rich table."""
    table = Table(title=title)
    table.add_column("Repository", justify="left", style="cyan", no_wrap=True)
    table.add_column("Stars", justify="right")
    table.add_column("Abandonment", justify="center")
    table.add_column("Revival", justify="center")
    table.add_column("Last Push", justify="right")
    table.add_column("Key Reasons", justify="left")

    for result in results:
        abandonment_color = _score_color(result.abandonment_score, inverse=True)
        revival_color = _score_color(result.revival_potential)
        reasons = " • ".join(result.reasons[:2]) or "No significant concerns detected"
        if len(result.reasons) > 2:
            reasons += f" (+{len(result.reasons) - 2} more)"

        table.add_row(
            result.repository.full_name,
            str(result.repository.stargazers_count),
            f"[{abandonment_color}]{result.abandonment_score}/100[/{abandonment_color}]",
            f"[{revival_color}]{result.revival_potential}/100[/{revival_color}]",
            f"{result.last_commit_age_days}d",
            reasons,
        )

    console.print(table)


def display_result_detailed(result: AnalysisResult) -> None:
    """Display every metric, reason and recommendation for one repository."""
    repository = result.repository
    console.print(f"\n📦 [bold cyan]{repository.full_name}[/bold cyan]")
    if repository.description:
        console.print(f"   {repository.description}")
    if result.degraded:
        console.print("   [yellow]Limited analysis (issue and commit data unavailable)[/yellow]")

    metrics_table = Table(show_header=True, header_style="bold magenta")
    metrics_table.add_column("Metric", style="cyan", no_wrap=True)
    metrics_table.add_column("Value", justify="center")

    abandonment_color = _score_color(result.abandonment_score, inverse=True)
    revival_color = _score_color(result.revival_potential)
    metrics_table.add_row(
        "Abandonment Score",
        f"[{abandonment_color}]{result.abandonment_score}/100[/{abandonment_color}]",
    )
    metrics_table.add_row(
        "Revival Potential",
        f"[{revival_color}]{result.revival_potential}/100[/{revival_color}]",
    )
    metrics_table.add_row("Last Push", f"{result.last_commit_age_days} days ago")
    metrics_table.add_row(
        "Issue Response Time", format_response_time(result.issue_response_time_days)
    )
    metrics_table.add_row("Community Engagement", f"{result.community_engagement}/100")
    metrics_table.add_row("Technical Complexity", result.technical_complexity)
    metrics_table.add_row("Market Relevance", f"{result.market_relevance}/100")
    console.print(metrics_table)

    if result.reasons:
        console.print("   [bold]Reasons:[/bold]")
        for reason in result.reasons:
            console.print(f"      • {reason}")
    if result.recommendations:
        console.print("   [bold]Recommendations:[/bold]")
        for recommendation in result.recommendations:
            console.print(f"      • {recommendation}")


def result_to_markdown(result: AnalysisResult) -> str:
    repository = result.repository
    lines = [
        f"## {repository.full_name}",
        "",
        "| Metric | Value |",
        "| --- | --- |",
        f"| Abandonment Score | {result.abandonment_score}/100 |",
        f"| Revival Potential | {result.revival_potential}/100 |",
        f"| Last Push | {result.last_commit_age_days} days ago |",
        f"| Issue Response Time | {format_response_time(result.issue_response_time_days)} |",
        f"| Community Engagement | {result.community_engagement}/100 |",
        f"| Technical Complexity | {result.technical_complexity} |",
        f"| Market Relevance | {result.market_relevance}/100 |",
    ]
    if result.reasons:
        lines += ["", "**Reasons**", ""]
        lines += [f"- {reason}" for reason in result.reasons]
    if result.recommendations:
        lines += ["", "**Recommendations**", ""]
        lines += [f"- {recommendation}" for recommendation in result.recommendations]
    return "\n".join(lines)


def hunt_to_markdown(results: HuntResults) -> str:
    header = [
        "# Revival Scout Hunt",
        "",
        f"- Query: `{results.query or '(none)'}`",
        f"- Total found: {results.total_found}",
        f"- Analyzed: {len(results.analyzed)}",
        f"- Timestamp: {results.timestamp}",
    ]
    sections = [result_to_markdown(result) for result in results.analyzed]
    return "\n\n".join(["\n".join(header), *sections])


def _fork_label(fork: ForkInfo) -> str:
    label = fork.repository.full_name
    return f"{label} (original)" if fork.is_original else label


def display_fork_comparison(comparison: ForkComparison) -> None:
    """Display ranked forks, insights and the best picks."""
    table = Table(title=f"Forks of {comparison.original.full_name}")
    table.add_column("#", justify="right")
    table.add_column("Repository", justify="left", style="cyan", no_wrap=True)
    table.add_column("Stars", justify="right")
    table.add_column("Activity", justify="center")
    table.add_column("Responsiveness", justify="center")
    table.add_column("Revival", justify="center")
    table.add_column("Last Push", justify="right")
    table.add_column("Divergence", justify="right")

    for fork in comparison.ranked:
        activity_color = _score_color(fork.activity_score)
        revival_color = _score_color(fork.analysis.revival_potential)
        table.add_row(
            str(fork.rank),
            _fork_label(fork),
            str(fork.repository.stargazers_count),
            f"[{activity_color}]{fork.activity_score}/100[/{activity_color}]",
            f"{fork.maintainer_responsiveness}/100",
            f"[{revival_color}]{fork.analysis.revival_potential}/100[/{revival_color}]",
            f"{fork.last_activity_days}d",
            str(fork.divergence),
        )

    console.print(table)
    console.print(
        f"[dim]{comparison.analyzed_forks} analyzed of {comparison.total_forks} "
        f"forks fetched in {comparison.execution_time:.1f}s[/dim]"
    )

    console.print("\n[bold]Insights:[/bold]")
    for insight in comparison.insights:
        console.print(f"   • {insight}")

    picks = [
        ("Best for revival", comparison.best_for_revival),
        ("Best for contribution", comparison.best_for_contribution),
        ("Most diverged", comparison.most_diverged),
    ]
    for title, fork in picks:
        if fork is not None:
            console.print(f"[bold]{title}:[/bold] {_fork_label(fork)}")


def forks_to_markdown(comparison: ForkComparison) -> str:
    lines = [
        f"# Forks of {comparison.original.full_name}",
        "",
        f"- Forks fetched: {comparison.total_forks}",
        f"- Analyzed: {comparison.analyzed_forks}",
        f"- Timestamp: {comparison.timestamp}",
        "",
        "| # | Repository | Stars | Activity | Responsiveness | Revival | Last Push | Divergence |",
        "| --- | --- | --- | --- | --- | --- | --- | --- |",
    ]
    for fork in comparison.ranked:
        lines.append(
            f"| {fork.rank} | {_fork_label(fork)} | {fork.repository.stargazers_count} "
            f"| {fork.activity_score}/100 | {fork.maintainer_responsiveness}/100 "
            f"| {fork.analysis.revival_potential}/100 | {fork.last_activity_days} days ago "
            f"| {fork.divergence} |"
        )
    lines += ["", "**Insights**", ""]
    lines += [f"- {insight}" for insight in comparison.insights]
    return "\n".join(lines)


def _fail(message: str) -> typer.Exit:
    console.print(f"[red]{message}[/red]")
    return typer.Exit(code=1)


# --- Commands ---


@app.command()
def analyze(
    repository: str = typer.Argument(..., help="Repository in owner/repo form."),
    output_format: str | None = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: table, json or markdown.",
    ),
    insecure: bool = typer.Option(
        False,
        "--insecure",
        help="Disable SSL certificate verification.",
    ),
):
    """Analyze a single repository for abandonment and revival potential."""
    output_format = resolve_output_format(output_format)
    if insecure:
        set_verify_ssl(False)
    if output_format == "table":
        console.print(f"Analyzing [bold cyan]{repository}[/bold cyan]...")

    try:
        analyzer = Analyzer(get_vcs_provider("github"))
        result = analyzer.analyze_full_name(repository)
    except MalformedTimestamp as e:
        raise _fail(f"Error: upstream data is malformed - {e}") from None
    except (ValueError, DataUnavailable) as e:
        raise _fail(f"Error: {e}") from None
    finally:
        close_http_client()

    if output_format == "json":
        typer.echo(json.dumps(result.to_dict(), indent=2))
    elif output_format == "markdown":
        typer.echo(result_to_markdown(result))
    else:
        display_result_detailed(result)


@app.command()
def hunt(
    language: str | None = typer.Option(None, "--language", "-l", help="Primary language."),
    category: str | None = typer.Option(
        None,
        "--category",
        "-c",
        help=f"Project category: {', '.join(PROJECT_CATEGORIES)}.",
    ),
    min_stars: int | None = typer.Option(None, "--min-stars", help="Minimum stars."),
    max_stars: int | None = typer.Option(None, "--max-stars", help="Maximum stars."),
    pushed_before: str | None = typer.Option(
        None, "--pushed-before", help="Only repositories last pushed before this date (YYYY-MM-DD)."
    ),
    pushed_after: str | None = typer.Option(
        None, "--pushed-after", help="Only repositories last pushed after this date (YYYY-MM-DD)."
    ),
    archived: bool | None = typer.Option(
        None, "--archived/--not-archived", help="Filter on the archived flag."
    ),
    sort: str | None = typer.Option(
        None, "--sort", help=f"Sort search results by: {', '.join(SEARCH_SORT_FIELDS)}."
    ),
    order: str | None = typer.Option(
        None, "--order", help=f"Sort order: {', '.join(SORT_ORDERS)}."
    ),
    max_results: int | None = typer.Option(
        None, "--max-results", "-n", min=1, max=50, help="Number of repositories to analyze."
    ),
    output_format: str | None = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: table, json or markdown.",
    ),
    insecure: bool = typer.Option(
        False,
        "--insecure",
        help="Disable SSL certificate verification.",
    ),
):
    """Search GitHub for abandoned repositories and rank them by revival potential."""
    output_format = resolve_output_format(output_format)
    if category is not None and category not in PROJECT_CATEGORIES:
        raise typer.BadParameter(
            f"Unknown category: {category}. Choose from: {', '.join(PROJECT_CATEGORIES)}"
        )
    if sort is not None and sort not in SEARCH_SORT_FIELDS:
        raise typer.BadParameter(
            f"Unknown sort field: {sort}. Choose from: {', '.join(SEARCH_SORT_FIELDS)}"
        )
    if order is not None and order not in SORT_ORDERS:
        raise typer.BadParameter(
            f"Unknown sort order: {order}. Choose from: {', '.join(SORT_ORDERS)}"
        )
    if insecure:
        set_verify_ssl(False)

    try:
        defaults = get_default_filters()
    except ValueError as e:
        raise _fail(f"Error: {e}") from None

    overrides = {
        "language": language,
        "category": category,
        "min_stars": min_stars,
        "max_stars": max_stars,
        "pushed_before": pushed_before,
        "pushed_after": pushed_after,
        "archived": archived,
        "sort": sort,
        "order": order,
    }
    filters = defaults._replace(
        **{key: value for key, value in overrides.items() if value is not None}
    )

    try:
        results = run_hunt(
            filters,
            max_results=max_results or get_max_results(),
            provider=get_vcs_provider("github"),
        )
    except DataUnavailable as e:
        raise _fail(f"Error: {e}") from None
    finally:
        close_http_client()

    if output_format == "json":
        typer.echo(json.dumps(results.to_dict(), indent=2))
    elif output_format == "markdown":
        typer.echo(hunt_to_markdown(results))
    elif results.analyzed:
        display_summary_table(
            results.analyzed,
            title=f"Revival Scout Hunt ({results.total_found} found)",
        )
        console.print(f"[dim]Completed in {results.execution_time:.1f}s[/dim]")
    else:
        console.print("No results to display.")


@app.command()
def forks(
    repository: str = typer.Argument(..., help="Repository in owner/repo form."),
    max_forks: int = typer.Option(
        20, "--max-forks", min=1, max=100, help="Maximum number of forks to analyze."
    ),
    min_stars: int = typer.Option(1, "--min-stars", help="Minimum stars a fork needs."),
    min_activity: int = typer.Option(
        365, "--min-activity", help="Only forks pushed within this many days."
    ),
    sort: str = typer.Option(
        "activity", "--sort", help=f"Rank forks by: {', '.join(FORK_SORT_FIELDS)}."
    ),
    output_format: str | None = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: table, json or markdown.",
    ),
    insecure: bool = typer.Option(
        False,
        "--insecure",
        help="Disable SSL certificate verification.",
    ),
):
    """Compare the forks of a repository to find active alternatives."""
    output_format = resolve_output_format(output_format)
    if sort not in FORK_SORT_FIELDS:
        raise typer.BadParameter(
            f"Unknown sort field: {sort}. Choose from: {', '.join(FORK_SORT_FIELDS)}"
        )
    if insecure:
        set_verify_ssl(False)
    if output_format == "table":
        console.print(f"Analyzing forks of [bold cyan]{repository}[/bold cyan]...")

    try:
        owner, repo = parse_full_name(repository)
        comparison = analyze_forks(
            owner,
            repo,
            provider=get_vcs_provider("github"),
            max_forks=max_forks,
            min_stars=min_stars,
            min_activity_days=min_activity,
            sort_by=sort,
        )
    except MalformedTimestamp as e:
        raise _fail(f"Error: upstream data is malformed - {e}") from None
    except (ValueError, DataUnavailable) as e:
        raise _fail(f"Error: {e}") from None
    finally:
        close_http_client()

    if output_format == "json":
        typer.echo(json.dumps(comparison.to_dict(), indent=2))
    elif output_format == "markdown":
        typer.echo(forks_to_markdown(comparison))
    else:
        display_fork_comparison(comparison)


@app.command("rate-limit")
def rate_limit():
    """Show the remaining GitHub API quota."""
    try:
        provider = get_vcs_provider("github")
        data = provider.get_rate_limit()
    except DataUnavailable as e:
        raise _fail(f"Error: {e}") from None
    finally:
        close_http_client()

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Resource", style="cyan")
    table.add_column("Remaining", justify="right")
    table.add_column("Limit", justify="right")

    for resource, values in sorted(data.get("resources", {}).items()):
        table.add_row(
            resource,
            str(values.get("remaining", "?")),
            str(values.get("limit", "?")),
        )

    console.print(table)


if __name__ == "__main__":
    app()
