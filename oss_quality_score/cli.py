"""
Command-line interface for OSS Quality Score.
"""

import json

import httpx
import typer
from rich.console import Console
from rich.table import Table

from oss_quality_score.config import load_scoring_policy, set_verify_ssl
from oss_quality_score.core import NetScoreResult, analyze_repository, build_ndjson_record
from oss_quality_score.http_client import close_http_client
from oss_quality_score.resolvers import resolve_repository

# --- Typer App ---
app = typer.Typer(add_completion=False)
# Diagnostics go to stderr; stdout carries only the NDJSON record
console = Console(stderr=True)


def display_results(result: NetScoreResult) -> None:
    """Display the sub-scores and latencies in a rich table."""
    table = Table(title="OSS Quality Score Report")
    table.add_column("Metric", justify="left", style="cyan", no_wrap=True)
    table.add_column("Score", justify="center", style="magenta")
    table.add_column("Latency (s)", justify="right")
    table.add_column("Status", justify="left")

    rows = [
        ("License", "license"),
        ("Responsiveness", "responsiveness"),
        ("Correctness", "correctness"),
    ]
    if result.rampup_enabled:
        rows.append(("Ramp-up", "rampup"))

    for label, key in rows:
        metric = getattr(result, key)
        outcome = result.outcomes.get(key)
        if outcome is not None and not outcome.ok:
            status = f"[yellow]Incomplete: {outcome.error}[/yellow]"
        else:
            status = "[green]OK[/green]"
        table.add_row(label, f"{metric.score:.3f}", f"{metric.latency:.3f}", status)

    score_color = "green"
    if result.net_score < 0.5:
        score_color = "red"
    elif result.net_score < 0.8:
        score_color = "yellow"
    table.add_row(
        "[bold]Net score[/bold]",
        f"[{score_color}]{result.net_score:.3f}[/{score_color}]",
        "",
        "",
    )

    console.print(table)


@app.command()
def main(
    url: str = typer.Argument(
        ...,
        help="Repository or package URL (e.g. https://github.com/owner/repo or https://www.npmjs.com/package/name).",
    ),
    include_rampup: bool = typer.Option(
        False,
        "--include-rampup",
        help="Check out the repository and include the ramp-up metric in the record.",
    ),
    net_score: bool = typer.Option(
        False,
        "--net-score",
        help="Append the weighted net score to the record as 'netScore'.",
    ),
    insecure: bool = typer.Option(
        False,
        "--insecure",
        help="Disable SSL certificate verification for HTTPS requests.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Display a table of sub-scores on stderr.",
    ),
):
    """Compute the quality score of a repository and print it as NDJSON."""
    set_verify_ssl(not insecure)

    try:
        policy = load_scoring_policy()
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from None

    try:
        identity = resolve_repository(url)
    except (ValueError, httpx.HTTPError) as e:
        console.print(f"[red]Error: {e}[/red]")
        close_http_client()
        raise typer.Exit(code=1) from None

    try:
        result = analyze_repository(
            identity, policy=policy, include_rampup=include_rampup
        )
    finally:
        close_http_client()

    if verbose:
        display_results(result)

    record = build_ndjson_record(result, include_net_score=net_score)
    typer.echo(json.dumps(record, separators=(",", ":")))


if __name__ == "__main__":
    app()
