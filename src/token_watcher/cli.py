"""Command line front end for the usage queries."""

import asyncio
import logging
import sys

import click

from token_watcher.services.config_manager import ConfigManager
from token_watcher.services.errors import CredentialsError, UsageApiError
from token_watcher.services.usage_query import UsageQueryEngine
from token_watcher.types import (
    CodexUsageSnapshot,
    CodexWindow,
    RateLimitWindow,
    Service,
    TimeRange,
    UsageSnapshot,
)
from token_watcher.utils.formatting import (
    cents_to_dollars,
    format_cost,
    format_line_count,
    format_reset_countdown,
    format_token_count,
    unix_to_iso,
)
from token_watcher.utils.path_codec import extract_project_name

RANGE_CHOICES = click.Choice([r.value for r in TimeRange])
SERVICE_CHOICES = click.Choice([s.value for s in Service])


def _configure_logging(debug: bool):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@click.group()
@click.option("--projects-dir", type=click.Path(file_okay=False), default=None,
              help="Claude projects directory (default from settings).")
@click.option("--debug", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx, projects_dir, debug):
    """Token usage and cost for Claude Code sessions."""
    config = ConfigManager()
    _configure_logging(debug or config.get_bool("advanced/debugLogging"))
    ctx.obj = UsageQueryEngine.from_config(config, projects_root=projects_dir)


@cli.command()
@click.option("--range", "range_", type=RANGE_CHOICES, default=TimeRange.TODAY.value,
              show_default=True)
@click.pass_obj
def projects(engine: UsageQueryEngine, range_):
    """List projects by cost, with their sessions."""
    summaries = asyncio.run(engine.get_project_summaries(TimeRange(range_)))
    if not summaries:
        click.echo(f"No usage recorded under {engine.projects_root} for '{range_}'.")
        return

    for project in summaries:
        click.echo(
            f"{format_cost(project.total_cost):>10}  "
            f"{format_token_count(project.total_tokens.total):>7} tok  "
            f"{format_line_count(project.lines_added, project.lines_removed):>14}  "
            f"{extract_project_name(project.project_path)} ({project.session_count} sessions)"
        )
        for session in project.sessions:
            click.echo(
                f"    {format_cost(session.cost_usd):>10}  "
                f"{format_token_count(session.total_tokens.total):>7} tok  "
                f"{session.session_id[:8]}  {session.model}  {session.last_timestamp}"
            )


@cli.command()
@click.option("--range", "range_", type=RANGE_CHOICES, default=TimeRange.TODAY.value,
              show_default=True)
@click.pass_obj
def totals(engine: UsageQueryEngine, range_):
    """Show total tokens, cost and changed lines."""
    result = asyncio.run(engine.get_usage_totals(TimeRange(range_)))
    click.echo(f"Cost:   {format_cost(result.total_cost)}")
    click.echo(f"Tokens: {format_token_count(result.total_tokens)}")
    click.echo(f"Lines:  {format_line_count(result.lines_added, result.lines_removed)}")


def _window_line(label: str, used_percent: float, reset_iso: str) -> str:
    left = max(0.0, 100 - used_percent)
    countdown = format_reset_countdown(reset_iso)
    suffix = f", resets in {countdown}" if countdown else ""
    return f"{label:<14} {left:.0f}% left{suffix}"


def _claude_lines(snapshot: UsageSnapshot) -> list[str]:
    windows: list[tuple[str, RateLimitWindow | None]] = [
        ("Session (5h)", snapshot.five_hour),
        ("Weekly", snapshot.seven_day),
        ("Weekly Opus", snapshot.seven_day_opus),
        ("Weekly Sonnet", snapshot.seven_day_sonnet),
    ]
    lines = [_window_line(label, w.utilization, w.resets_at) for label, w in windows if w]
    extra = snapshot.extra_usage
    if extra and extra.is_enabled:
        lines.append(
            f"{'Extra':<14} {format_cost(cents_to_dollars(extra.used_credits))}"
            f" / {format_cost(cents_to_dollars(extra.monthly_limit))}"
        )
    return lines


def _codex_lines(snapshot: CodexUsageSnapshot) -> list[str]:
    windows: list[tuple[str, CodexWindow | None]] = [
        ("Session", snapshot.primary_window),
        ("Weekly", snapshot.secondary_window),
    ]
    lines = [
        _window_line(label, w.used_percent, unix_to_iso(w.reset_at))
        for label, w in windows if w
    ]
    if not lines:
        lines.append("No rate limit data")
    credits = snapshot.credits
    if credits and not credits.unlimited:
        lines.append(f"{'Credits':<14} ${credits.balance:.2f}")
    return lines


@cli.command()
@click.option("--service", type=SERVICE_CHOICES, default=Service.CLAUDE.value,
              show_default=True)
@click.pass_obj
def limits(engine: UsageQueryEngine, service):
    """Show live rate-limit windows."""
    selected = Service(service)
    try:
        snapshot = asyncio.run(engine.get_rate_limits(selected))
    except CredentialsError as e:
        click.echo(f"Not set up: {e}", err=True)
        click.echo(f"Sign in with the {selected.value} CLI to create {e.path}.", err=True)
        sys.exit(1)
    except UsageApiError as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    if isinstance(snapshot, CodexUsageSnapshot):
        lines = _codex_lines(snapshot)
    else:
        lines = _claude_lines(snapshot)
    for line in lines:
        click.echo(line)


def main():
    cli()
