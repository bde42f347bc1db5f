"""Display formatting for costs, token counts and rate-limit windows."""

from datetime import datetime, timezone


def format_cost(usd: float) -> str:
    if usd >= 1:
        return f"${usd:.2f}"
    if usd >= 0.01:
        return f"${usd:.3f}"
    if usd == 0:
        return "$0.00"
    return f"${usd:.4f}"


def format_token_count(count: int) -> str:
    if count >= 1_000_000:
        return f"{count / 1_000_000:.1f}M"
    if count >= 1_000:
        return f"{count / 1_000:.1f}K"
    return str(count)


def format_line_count(added: int, removed: int) -> str:
    return f"+{added} / -{removed}"


def format_percentage(value: float) -> str:
    return f"{value:.1f}%"


def cents_to_dollars(cents: float) -> float:
    return cents / 100


def unix_to_iso(seconds: int) -> str:
    return datetime.fromtimestamp(seconds, tz=timezone.utc).isoformat()


def format_reset_countdown(iso_string: str, now: datetime | None = None) -> str:
    """Format the time remaining until an ISO timestamp, e.g. "2h 5m"."""
    if not iso_string:
        return ""
    try:
        target = datetime.fromisoformat(iso_string.replace("Z", "+00:00"))
    except ValueError:
        return ""
    if target.tzinfo is None:
        target = target.astimezone()
    if now is None:
        now = datetime.now(timezone.utc)

    minutes = int((target - now).total_seconds() // 60)
    if minutes < 1:
        return "now"
    hours, mins = divmod(minutes, 60)
    if hours < 1:
        return f"{mins}m"
    days, hrs = divmod(hours, 24)
    if days < 1:
        return f"{hrs}h {mins}m"
    return f"{days}d {hrs}h"
