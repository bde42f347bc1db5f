"""Aggregate per-session usage into a project summary."""

import asyncio
import dataclasses
import logging
from datetime import datetime
from pathlib import Path

from token_watcher.services.session_parser import parse_session_file
from token_watcher.services.transcript_scanner import list_transcripts
from token_watcher.types import (
    ProjectDir,
    ProjectSummary,
    SessionSummary,
    TimeRange,
    TokenUsage,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENT_SCANS = 16


async def scan_session(
    file_path: Path,
    range_start: datetime | None,
    limiter: asyncio.Semaphore,
) -> SessionSummary | None:
    """Parse one transcript off the event loop.

    Any failure is logged and reported as an absent session so sibling
    scans carry on.
    """
    async with limiter:
        try:
            return await asyncio.to_thread(parse_session_file, file_path, range_start)
        except Exception:
            logger.exception("Failed to scan session %s", file_path)
            return None


def _modified_since(file_path: Path, range_start: datetime) -> bool:
    try:
        return file_path.stat().st_mtime >= range_start.timestamp()
    except OSError:
        return False


def select_transcripts(
    project: ProjectDir,
    time_range: TimeRange,
    range_start: datetime | None,
) -> list[Path]:
    """List the transcripts worth scanning for a range.

    For "today" only, files last modified before midnight are skipped
    without being read. Appends refresh the mtime, so this trades a small
    risk of undercount for speed. Longer ranges always scan every file.
    """
    files = list_transcripts(project.dir_path)
    if time_range != TimeRange.TODAY or range_start is None:
        return files

    recent = [f for f in files if _modified_since(f, range_start)]
    if len(recent) < len(files):
        logger.debug(
            "Skipped %d stale transcripts in %s",
            len(files) - len(recent), project.dir_name,
        )
    return recent


def summarize_project(
    project: ProjectDir,
    sessions: list[SessionSummary],
) -> ProjectSummary | None:
    """Stamp sessions with their project and sum them, newest first.

    Returns None for a project with no sessions.
    """
    if not sessions:
        return None

    stamped = [
        dataclasses.replace(s, project_dir=project.dir_name, project_path=project.original_path)
        for s in sessions
    ]
    # ISO 8601 strings sort chronologically
    stamped.sort(key=lambda s: s.last_timestamp, reverse=True)

    total_tokens = TokenUsage()
    total_cost = 0.0
    lines_added = 0
    lines_removed = 0
    for session in stamped:
        total_tokens = total_tokens + session.total_tokens
        total_cost += session.cost_usd
        lines_added += session.lines_added
        lines_removed += session.lines_removed

    return ProjectSummary(
        project_dir=project.dir_name,
        project_path=project.original_path,
        sessions=stamped,
        total_tokens=total_tokens,
        total_cost=total_cost,
        lines_added=lines_added,
        lines_removed=lines_removed,
    )


async def aggregate_project(
    project: ProjectDir,
    time_range: TimeRange,
    range_start: datetime | None,
    limiter: asyncio.Semaphore | None = None,
) -> ProjectSummary | None:
    """Scan every transcript in a project concurrently and summarise them."""
    if limiter is None:
        limiter = asyncio.Semaphore(DEFAULT_MAX_CONCURRENT_SCANS)

    files = await asyncio.to_thread(select_transcripts, project, time_range, range_start)
    if not files:
        return None

    results = await asyncio.gather(
        *(scan_session(f, range_start, limiter) for f in files)
    )
    return summarize_project(project, [s for s in results if s is not None])
