"""Top-level usage queries over all Claude Code projects."""

import asyncio
import logging
from datetime import datetime
from pathlib import Path

from token_watcher.services.credentials import ClaudeCredentialStore, CodexCredentialStore
from token_watcher.services.project_aggregator import (
    DEFAULT_MAX_CONCURRENT_SCANS,
    aggregate_project,
)
from token_watcher.services.transcript_scanner import CLAUDE_PROJECTS_DIR, list_projects
from token_watcher.services.usage_api import UsageApiClient
from token_watcher.types import (
    CodexUsageSnapshot,
    ProjectSummary,
    Service,
    TimeRange,
    UsageSnapshot,
    UsageTotals,
)
from token_watcher.utils.time_range import get_range_start

logger = logging.getLogger(__name__)


class UsageQueryEngine:
    """Recomputes usage summaries from the transcripts on every query."""

    def __init__(
        self,
        projects_root: str | Path | None = None,
        max_concurrent_scans: int = DEFAULT_MAX_CONCURRENT_SCANS,
        api_client: UsageApiClient | None = None,
        claude_credentials: ClaudeCredentialStore | None = None,
        codex_credentials: CodexCredentialStore | None = None,
    ):
        self._projects_root = Path(projects_root) if projects_root else CLAUDE_PROJECTS_DIR
        self._max_concurrent_scans = max(1, max_concurrent_scans)
        self._api_client = api_client
        self._claude_credentials = claude_credentials or ClaudeCredentialStore()
        self._codex_credentials = codex_credentials or CodexCredentialStore()

    @classmethod
    def from_config(cls, config, projects_root: str | Path | None = None) -> "UsageQueryEngine":
        """Build an engine from a ConfigManager's settings."""
        return cls(
            projects_root=projects_root or config.get_path("general/projectsDir"),
            max_concurrent_scans=config.get_int("general/maxConcurrentScans"),
            api_client=UsageApiClient(timeout=config.get_int("network/timeout")),
            claude_credentials=ClaudeCredentialStore(config.get_path("claude/credentialsPath")),
            codex_credentials=CodexCredentialStore(config.get_path("codex/credentialsPath")),
        )

    @property
    def projects_root(self) -> Path:
        return self._projects_root

    async def get_project_summaries(
        self,
        time_range: TimeRange,
        now: datetime | None = None,
    ) -> list[ProjectSummary]:
        """Summarise every project with usage in range, highest cost first."""
        range_start = get_range_start(time_range, now)
        projects = await asyncio.to_thread(list_projects, self._projects_root)
        limiter = asyncio.Semaphore(self._max_concurrent_scans)

        results = await asyncio.gather(
            *(aggregate_project(p, time_range, range_start, limiter) for p in projects)
        )
        summaries = [s for s in results if s is not None]
        summaries.sort(key=lambda s: s.total_cost, reverse=True)
        logger.debug(
            "%d of %d projects have usage for range %s",
            len(summaries), len(projects), time_range.value,
        )
        return summaries

    async def get_usage_totals(
        self,
        time_range: TimeRange,
        now: datetime | None = None,
    ) -> UsageTotals:
        """Flatten all project summaries into global totals."""
        summaries = await self.get_project_summaries(time_range, now)
        return UsageTotals(
            total_tokens=sum(p.total_tokens.total for p in summaries),
            total_cost=sum(p.total_cost for p in summaries),
            lines_added=sum(p.lines_added for p in summaries),
            lines_removed=sum(p.lines_removed for p in summaries),
        )

    async def get_rate_limits(self, service: Service) -> UsageSnapshot | CodexUsageSnapshot:
        """Fetch the live rate-limit snapshot for a service."""
        if self._api_client is None:
            self._api_client = UsageApiClient()
        if service == Service.CODEX:
            return await asyncio.to_thread(
                self._api_client.fetch_codex_usage, self._codex_credentials,
            )
        return await asyncio.to_thread(
            self._api_client.fetch_rate_limits, self._claude_credentials,
        )
