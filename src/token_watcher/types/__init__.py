"""Type definitions for Token Watcher."""

from token_watcher.types.usage import CostBreakdown, ModelTier, TokenUsage
from token_watcher.types.sessions import (
    ProjectDir,
    ProjectSummary,
    SessionSummary,
    TimeRange,
    UsageTotals,
)
from token_watcher.types.rate_limits import (
    CodexCredits,
    CodexUsageSnapshot,
    CodexWindow,
    ExtraUsage,
    RateLimitWindow,
    Service,
    UsageSnapshot,
)

__all__ = [
    "CostBreakdown",
    "ModelTier",
    "TokenUsage",
    "ProjectDir",
    "ProjectSummary",
    "SessionSummary",
    "TimeRange",
    "UsageTotals",
    "CodexCredits",
    "CodexUsageSnapshot",
    "CodexWindow",
    "ExtraUsage",
    "RateLimitWindow",
    "Service",
    "UsageSnapshot",
]
