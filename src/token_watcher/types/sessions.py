"""Session and project summary types."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from token_watcher.types.usage import TokenUsage


class TimeRange(str, Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    ALL = "all"


@dataclass(frozen=True)
class ProjectDir:
    dir_name: str       # Encoded directory name, the project key
    dir_path: Path
    original_path: str  # Display path, from sessions-index.json or decoded


@dataclass(frozen=True)
class SessionSummary:
    session_id: str
    project_dir: str
    project_path: str
    total_tokens: TokenUsage
    message_count: int
    model: str
    first_timestamp: str
    last_timestamp: str
    cost_usd: float
    lines_added: int = 0
    lines_removed: int = 0


@dataclass(frozen=True)
class ProjectSummary:
    project_dir: str
    project_path: str
    sessions: list[SessionSummary] = field(default_factory=list)
    total_tokens: TokenUsage = field(default_factory=TokenUsage)
    total_cost: float = 0.0
    lines_added: int = 0
    lines_removed: int = 0

    @property
    def session_count(self) -> int:
        return len(self.sessions)


@dataclass(frozen=True)
class UsageTotals:
    total_tokens: int = 0
    total_cost: float = 0.0
    lines_added: int = 0
    lines_removed: int = 0
