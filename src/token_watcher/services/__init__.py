"""Services for Token Watcher."""

from token_watcher.services.config_manager import (
    ConfigManager,
    ServiceAvailability,
    check_service_availability,
)
from token_watcher.services.credentials import ClaudeCredentialStore, CodexCredentialStore
from token_watcher.services.errors import CredentialsError, TokenWatcherError, UsageApiError
from token_watcher.services.project_aggregator import aggregate_project
from token_watcher.services.session_parser import parse_session_file
from token_watcher.services.transcript_scanner import list_projects
from token_watcher.services.usage_api import UsageApiClient
from token_watcher.services.usage_query import UsageQueryEngine

__all__ = [
    "ConfigManager",
    "ServiceAvailability",
    "check_service_availability",
    "ClaudeCredentialStore",
    "CodexCredentialStore",
    "CredentialsError",
    "TokenWatcherError",
    "UsageApiError",
    "aggregate_project",
    "parse_session_file",
    "list_projects",
    "UsageApiClient",
    "UsageQueryEngine",
]
