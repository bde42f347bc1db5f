"""Clients for the remote rate-limit usage endpoints."""

import logging
from typing import Callable

import requests

from token_watcher.services.credentials import ClaudeCredentialStore, CodexCredentialStore
from token_watcher.services.errors import UsageApiError
from token_watcher.types import CodexUsageSnapshot, UsageSnapshot

logger = logging.getLogger(__name__)

USAGE_API_URL = "https://api.anthropic.com/api/oauth/usage"
CODEX_USAGE_URL = "https://chatgpt.com/backend-api/wham/usage"
ANTHROPIC_BETA = "oauth-2025-04-20"
DEFAULT_TIMEOUT = 10


class UsageApiClient:
    """Fetches usage snapshots, retrying once on 401 with a fresh token."""

    def __init__(self, session: requests.Session | None = None, timeout: int = DEFAULT_TIMEOUT):
        self._session = session or requests.Session()
        self._timeout = timeout

    def fetch_rate_limits(self, credentials: ClaudeCredentialStore) -> UsageSnapshot:
        def headers() -> dict[str, str]:
            return {
                "Authorization": f"Bearer {credentials.get_valid_access_token()}",
                "anthropic-beta": ANTHROPIC_BETA,
            }

        data = self._get_json(USAGE_API_URL, headers, service="Claude")
        return UsageSnapshot.from_dict(data)

    def fetch_codex_usage(self, credentials: CodexCredentialStore) -> CodexUsageSnapshot:
        def headers() -> dict[str, str]:
            token = credentials.get_access_token()
            result = {"Authorization": f"Bearer {token.access_token}"}
            if token.account_id:
                result["ChatGPT-Account-Id"] = token.account_id
            return result

        data = self._get_json(CODEX_USAGE_URL, headers, service="Codex")
        return CodexUsageSnapshot.from_dict(data)

    def _get_json(self, url: str, headers: Callable[[], dict[str, str]], service: str) -> dict:
        """GET a JSON object; headers are rebuilt so a retry sees a fresh token."""
        response = self._get(url, headers(), service)
        if response.status_code == 401:
            logger.warning("%s usage API returned 401, retrying with a fresh token", service)
            response = self._get(url, headers(), service)

        if not response.ok:
            raise UsageApiError(response.status_code, response.reason or "", service)

        try:
            data = response.json()
        except ValueError as e:
            raise UsageApiError(response.status_code, "invalid JSON body", service) from e
        if not isinstance(data, dict):
            raise UsageApiError(response.status_code, "unexpected response shape", service)
        return data

    def _get(self, url: str, headers: dict[str, str], service: str) -> requests.Response:
        try:
            return self._session.get(url, headers=headers, timeout=self._timeout)
        except requests.RequestException as e:
            raise UsageApiError(0, str(e), service) from e

    def close(self):
        self._session.close()
