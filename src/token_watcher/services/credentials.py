"""File-backed OAuth credential readers.

The CLI tools refresh their tokens out-of-band, so every accessor re-reads
the backing file instead of caching a token in process.
"""

import base64
import logging
from dataclasses import dataclass
from pathlib import Path

import orjson

from token_watcher.services.errors import CredentialsError

logger = logging.getLogger(__name__)

CLAUDE_CREDENTIALS_PATH = Path.home() / ".claude" / ".credentials.json"
CODEX_AUTH_PATH = Path.home() / ".codex" / "auth.json"


@dataclass(frozen=True)
class SubscriptionInfo:
    tier_label: str
    subscription_type: str = ""
    rate_limit_tier: str = ""


@dataclass(frozen=True)
class CodexToken:
    access_token: str
    account_id: str = ""


def _read_json(path: Path) -> dict:
    try:
        data = orjson.loads(path.read_bytes())
    except FileNotFoundError:
        raise CredentialsError(f"Credentials not found at {path}", str(path)) from None
    except OSError as e:
        raise CredentialsError(f"Cannot read credentials at {path}: {e}", str(path)) from e
    except orjson.JSONDecodeError as e:
        raise CredentialsError(f"Malformed credentials at {path}", str(path)) from e
    if not isinstance(data, dict):
        raise CredentialsError(f"Malformed credentials at {path}", str(path))
    return data


class ClaudeCredentialStore:
    """Reads the Claude Code OAuth credentials file."""

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path).expanduser() if path else CLAUDE_CREDENTIALS_PATH

    def exists(self) -> bool:
        return self.path.is_file()

    def _oauth(self) -> dict:
        oauth = _read_json(self.path).get("claudeAiOauth")
        if not isinstance(oauth, dict):
            raise CredentialsError(f"No Claude OAuth entry in {self.path}", str(self.path))
        return oauth

    def get_valid_access_token(self) -> str:
        """Return the current access token.

        An expired token is still returned; the usage API answers 401 and
        the caller retries after the CLI has refreshed the file.
        """
        token = self._oauth().get("accessToken")
        if not isinstance(token, str) or not token:
            raise CredentialsError(f"No access token in {self.path}", str(self.path))
        return token

    def get_subscription_info(self) -> SubscriptionInfo:
        oauth = self._oauth()
        subscription_type = oauth.get("subscriptionType") or ""
        rate_limit_tier = oauth.get("rateLimitTier") or ""
        return SubscriptionInfo(
            tier_label=subscription_label(subscription_type, rate_limit_tier),
            subscription_type=subscription_type,
            rate_limit_tier=rate_limit_tier,
        )


def subscription_label(subscription_type: str, rate_limit_tier: str = "") -> str:
    """Human label for a subscription, e.g. "Claude Max 20x"."""
    if not subscription_type:
        return "Claude"
    label = f"Claude {subscription_type.capitalize()}"
    for multiplier in ("20x", "5x"):
        if multiplier in rate_limit_tier:
            return f"{label} {multiplier}"
    return label


class CodexCredentialStore:
    """Reads the Codex CLI auth file."""

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path).expanduser() if path else CODEX_AUTH_PATH

    def exists(self) -> bool:
        return self.path.is_file()

    def _tokens(self) -> dict:
        tokens = _read_json(self.path).get("tokens")
        if not isinstance(tokens, dict):
            raise CredentialsError(f"No tokens in {self.path}", str(self.path))
        return tokens

    def get_access_token(self) -> CodexToken:
        tokens = self._tokens()
        access_token = tokens.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            raise CredentialsError(f"No access token in {self.path}", str(self.path))
        return CodexToken(access_token=access_token, account_id=tokens.get("account_id") or "")

    def get_plan_type(self) -> str:
        """Read chatgpt_plan_type from the id_token's JWT payload."""
        id_token = self._tokens().get("id_token")
        if not isinstance(id_token, str):
            return ""
        return decode_plan_type(id_token)


def decode_plan_type(id_token: str) -> str:
    parts = id_token.split(".")
    if len(parts) < 2:
        return ""
    payload = parts[1]
    try:
        raw = base64.urlsafe_b64decode(payload + "=" * (-len(payload) % 4))
        claims = orjson.loads(raw)
    except (ValueError, orjson.JSONDecodeError):
        logger.debug("Undecodable Codex id_token payload")
        return ""
    if not isinstance(claims, dict):
        return ""
    plan_type = claims.get("chatgpt_plan_type")
    return plan_type if isinstance(plan_type, str) else ""
