"""Tests for token_watcher.services.credentials."""

import base64
import json

import pytest

from token_watcher.services.credentials import (
    ClaudeCredentialStore,
    CodexCredentialStore,
    decode_plan_type,
    subscription_label,
)
from token_watcher.services.errors import CredentialsError


def _claude_file(path, token="tok-1", subscription="max", tier="default_claude_max_20x"):
    path.write_text(json.dumps({
        "claudeAiOauth": {
            "accessToken": token,
            "refreshToken": "refresh",
            "expiresAt": 0,
            "scopes": ["user:inference"],
            "subscriptionType": subscription,
            "rateLimitTier": tier,
        },
    }))
    return path


def _jwt(claims: dict) -> str:
    payload = base64.urlsafe_b64encode(json.dumps(claims).encode()).decode().rstrip("=")
    return f"eyJhbGciOiJub25lIn0.{payload}.sig"


def _codex_file(path, access="codex-tok", account_id="acct-1", id_token=None):
    tokens = {"access_token": access, "refresh_token": "r", "id_token": id_token or _jwt({})}
    if account_id:
        tokens["account_id"] = account_id
    path.write_text(json.dumps({
        "auth_mode": "chatgpt", "tokens": tokens, "last_refresh": "2026-01-01T00:00:00Z",
    }))
    return path


class TestClaudeCredentialStore:
    def test_reads_access_token(self, tmp_path):
        store = ClaudeCredentialStore(_claude_file(tmp_path / "c.json"))
        assert store.get_valid_access_token() == "tok-1"

    def test_rereads_file_every_call(self, tmp_path):
        path = _claude_file(tmp_path / "c.json", token="old")
        store = ClaudeCredentialStore(path)
        assert store.get_valid_access_token() == "old"
        _claude_file(path, token="refreshed")
        assert store.get_valid_access_token() == "refreshed"

    def test_missing_file(self, tmp_path):
        store = ClaudeCredentialStore(tmp_path / "missing.json")
        assert not store.exists()
        with pytest.raises(CredentialsError) as exc:
            store.get_valid_access_token()
        assert exc.value.path == str(tmp_path / "missing.json")

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text("{nope")
        with pytest.raises(CredentialsError):
            ClaudeCredentialStore(path).get_valid_access_token()

    def test_missing_token(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text(json.dumps({"claudeAiOauth": {"accessToken": ""}}))
        with pytest.raises(CredentialsError):
            ClaudeCredentialStore(path).get_valid_access_token()

    def test_subscription_info(self, tmp_path):
        info = ClaudeCredentialStore(_claude_file(tmp_path / "c.json")).get_subscription_info()
        assert info.tier_label == "Claude Max 20x"
        assert info.subscription_type == "max"


class TestSubscriptionLabel:
    def test_no_subscription(self):
        assert subscription_label("") == "Claude"

    def test_pro(self):
        assert subscription_label("pro", "default_claude_pro") == "Claude Pro"

    def test_max_5x(self):
        assert subscription_label("max", "default_claude_max_5x") == "Claude Max 5x"


class TestCodexCredentialStore:
    def test_reads_token_and_account(self, tmp_path):
        token = CodexCredentialStore(_codex_file(tmp_path / "auth.json")).get_access_token()
        assert token.access_token == "codex-tok"
        assert token.account_id == "acct-1"

    def test_account_id_optional(self, tmp_path):
        path = _codex_file(tmp_path / "auth.json", account_id=None)
        assert CodexCredentialStore(path).get_access_token().account_id == ""

    def test_missing_tokens(self, tmp_path):
        path = tmp_path / "auth.json"
        path.write_text(json.dumps({"auth_mode": "apikey"}))
        with pytest.raises(CredentialsError):
            CodexCredentialStore(path).get_access_token()

    def test_plan_type_from_id_token(self, tmp_path):
        path = _codex_file(tmp_path / "auth.json", id_token=_jwt({"chatgpt_plan_type": "pro"}))
        assert CodexCredentialStore(path).get_plan_type() == "pro"


class TestDecodePlanType:
    def test_missing_claim(self):
        assert decode_plan_type(_jwt({"email": "a@b.c"})) == ""

    def test_not_a_jwt(self):
        assert decode_plan_type("opaque") == ""

    def test_garbage_payload(self):
        assert decode_plan_type("a.!!!!.c") == ""
