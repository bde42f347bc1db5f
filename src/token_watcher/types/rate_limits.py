"""Remote rate-limit snapshot types.

Both usage endpoints return loosely-typed JSON; the ``from_dict``
constructors tolerate missing or null members so a partial response still
yields a usable snapshot.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


def _number(value: Any, default: float = 0.0) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    return default


@dataclass(frozen=True)
class RateLimitWindow:
    utilization: float
    resets_at: str

    @classmethod
    def from_dict(cls, raw: Any) -> Optional["RateLimitWindow"]:
        if not isinstance(raw, dict):
            return None
        return cls(
            utilization=_number(raw.get("utilization")),
            resets_at=raw.get("resets_at") or "",
        )


@dataclass(frozen=True)
class ExtraUsage:
    is_enabled: bool
    monthly_limit: float  # cents
    used_credits: float   # cents
    utilization: Optional[float] = None

    @classmethod
    def from_dict(cls, raw: Any) -> Optional["ExtraUsage"]:
        if not isinstance(raw, dict):
            return None
        utilization = raw.get("utilization")
        return cls(
            is_enabled=bool(raw.get("is_enabled", False)),
            monthly_limit=_number(raw.get("monthly_limit")),
            used_credits=_number(raw.get("used_credits")),
            utilization=_number(utilization) if utilization is not None else None,
        )


@dataclass(frozen=True)
class UsageSnapshot:
    five_hour: Optional[RateLimitWindow]
    seven_day: Optional[RateLimitWindow]
    seven_day_oauth_apps: Optional[RateLimitWindow] = None
    seven_day_opus: Optional[RateLimitWindow] = None
    seven_day_sonnet: Optional[RateLimitWindow] = None
    extra_usage: Optional[ExtraUsage] = None

    @classmethod
    def from_dict(cls, raw: dict) -> "UsageSnapshot":
        return cls(
            five_hour=RateLimitWindow.from_dict(raw.get("five_hour")),
            seven_day=RateLimitWindow.from_dict(raw.get("seven_day")),
            seven_day_oauth_apps=RateLimitWindow.from_dict(raw.get("seven_day_oauth_apps")),
            seven_day_opus=RateLimitWindow.from_dict(raw.get("seven_day_opus")),
            seven_day_sonnet=RateLimitWindow.from_dict(raw.get("seven_day_sonnet")),
            extra_usage=ExtraUsage.from_dict(raw.get("extra_usage")),
        )


@dataclass(frozen=True)
class CodexWindow:
    used_percent: float
    reset_at: int  # Unix seconds
    limit_window_seconds: int = 0

    @classmethod
    def from_dict(cls, raw: Any) -> Optional["CodexWindow"]:
        if not isinstance(raw, dict):
            return None
        return cls(
            used_percent=_number(raw.get("used_percent")),
            reset_at=int(_number(raw.get("reset_at"))),
            limit_window_seconds=int(_number(raw.get("limit_window_seconds"))),
        )


@dataclass(frozen=True)
class CodexCredits:
    has_credits: bool
    unlimited: bool
    balance: float

    @classmethod
    def from_dict(cls, raw: Any) -> Optional["CodexCredits"]:
        if not isinstance(raw, dict):
            return None
        balance = raw.get("balance")
        # The endpoint reports balance as a decimal string
        if isinstance(balance, str):
            try:
                balance = float(balance)
            except ValueError:
                balance = 0.0
        return cls(
            has_credits=bool(raw.get("has_credits", False)),
            unlimited=bool(raw.get("unlimited", False)),
            balance=_number(balance),
        )


@dataclass(frozen=True)
class CodexUsageSnapshot:
    plan_type: str
    primary_window: Optional[CodexWindow]
    secondary_window: Optional[CodexWindow]
    credits: Optional[CodexCredits] = None

    @classmethod
    def from_dict(cls, raw: dict) -> "CodexUsageSnapshot":
        rate_limit = raw.get("rate_limit")
        if not isinstance(rate_limit, dict):
            rate_limit = {}
        return cls(
            plan_type=raw.get("plan_type") or "",
            primary_window=CodexWindow.from_dict(rate_limit.get("primary_window")),
            secondary_window=CodexWindow.from_dict(rate_limit.get("secondary_window")),
            credits=CodexCredits.from_dict(raw.get("credits")),
        )


class Service(str, Enum):
    CLAUDE = "claude"
    CODEX = "codex"
