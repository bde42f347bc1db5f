"""Streaming usage parser for Claude Code session transcripts.

Transcripts are append-only JSONL files that can run to tens of thousands
of lines, so they are folded line by line into a small accumulator and
never loaded whole.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterator

import orjson

from token_watcher.types import SessionSummary, TokenUsage
from token_watcher.utils.cost_calculator import calculate_cost
from token_watcher.utils.model_classifier import UNKNOWN_MODEL, get_model_tier
from token_watcher.utils.time_range import parse_timestamp

logger = logging.getLogger(__name__)

WRITE_TOOL = "Write"
EDIT_TOOL = "Edit"


def iter_records(file_path: str | Path) -> Iterator[dict]:
    """Stream JSON object records from a JSONL file in on-disk order.

    Malformed and non-object lines are skipped. I/O errors propagate.
    """
    path = Path(file_path)
    line_num = 0
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        for line in f:
            line_num += 1
            line = line.strip()
            if not line:
                continue

            try:
                raw = orjson.loads(line)
            except orjson.JSONDecodeError as e:
                logger.debug("Malformed JSON at line %d in %s: %s", line_num, path.name, e)
                continue

            if isinstance(raw, dict):
                yield raw


def count_lines(text) -> int:
    """Count newline-delimited lines; empty or non-string text has none."""
    if not isinstance(text, str) or not text:
        return 0
    return text.count("\n") + 1


def count_changed_lines(content) -> tuple[int, int]:
    """Return (added, removed) line counts for Write/Edit tool calls in content."""
    added = 0
    removed = 0
    if not isinstance(content, list):
        return added, removed

    for block in content:
        if not isinstance(block, dict) or block.get("type") != "tool_use":
            continue
        tool_input = block.get("input")
        if not isinstance(tool_input, dict):
            continue

        name = block.get("name")
        if name == WRITE_TOOL:
            added += count_lines(tool_input.get("content"))
        elif name == EDIT_TOOL:
            delta = (count_lines(tool_input.get("new_string"))
                     - count_lines(tool_input.get("old_string")))
            if delta > 0:
                added += delta
            else:
                removed -= delta
    return added, removed


def _token_count(value) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return max(0, int(value))


def _usage_from_raw(raw_usage: dict) -> TokenUsage:
    return TokenUsage(
        input_tokens=_token_count(raw_usage.get("input_tokens")),
        output_tokens=_token_count(raw_usage.get("output_tokens")),
        cache_creation_input_tokens=_token_count(raw_usage.get("cache_creation_input_tokens")),
        cache_read_input_tokens=_token_count(raw_usage.get("cache_read_input_tokens")),
    )


@dataclass
class _SessionAccumulator:
    tokens: TokenUsage = field(default_factory=TokenUsage)
    message_count: int = 0
    model: str = ""
    first_timestamp: str = ""
    last_timestamp: str = ""
    lines_added: int = 0
    lines_removed: int = 0

    def add(self, record: dict, range_start: datetime | None):
        if record.get("type") != "assistant":
            return
        message = record.get("message")
        if not isinstance(message, dict):
            return

        # Line attribution ignores the time window and the usage payload
        added, removed = count_changed_lines(message.get("content"))
        self.lines_added += added
        self.lines_removed += removed

        timestamp = record.get("timestamp")
        if not isinstance(timestamp, str):
            timestamp = ""
        if range_start is not None:
            when = parse_timestamp(timestamp)
            if when is not None and when < range_start:
                return

        raw_usage = message.get("usage")
        if not isinstance(raw_usage, dict):
            return

        self.tokens = self.tokens + _usage_from_raw(raw_usage)
        self.message_count += 1

        model = message.get("model")
        if not self.model and isinstance(model, str) and model:
            self.model = model
        if timestamp:
            if not self.first_timestamp:
                self.first_timestamp = timestamp
            self.last_timestamp = timestamp

    def to_summary(self, session_id: str) -> SessionSummary:
        model = self.model or UNKNOWN_MODEL
        cost = calculate_cost(self.tokens, get_model_tier(model))
        return SessionSummary(
            session_id=session_id,
            project_dir="",
            project_path="",
            total_tokens=self.tokens,
            message_count=self.message_count,
            model=model,
            first_timestamp=self.first_timestamp,
            last_timestamp=self.last_timestamp,
            cost_usd=cost.total_cost,
            lines_added=self.lines_added,
            lines_removed=self.lines_removed,
        )


def parse_session_file(
    file_path: str | Path,
    range_start: datetime | None = None,
) -> SessionSummary | None:
    """Summarise the token usage of one session transcript.

    Returns None when the file is missing or unreadable, or when no
    assistant record with usage falls inside the window starting at
    ``range_start``. Project fields are left blank for the caller to stamp.
    """
    path = Path(file_path)
    if not path.is_file():
        logger.warning("Session file not found: %s", path)
        return None

    acc = _SessionAccumulator()
    try:
        for record in iter_records(path):
            acc.add(record, range_start)
    except OSError as e:
        logger.warning("Failed to read session %s: %s", path, e)
        return None

    if acc.message_count == 0:
        logger.debug("No usage in range for session %s", path.name)
        return None
    return acc.to_summary(path.stem)
