"""Shared test helpers: transcript record builders."""

import json
from pathlib import Path

OPUS_MODEL = "claude-opus-4-20250514"
SONNET_MODEL = "claude-sonnet-4-20250514"


def usage(input_tokens=0, output_tokens=0, cache_creation=0, cache_read=0) -> dict:
    return {
        "input_tokens": input_tokens,
        "output_tokens": output_tokens,
        "cache_creation_input_tokens": cache_creation,
        "cache_read_input_tokens": cache_read,
    }


def assistant_record(
    timestamp="2024-01-01T00:00:00Z",
    model=OPUS_MODEL,
    usage_payload=None,
    content=None,
) -> dict:
    message = {"role": "assistant"}
    if model is not None:
        message["model"] = model
    if usage_payload is not None:
        message["usage"] = usage_payload
    if content is not None:
        message["content"] = content
    record = {"type": "assistant", "message": message}
    if timestamp is not None:
        record["timestamp"] = timestamp
    return record


def user_record(text="hello", timestamp="2024-01-01T00:00:00Z") -> dict:
    return {
        "type": "user",
        "timestamp": timestamp,
        "message": {"role": "user", "content": text},
    }


def write_tool(content: str) -> dict:
    return {"type": "tool_use", "id": "toolu_w", "name": "Write",
            "input": {"file_path": "/tmp/a.py", "content": content}}


def edit_tool(old: str, new: str) -> dict:
    return {"type": "tool_use", "id": "toolu_e", "name": "Edit",
            "input": {"file_path": "/tmp/a.py", "old_string": old, "new_string": new}}


def write_jsonl(path: Path, records, extra_lines=()) -> Path:
    """Write records as JSONL, then any raw extra lines verbatim."""
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = [json.dumps(r) for r in records]
    lines.extend(extra_lines)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
