"""Discover project directories under the Claude projects root."""

import logging
from pathlib import Path

import orjson

from token_watcher.types import ProjectDir
from token_watcher.utils.path_codec import decode_path

logger = logging.getLogger(__name__)

CLAUDE_PROJECTS_DIR = Path.home() / ".claude" / "projects"
SESSIONS_INDEX_FILE = "sessions-index.json"
TRANSCRIPT_SUFFIX = ".jsonl"


def list_projects(projects_root: str | Path | None = None) -> list[ProjectDir]:
    """List project directories with their display paths.

    A missing root is the normal "nothing recorded yet" state and yields
    an empty list.
    """
    root = Path(projects_root) if projects_root else CLAUDE_PROJECTS_DIR
    try:
        if not root.is_dir():
            logger.debug("Projects root does not exist: %s", root)
            return []
        entries = sorted(root.iterdir())
    except OSError as e:
        logger.warning("Cannot list projects root %s: %s", root, e)
        return []

    projects = []
    for entry in entries:
        try:
            if not entry.is_dir():
                continue
        except OSError as e:
            logger.warning("Skipping unusable project dir %s: %s", entry, e)
            continue
        projects.append(ProjectDir(
            dir_name=entry.name,
            dir_path=entry,
            original_path=resolve_project_path(entry),
        ))
    return projects


def resolve_project_path(project_dir: Path) -> str:
    """Read originalPath from the sessions index, else decode the dir name."""
    original = _read_original_path(project_dir / SESSIONS_INDEX_FILE)
    return original or decode_path(project_dir.name)


def list_transcripts(project_dir: Path) -> list[Path]:
    """List session transcript files directly inside a project directory."""
    try:
        return sorted(
            p for p in project_dir.iterdir()
            if p.suffix == TRANSCRIPT_SUFFIX and p.is_file()
        )
    except OSError as e:
        logger.warning("Cannot list project dir %s: %s", project_dir, e)
        return []


def _read_original_path(index_path: Path) -> str:
    try:
        data = orjson.loads(index_path.read_bytes())
    except FileNotFoundError:
        return ""
    except (OSError, orjson.JSONDecodeError) as e:
        logger.warning("Ignoring malformed sessions index %s: %s", index_path, e)
        return ""
    if not isinstance(data, dict):
        return ""
    original = data.get("originalPath")
    return original if isinstance(original, str) else ""
