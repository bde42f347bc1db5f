"""Tests for token_watcher.services.transcript_scanner."""

import json
from pathlib import Path
from unittest.mock import patch

from token_watcher.services.transcript_scanner import (
    list_projects,
    list_transcripts,
    resolve_project_path,
)


def test_missing_root_yields_nothing(tmp_path):
    assert list_projects(tmp_path / "does-not-exist") == []


def test_empty_root(projects_root):
    assert list_projects(projects_root) == []


def test_decodes_directory_name(project_dir, projects_root):
    projects = list_projects(projects_root)
    assert len(projects) == 1
    assert projects[0].dir_name == "-home-wiz-projects-myapp"
    assert projects[0].dir_path == project_dir
    assert projects[0].original_path == "/home/wiz/projects/myapp"


def test_files_in_root_are_not_projects(projects_root, project_dir):
    (projects_root / "stray.jsonl").write_text("{}\n")
    assert [p.dir_name for p in list_projects(projects_root)] == [project_dir.name]


def test_index_original_path_preferred(project_dir):
    (project_dir / "sessions-index.json").write_text(json.dumps({
        "version": 1, "entries": [], "originalPath": "/home/wiz/projects/my-app",
    }))
    assert resolve_project_path(project_dir) == "/home/wiz/projects/my-app"


def test_malformed_index_falls_back_to_decoding(project_dir):
    (project_dir / "sessions-index.json").write_text("{ not json")
    assert resolve_project_path(project_dir) == "/home/wiz/projects/myapp"


def test_index_without_original_path_falls_back(project_dir):
    (project_dir / "sessions-index.json").write_text(json.dumps({"originalPath": ""}))
    assert resolve_project_path(project_dir) == "/home/wiz/projects/myapp"


def test_index_of_wrong_shape_falls_back(project_dir):
    (project_dir / "sessions-index.json").write_text(json.dumps(["/elsewhere"]))
    assert resolve_project_path(project_dir) == "/home/wiz/projects/myapp"


def test_malformed_index_does_not_abort_discovery(projects_root):
    bad = projects_root / "-srv-bad"
    good = projects_root / "-srv-good"
    bad.mkdir()
    good.mkdir()
    (bad / "sessions-index.json").write_text("\x00\x01")
    (good / "sessions-index.json").write_text(json.dumps({"originalPath": "/srv/good-one"}))

    paths = {p.dir_name: p.original_path for p in list_projects(projects_root)}
    assert paths == {"-srv-bad": "/srv/bad", "-srv-good": "/srv/good-one"}


def test_list_transcripts_filters_by_extension(project_dir):
    (project_dir / "b.jsonl").write_text("")
    (project_dir / "a.jsonl").write_text("")
    (project_dir / "sessions-index.json").write_text("{}")
    (project_dir / "notes.txt").write_text("")
    (project_dir / "sub.jsonl").mkdir()
    names = [p.name for p in list_transcripts(project_dir)]
    assert names == ["a.jsonl", "b.jsonl"]


def test_list_transcripts_missing_dir(tmp_path):
    assert list_transcripts(tmp_path / "gone") == []


def _deny_locked(original):
    def guarded(self, *args, **kwargs):
        if "-b-locked" in str(self):
            raise PermissionError(13, "Permission denied", str(self))
        return original(self, *args, **kwargs)
    return guarded


def test_unreadable_project_falls_back_to_decoding(projects_root):
    for name in ("-a-good", "-b-locked"):
        (projects_root / name).mkdir()
        (projects_root / name / "sessions-index.json").write_text(
            json.dumps({"originalPath": "/from/index"}))

    with patch.object(Path, "is_file", _deny_locked(Path.is_file)), \
            patch.object(Path, "read_bytes", _deny_locked(Path.read_bytes)):
        paths = {p.dir_name: p.original_path for p in list_projects(projects_root)}

    assert paths == {"-a-good": "/from/index", "-b-locked": "/b/locked"}


def test_unstatable_entry_is_skipped(projects_root):
    (projects_root / "-a-good").mkdir()
    (projects_root / "-b-locked").mkdir()

    with patch.object(Path, "is_dir", _deny_locked(Path.is_dir)):
        names = [p.dir_name for p in list_projects(projects_root)]

    assert names == ["-a-good"]


def test_unreadable_transcripts_listing(projects_root):
    locked = projects_root / "-b-locked"
    locked.mkdir()
    (locked / "s.jsonl").write_text("")

    with patch.object(Path, "is_file", _deny_locked(Path.is_file)):
        assert list_transcripts(locked) == []
