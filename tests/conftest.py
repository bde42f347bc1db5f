"""Shared test fixtures for Token Watcher."""

import sys
from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def qapp():
    """Create a QCoreApplication for tests that need Qt."""
    from PySide6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication(sys.argv or ["test"])
    yield app


@pytest.fixture
def isolated_settings(tmp_path):
    """Redirect QSettings storage into the test's temp directory."""
    from PySide6.QtCore import QSettings

    config_dir = str(tmp_path / "config")
    QSettings.setPath(QSettings.IniFormat, QSettings.UserScope, config_dir)
    QSettings.setPath(QSettings.NativeFormat, QSettings.UserScope, config_dir)
    return config_dir


@pytest.fixture
def projects_root(tmp_path) -> Path:
    """Create an empty temporary Claude projects directory."""
    root = tmp_path / ".claude" / "projects"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def project_dir(projects_root) -> Path:
    project = projects_root / "-home-wiz-projects-myapp"
    project.mkdir()
    return project
