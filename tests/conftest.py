"""Pytest fixtures for elparser tests."""

from pathlib import Path

import pytest

# Reply from an Emacs process listing buffers as an association list
BUFFER_ALIST = """((name . "*scratch*") (size . 145) (modified . t)
 (mode . lisp-interaction-mode) (point 1 . 12) (tags "a" "b"))"""


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch) -> Path:
    """Keep tests away from real user and project configuration files.

    Points the user config at a missing file and runs each test from a
    fresh project directory (marked by .git so the config search stops there).
    """
    user_config = tmp_path / "user" / "config.toml"
    monkeypatch.setattr("elparser.config.USER_CONFIG_PATH", user_config)
    monkeypatch.setattr("elparser.cli.config_cmd.USER_CONFIG_PATH", user_config)

    project = tmp_path / "project"
    (project / ".git").mkdir(parents=True)
    monkeypatch.chdir(project)
    return project


@pytest.fixture
def buffer_alist() -> str:
    """Text of a buffer description alist."""
    return BUFFER_ALIST


@pytest.fixture
def project_dir(isolated_config: Path) -> Path:
    """The per-test project directory (current working directory)."""
    return isolated_config


@pytest.fixture
def buffer_alist_file(project_dir: Path) -> Path:
    """A file holding a buffer description alist."""
    path = project_dir / "buffer.el"
    path.write_text(BUFFER_ALIST)
    return path
