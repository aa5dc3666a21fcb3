"""
Shared pytest fixtures for pathmap tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pytest as _pytest

import pathmap.config as config

# =============================================================================
# Environment isolation
# =============================================================================


@_pytest.fixture(autouse=True)
def isolated_env(
    tmp_path: _pathlib.Path,
    monkeypatch: _pytest.MonkeyPatch,
) -> _pathlib.Path:
    """
    Isolate every test from the user's environment and config files.

    Removes PATHMAP_* variables, points the user config directory at an
    empty temp dir, and runs the test from an empty working directory (so
    no ./.pathmap.yaml or .env is picked up).

    Returns:
        The user config directory (write config.yaml here to test it).
    """
    for key in list(_os.environ):
        if key.startswith("PATHMAP_"):
            monkeypatch.delenv(key)
    monkeypatch.delenv("NO_COLOR", raising=False)

    user_dir = tmp_path / "user-config"
    user_dir.mkdir()
    monkeypatch.setenv("PATHMAP_CONFIG_DIR", str(user_dir))

    work_dir = tmp_path / "work"
    work_dir.mkdir()
    monkeypatch.chdir(work_dir)

    return user_dir


@_pytest.fixture
def clean_settings() -> config.Settings:
    """Settings instance isolated from environment and .env file."""
    return config.Settings.construct_without_dotenv()


# =============================================================================
# Sample data
# =============================================================================


@_pytest.fixture
def nested() -> dict[_typing.Any, _typing.Any]:
    """Nested mapping mixing dicts, lists, int keys and a None leaf."""
    return {
        "index1": "Hey There",
        "index2": {
            "index3": {
                "index4": "value4",
                "index5": "value5",
                "index6": None,
            },
        },
        "abc": ["great", "stuff"],
        "numbers": {0: "zero", 1: "one"},
    }


@_pytest.fixture
def write_file(tmp_path: _pathlib.Path) -> _typing.Callable[[str, str], _pathlib.Path]:
    """Factory writing text files under tmp_path/docs."""
    docs_dir = tmp_path / "docs"
    docs_dir.mkdir()

    def _write(name: str, content: str) -> _pathlib.Path:
        path = docs_dir / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
