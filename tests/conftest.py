"""
Pytest configuration and fixtures for assetmill tests
"""

import os
import tempfile

# Keep import-time settings and logs out of the working directory
os.environ.setdefault("ASSETMILL_SYSTEM_ROOT", tempfile.mkdtemp(prefix="assetmill-"))

import pytest
import yaml

from assetmill.engines.bootstrap import reset_bootstrap_state
from assetmill.engines.registry import reset_global_registry
from assetmill.settings import refresh_app_settings_cache
from assetmill.settings.store import refresh_settings_cache


class CoffeeEngine:
    """Stand-in engine handle"""


class SassEngine:
    """Stand-in engine handle"""


@pytest.fixture
def system_root(tmp_path, monkeypatch):
    """Point the system root at a per-test directory"""
    root = tmp_path / "system"
    monkeypatch.setenv("ASSETMILL_SYSTEM_ROOT", str(root))
    refresh_settings_cache()
    refresh_app_settings_cache()
    yield root
    refresh_settings_cache()
    refresh_app_settings_cache()


@pytest.fixture(autouse=True)
def clean_global_registry(system_root):
    """Give every test an empty global registry and fresh bootstrap state"""
    reset_global_registry()
    reset_bootstrap_state()
    yield
    reset_global_registry()
    reset_bootstrap_state()


@pytest.fixture
def write_settings(system_root):
    """Write a settings.yaml under the test system root"""
    def _write(data):
        system_root.mkdir(parents=True, exist_ok=True)
        path = system_root / "settings.yaml"
        with open(path, "w", encoding="utf-8") as handle:
            yaml.safe_dump(data, handle)
        refresh_settings_cache()
        return path
    return _write


@pytest.fixture
def coffee_engine():
    return CoffeeEngine


@pytest.fixture
def sass_engine():
    return SassEngine


@pytest.fixture
def unwritable_system_root(tmp_path, monkeypatch):
    """Point the system root below a regular file so nothing can be created there"""
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    root = blocker / "system"
    monkeypatch.setenv("ASSETMILL_SYSTEM_ROOT", str(root))
    refresh_settings_cache()
    refresh_app_settings_cache()
    yield root
    refresh_settings_cache()
    refresh_app_settings_cache()
