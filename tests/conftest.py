"""Shared test fixtures for the recordkeeper test suite."""

from collections.abc import Callable, Generator, Iterator
from contextlib import AbstractContextManager, contextmanager
from pathlib import Path

import pytest
import structlog

from recordkeeper.config import get_settings
from recordkeeper.config.settings import set_toml_config
from recordkeeper.records.scope import CallerScope
from recordkeeper.records.stores.inmemory import InMemoryRecordStore


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Empty config/ directory under tmp_path."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Write TOML files into ``test_config_dir``.

    Usage:
        mock_toml_files({"default.toml": "[storage.records]\nbackend = 'postgres'"})
    """

    def _write(files: dict[str, str]) -> None:
        for filename, content in files.items():
            (test_config_dir / filename).write_text(content)

    return _write


@pytest.fixture
def env_override(
    monkeypatch: pytest.MonkeyPatch,
) -> Callable[[dict[str, str]], AbstractContextManager[None]]:
    """Set environment variables for the duration of a ``with`` block.

    Usage:
        with env_override({"RECORDKEEPER_DEBUG": "true"}):
            settings = Settings()
    """

    @contextmanager
    def _override(overrides: dict[str, str]) -> Iterator[None]:
        with monkeypatch.context() as patch:
            for name, value in overrides.items():
                patch.setenv(name, value)
            yield

    return _override


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Start and finish every test with no cached settings or TOML layer."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    set_toml_config({})


@pytest.fixture(autouse=True)
def restore_structlog_config() -> Generator[None, None, None]:
    """Undo setup_logging() so no test logs to a previous test's closed stream."""
    config = structlog.get_config()
    yield
    structlog.configure(**config)


@pytest.fixture
def store() -> InMemoryRecordStore:
    """Create a fresh in-memory record store."""
    return InMemoryRecordStore()


@pytest.fixture
def scope_a() -> CallerScope:
    """Organization admin of organization A."""
    return CallerScope(organization="A", user="alice", is_admin=True)


@pytest.fixture
def scope_b() -> CallerScope:
    """Organization admin of organization B."""
    return CallerScope(organization="B", user="bob", is_admin=True)


@pytest.fixture
def global_admin() -> CallerScope:
    """Global admin whose home organization is "built-in"."""
    return CallerScope(
        organization="built-in",
        user="root",
        is_admin=True,
        is_global_admin=True,
    )
