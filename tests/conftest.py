"""Shared test fixtures for pipedrive-archiver."""

import pytest
import structlog
from structlog.testing import capture_logs

from pipedrive_archiver.core.config import ArchiverSettings


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch, tmp_path):
    """Point ArchiverSettings at an empty config.yaml and clean env.

    Removes any real PIPEDRIVE_* env vars from the host and moves into
    tmp_path so a developer's .env is never loaded during tests.

    Tests that need custom config values should write YAML to their own
    tmp_path file and set PIPEDRIVE_ARCHIVER_CONFIG accordingly.
    """
    for var in [
        "PIPEDRIVE_API_TOKEN",
        "PIPEDRIVE_DOMAIN",
        "PIPEDRIVE_FETCH",
        "PIPEDRIVE_ARCHIVE",
        "PIPEDRIVE_LOGGING",
        "NO_COLOR",
    ]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    config = tmp_path / "config.yaml"
    config.write_text("")  # empty = all defaults
    monkeypatch.setenv("PIPEDRIVE_ARCHIVER_CONFIG", str(config))


@pytest.fixture
def mock_settings(monkeypatch):
    """Create ArchiverSettings with required env vars set."""
    monkeypatch.setenv("PIPEDRIVE_API_TOKEN", "test-token")
    return ArchiverSettings()


@pytest.fixture(autouse=True)
def log_output():
    """Capture structlog events so they never mix into captured stdout."""
    structlog.reset_defaults()
    with capture_logs() as logs:
        yield logs
