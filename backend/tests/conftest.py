"""
Pytest configuration and fixtures
"""
import os
import shutil
import sys
from pathlib import Path

import pytest

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

# Keep test runs off the filesystem and on readable logs
os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ.setdefault("LOG_FORMAT", "text")

from fastapi.testclient import TestClient

from formwizard.core.config import DEFAULT_TEMPLATES_DIR, Settings
from formwizard.core.templates import TemplateRenderer

BOOSTED_HEADERS = {"HX-Request": "true", "HX-Boosted": "true"}


@pytest.fixture(scope="function")
def settings() -> Settings:
    return Settings()


@pytest.fixture(scope="function")
def app(settings):
    """Fresh application built from the bundled templates"""
    from main import create_app
    return create_app(settings)


@pytest.fixture(scope="function")
def client(app):
    """Test client that reports redirects instead of following them"""
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client


@pytest.fixture(scope="function")
def templates_copy(tmp_path) -> Path:
    """Writable copy of the bundled templates for tests that break them"""
    target = tmp_path / "templates"
    shutil.copytree(DEFAULT_TEMPLATES_DIR, target)
    return target


@pytest.fixture(scope="function")
def make_client(settings):
    """Build a client over an arbitrary template directory"""
    from main import create_app

    def _make(templates_dir: Path, **client_kwargs) -> TestClient:
        app = create_app(settings, renderer=TemplateRenderer(templates_dir))
        client_kwargs.setdefault("follow_redirects", False)
        return TestClient(app, **client_kwargs)

    return _make
