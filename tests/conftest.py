"""
Global pytest fixtures for the shortlinks test suite.

Responsibilities:
    - Provide a fresh FastAPI TestClient via the app factory for integration tests
    - Provide isolated in-memory Storage and LinkRegistry fixtures for direct testing

Why an app factory?
    Using `create_app()` with an injected registry gives each test its own
    in-memory state, eliminating cross-test flakiness.
"""

import os

# Importing `main` builds a module-level app; keep it off any real database.
os.environ["LINKS_STORAGE_BACKEND"] = "memory"

import pytest
from fastapi.testclient import TestClient

from main import create_app
from shortlinks.registry.link_registry import LinkRegistry
from shortlinks.storage.storage import Storage


@pytest.fixture
def storage() -> Storage:
    """Fresh in-memory Storage backend."""
    return Storage()


@pytest.fixture
def registry(storage: Storage) -> LinkRegistry:
    """LinkRegistry wired to the storage fixture with the default random codes."""
    return LinkRegistry(storage=storage)


@pytest.fixture
def client(registry: LinkRegistry):
    """
    TestClient over a new app instance sharing the `registry` fixture.

    Redirects are not followed so tests can assert on the 302 itself. The
    client is entered as a context manager so the app lifespan runs.
    """
    app = create_app(registry=registry)
    with TestClient(app, follow_redirects=False) as c:
        yield c
