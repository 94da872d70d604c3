# tests/conftest.py
# PURPOSE: create a TestClient around the app and reset dependency overrides.

# Ensure project root is on sys.path so `import csrf_guard` works when running pytest.
import sys, os

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import re

import pytest
from fastapi.testclient import TestClient

from csrf_guard.main import app  # FastAPI app

TOKEN_IN_PAGE = re.compile(r'name="csrf_token" value="([0-9a-f]{64})"')


@pytest.fixture()
def client():
    # Context manager runs the lifespan (logging setup) like a real server
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def page_token():
    """Return a helper that pulls the hidden-field token out of a rendered page."""

    def _extract(html: str) -> str:
        match = TOKEN_IN_PAGE.search(html)
        assert match, "csrf hidden field not found in page"
        return match.group(1)

    return _extract
