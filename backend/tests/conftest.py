"""
Shared fixtures for backend tests.
"""
import sys
from pathlib import Path

import pytest

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from starlette.requests import Request


@pytest.fixture
def make_request():
    """Build a real Starlette request from headers and a (host, port) peer."""

    def _make(headers=None, client=("144.12.54.87", 51342)):
        scope = {
            "type": "http",
            "method": "GET",
            "path": "/",
            "query_string": b"",
            "headers": [
                (name.lower().encode("latin-1"), value.encode("latin-1"))
                for name, value in (headers or {}).items()
            ],
            "client": client,
        }
        return Request(scope)

    return _make


@pytest.fixture
def reset_rate_limiter():
    """Clear the global limiter so route tests do not leak counts."""
    from middleware import rate_limiter

    rate_limiter.requests.clear()
    yield rate_limiter
    rate_limiter.requests.clear()
