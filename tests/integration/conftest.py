from __future__ import annotations

import os

import pytest


@pytest.fixture(scope="session")
def require_warsaw_api_key() -> str:
    """Live feed tests only run when an API key is provided."""

    api_key = (os.getenv("WARSAW_API_KEY") or "").strip()
    if not api_key:
        msg = "WARSAW_API_KEY not set"

        # In CI the key is expected to be injected as a secret.
        if os.getenv("REQUIRE_WARSAW_API"):
            pytest.fail(msg, pytrace=False)

        pytest.skip(f"{msg}; skipping live API tests")
    return api_key
