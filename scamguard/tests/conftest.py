from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from scamguard.api.server import app
from scamguard.api.security import rate_limiter
from scamguard.config import settings
from scamguard.utils.logging_config import metrics


@pytest.fixture(autouse=True)
def _isolate_api_state(monkeypatch):
    """Each test starts unauthenticated, with fresh rate-limit counters and metrics."""
    monkeypatch.setattr(settings, "api_token", "")
    rate_limiter.reset()
    metrics.reset()


@pytest.fixture
def client():
    """FastAPI test client fixture."""
    return TestClient(app)


@pytest.fixture
def sample_scam_text():
    """Hits urgency and guaranteed-returns patterns."""
    return "Guaranteed 100% profit, act now, limited time offer!"


@pytest.fixture
def sample_safe_text():
    """Legitimate pitch with no scam patterns."""
    return "We are raising a seed round for a logistics startup with a clear six-month roadmap."


@pytest.fixture
def png_bytes():
    """A small valid PNG image."""
    buf = BytesIO()
    Image.new("RGB", (40, 20), "white").save(buf, format="PNG")
    return buf.getvalue()
