import io
from collections.abc import Callable
from typing import Any

import httpx
import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from ocr_client.config.settings import Settings
from ocr_client.notifications.center import NotificationQueue
from ocr_client.session.client import SessionClient
from ocr_client.session.context import SessionContext

BASE_URL = "http://ocr.test/api"


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    monkeypatch.setenv("TOKEN_FILE", "")
    monkeypatch.setenv("UPLOAD_PROGRESS_INTERVAL_SECONDS", "0")
    return Settings(_env_file=None)


@pytest.fixture()
def notifier() -> NotificationQueue:
    return NotificationQueue()


@pytest.fixture()
def session() -> SessionContext:
    ctx = SessionContext(login_path="/login")
    ctx.set_token("tok-123")
    return ctx


Handler = Callable[[httpx.Request], Any]


@pytest.fixture()
def make_client(session: SessionContext) -> Callable[[Handler], SessionClient]:
    """Build a SessionClient whose transport is the given request handler."""

    def _make(handler: Handler) -> SessionClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=BASE_URL)
        return SessionClient(http, session)

    return _make
