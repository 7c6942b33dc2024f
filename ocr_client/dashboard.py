import asyncio
from pathlib import Path

import httpx

from ocr_client.auth.provider import AuthProvider
from ocr_client.collection.view import ConfirmCallback, DocumentCollectionView
from ocr_client.config.settings import Settings
from ocr_client.detail.view import DocumentDetailView
from ocr_client.documents.api import DocumentsApi
from ocr_client.notifications.base import BaseNotifier
from ocr_client.session.client import SessionClient
from ocr_client.session.context import SessionContext
from ocr_client.stats.aggregator import StatusAggregator
from ocr_client.uploads.orchestrator import UploadOrchestrator
from ocr_client.uploads.progress import UploadProgress


class Dashboard:
    """All client components sharing one session.

    A batch upload with at least one success refreshes both the status
    counts and the current list page.
    """

    def __init__(
        self,
        client: SessionClient,
        notifier: BaseNotifier,
        settings: Settings,
        confirm: ConfirmCallback | None = None,
    ) -> None:
        self.client = client
        self.settings = settings
        self.notifier = notifier
        self.documents_api = DocumentsApi(client)
        self.auth = AuthProvider(
            client,
            home_path=settings.authenticated_home_path,
            min_password_length=settings.min_password_length,
        )
        self.uploads = UploadOrchestrator(
            self.documents_api,
            notifier,
            allowed_types=settings.allowed_upload_mime_types,
            max_size_bytes=settings.max_upload_size_bytes,
            progress=UploadProgress(
                step=settings.upload_progress_step,
                interval_seconds=settings.upload_progress_interval_seconds,
            ),
        )
        self.collection = DocumentCollectionView(
            self.documents_api,
            notifier,
            page_size_options=settings.page_size_options,
            page_size=settings.default_page_size,
            debounce_seconds=settings.search_debounce_seconds,
            confirm=confirm,
        )
        self.stats = StatusAggregator(self.documents_api)
        self.detail = DocumentDetailView(self.documents_api, notifier)
        self.uploads.on_complete(self.stats.refresh)
        self.uploads.on_complete(self.collection.refresh)

    @property
    def session(self) -> SessionContext:
        return self.client.session

    async def load(self) -> None:
        """Initial fetch of the summary counts and the first list page."""
        await asyncio.gather(self.stats.refresh(), self.collection.fetch())


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=settings.api_base_url,
        timeout=settings.request_timeout_seconds,
    )


def create_session(settings: Settings) -> SessionContext:
    token_file = Path(settings.token_file).expanduser() if settings.token_file else None
    return SessionContext(login_path=settings.login_path, token_file=token_file)


def build_dashboard(
    settings: Settings,
    http: httpx.AsyncClient,
    notifier: BaseNotifier,
    session: SessionContext | None = None,
    confirm: ConfirmCallback | None = None,
) -> Dashboard:
    """Build a Dashboard with all components wired to one session client."""
    client = SessionClient(http, session or create_session(settings))
    return Dashboard(client, notifier, settings, confirm=confirm)


def start_path(session: SessionContext, settings: Settings) -> str:
    """Where the root entry point sends the user."""
    if session.is_authenticated:
        return settings.authenticated_home_path
    return settings.login_path
