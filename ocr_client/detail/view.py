from dataclasses import dataclass
from enum import Enum

from ocr_client.documents.api import DocumentsApi
from ocr_client.documents.models import Document, OcrStatus
from ocr_client.logging.logger import Log
from ocr_client.notifications.base import BaseNotifier, Variant
from ocr_client.session.exceptions import ApiError


class DetailState(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    PROCESSING = "processing"
    FAILED = "failed"
    TEXT = "text"
    NO_TEXT = "no_text"


@dataclass(frozen=True)
class DocumentDetail:
    state: DetailState
    document: Document | None = None
    error: str = ""


def classify(document: Document) -> DetailState:
    """Map a document's OCR status and text to what the detail page shows."""
    if document.ocr_status == OcrStatus.PROCESSING.value:
        return DetailState.PROCESSING
    if document.ocr_status == OcrStatus.FAILED.value:
        return DetailState.FAILED
    if document.ocr_status == OcrStatus.COMPLETED.value and document.extracted_text:
        return DetailState.TEXT
    return DetailState.NO_TEXT


class DocumentDetailView:
    """Loads one document by id, independent of the list view."""

    def __init__(self, documents_api: DocumentsApi, notifier: BaseNotifier) -> None:
        self._api = documents_api
        self._notifier = notifier
        self._detail = DocumentDetail(state=DetailState.LOADING)

    @property
    def detail(self) -> DocumentDetail:
        return self._detail

    async def load(self, document_id: str) -> DocumentDetail:
        self._detail = DocumentDetail(state=DetailState.LOADING)
        try:
            document = await self._api.get(document_id)
        except ApiError as exc:
            Log.error(f"Error fetching document {document_id}: {exc.message}")
            self._notifier.notify("Error fetching document", Variant.ERROR)
            error = "Document not found" if exc.status_code == 404 else "Error fetching document"
            self._detail = DocumentDetail(state=DetailState.ERROR, error=error)
            return self._detail
        self._detail = DocumentDetail(state=classify(document), document=document)
        return self._detail
