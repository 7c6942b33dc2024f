from collections import Counter
from dataclasses import dataclass

from ocr_client.documents.api import DocumentsApi
from ocr_client.documents.models import Document, OcrStatus
from ocr_client.logging.logger import Log
from ocr_client.session.exceptions import ApiError


@dataclass(frozen=True)
class StatusCounts:
    total: int = 0
    processing: int = 0
    completed: int = 0
    failed: int = 0

    @classmethod
    def from_documents(cls, documents: list[Document]) -> "StatusCounts":
        by_status = Counter(doc.ocr_status for doc in documents)
        return cls(
            total=len(documents),
            processing=by_status[OcrStatus.PROCESSING.value],
            completed=by_status[OcrStatus.COMPLETED.value],
            failed=by_status[OcrStatus.FAILED.value],
        )


class StatusAggregator:
    """Summary counts over the full document set.

    Always recomputed from a fresh fetch. A failed fetch keeps the last
    known counts.
    """

    def __init__(self, documents_api: DocumentsApi) -> None:
        self._api = documents_api
        self._counts = StatusCounts()

    @property
    def counts(self) -> StatusCounts:
        return self._counts

    async def refresh(self) -> StatusCounts:
        try:
            documents = await self._api.list_all()
        except ApiError as exc:
            Log.warning(f"Error fetching stats, keeping last counts: {exc.message}")
            return self._counts
        self._counts = StatusCounts.from_documents(documents)
        return self._counts
