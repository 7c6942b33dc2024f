import asyncio
import inspect
from collections.abc import Awaitable, Callable
from dataclasses import replace

from ocr_client.collection.state import CollectionSnapshot, ViewState
from ocr_client.documents.api import DocumentsApi
from ocr_client.documents.models import Document
from ocr_client.logging.logger import Log
from ocr_client.notifications.base import BaseNotifier, Variant
from ocr_client.session.exceptions import ApiError

ConfirmCallback = Callable[[str], bool | Awaitable[bool]]


class DocumentCollectionView:
    """Paginated, searchable list of documents backed by the server.

    Each fetch is tagged with a generation number. A response is applied
    only if no newer fetch was issued in the meantime; superseded responses
    are dropped on arrival, not cancelled.
    """

    def __init__(
        self,
        documents_api: DocumentsApi,
        notifier: BaseNotifier,
        *,
        page_size_options: list[int],
        page_size: int = 10,
        debounce_seconds: float = 0.0,
        confirm: ConfirmCallback | None = None,
    ) -> None:
        if page_size not in page_size_options:
            raise ValueError(f"page_size {page_size} not in {page_size_options}")
        self._api = documents_api
        self._notifier = notifier
        self._page_size_options = list(page_size_options)
        self._debounce_seconds = debounce_seconds
        self._confirm = confirm
        self._snapshot = CollectionSnapshot(page_size=page_size)
        self._generation = 0

    @property
    def snapshot(self) -> CollectionSnapshot:
        return self._snapshot

    @property
    def state(self) -> ViewState:
        return self._snapshot.state

    @property
    def items(self) -> tuple[Document, ...]:
        return self._snapshot.items

    @property
    def page_size_options(self) -> list[int]:
        return list(self._page_size_options)

    async def fetch(self) -> CollectionSnapshot:
        """Request the page described by the current page, size and query."""
        self._generation += 1
        generation = self._generation
        requested = replace(self._snapshot, loading=True)
        self._snapshot = requested

        if self._debounce_seconds > 0:
            await asyncio.sleep(self._debounce_seconds)
            if generation != self._generation:
                return self._snapshot

        try:
            result = await self._api.list_page(
                requested.page, requested.page_size, requested.search_query
            )
        except ApiError as exc:
            if generation != self._generation:
                return self._snapshot
            Log.error(f"Error fetching documents: {exc.message}")
            self._snapshot = replace(
                self._snapshot, items=(), total_count=0, loading=False, fetched=True
            )
            self._notifier.notify("Error fetching documents", Variant.ERROR)
            return self._snapshot

        if generation != self._generation:
            Log.debug(f"Discarding stale page response (generation {generation})")
            return self._snapshot
        self._snapshot = replace(
            self._snapshot,
            items=tuple(result.documents[: requested.page_size]),
            total_count=result.total,
            loading=False,
            fetched=True,
        )
        return self._snapshot

    async def refresh(self) -> CollectionSnapshot:
        return await self.fetch()

    async def set_page(self, page: int) -> CollectionSnapshot:
        if page < 0:
            raise ValueError("page must be >= 0")
        self._snapshot = replace(self._snapshot, page=page)
        return await self.fetch()

    async def set_page_size(self, page_size: int) -> CollectionSnapshot:
        if page_size not in self._page_size_options:
            raise ValueError(f"page_size {page_size} not in {self._page_size_options}")
        self._snapshot = replace(self._snapshot, page_size=page_size, page=0)
        return await self.fetch()

    async def set_search(self, query: str) -> CollectionSnapshot:
        """Change the search text; always restarts from the first page."""
        self._snapshot = replace(self._snapshot, search_query=query, page=0)
        return await self.fetch()

    async def delete(self, document_id: str, title: str = "") -> bool:
        """Delete after confirmation, then refetch the current page.

        Returns True only when the server accepted the delete.
        """
        if not await self._confirmed(f'Are you sure you want to delete "{title or document_id}"?'):
            return False
        try:
            await self._api.delete(document_id)
        except ApiError as exc:
            Log.error(f"Error deleting document {document_id}: {exc.message}")
            self._notifier.notify("Error deleting document", Variant.ERROR)
            return False
        self._notifier.notify("Document deleted successfully", Variant.SUCCESS)
        await self.fetch()
        return True

    async def _confirmed(self, prompt: str) -> bool:
        if self._confirm is None:
            return False
        answer = self._confirm(prompt)
        if inspect.isawaitable(answer):
            answer = await answer
        return bool(answer)
