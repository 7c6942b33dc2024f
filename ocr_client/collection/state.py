from dataclasses import dataclass, field
from enum import Enum

from ocr_client.documents.models import Document


class ViewState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    EMPTY = "empty"


@dataclass(frozen=True)
class CollectionSnapshot:
    """Immutable view of one page of the document list.

    A new snapshot replaces the old one in a single assignment, so readers
    never see items from one response paired with the total of another.
    """

    page: int = 0
    page_size: int = 10
    search_query: str = ""
    total_count: int = 0
    items: tuple[Document, ...] = field(default_factory=tuple)
    loading: bool = False
    fetched: bool = False

    @property
    def state(self) -> ViewState:
        if self.items:
            return ViewState.LOADED
        if self.loading:
            return ViewState.LOADING
        if not self.fetched:
            return ViewState.IDLE
        return ViewState.EMPTY

    @property
    def page_count(self) -> int:
        if self.total_count <= 0:
            return 0
        return -(-self.total_count // self.page_size)

    @property
    def empty_message(self) -> str:
        if self.search_query:
            return "No documents found matching your search."
        return "No documents uploaded yet."
