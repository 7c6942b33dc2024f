import asyncio
from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest
from helpers import document_payload, json_response

from ocr_client.collection.state import ViewState
from ocr_client.collection.view import DocumentCollectionView
from ocr_client.documents.api import DocumentsApi
from ocr_client.documents.models import Document, DocumentPage
from ocr_client.notifications.base import Variant
from ocr_client.notifications.center import NotificationQueue
from ocr_client.session.client import SessionClient
from ocr_client.session.exceptions import ApiResponseError


def _docs(prefix: str, count: int) -> list[Document]:
    return [Document.from_payload(document_payload(f"{prefix}{i}")) for i in range(count)]


def _make_view(
    list_page: AsyncMock | None = None,
    confirm: object = None,
    debounce_seconds: float = 0.0,
) -> tuple[DocumentCollectionView, MagicMock, NotificationQueue]:
    api = MagicMock()
    api.list_page = list_page or AsyncMock(
        return_value=DocumentPage(documents=_docs("d", 10), total=23)
    )
    api.delete = AsyncMock(return_value=None)
    notifier = NotificationQueue()
    view = DocumentCollectionView(
        api,
        notifier,
        page_size_options=[5, 10, 25],
        page_size=10,
        debounce_seconds=debounce_seconds,
        confirm=confirm,
    )
    return view, api, notifier


class TestFetch:
    @pytest.mark.asyncio
    async def test_first_page_scenario(self) -> None:
        view, api, _n = _make_view()

        snapshot = await view.fetch()

        api.list_page.assert_awaited_once_with(0, 10, "")
        assert snapshot.total_count == 23
        assert len(snapshot.items) == 10
        assert snapshot.page_count == 3
        assert view.state is ViewState.LOADED

    @pytest.mark.asyncio
    async def test_idle_before_first_fetch(self) -> None:
        view, _api, _n = _make_view()
        assert view.state is ViewState.IDLE

    @pytest.mark.asyncio
    async def test_empty_result(self) -> None:
        view, _api, _n = _make_view(AsyncMock(return_value=DocumentPage()))

        snapshot = await view.fetch()

        assert view.state is ViewState.EMPTY
        assert snapshot.empty_message == "No documents uploaded yet."

    @pytest.mark.asyncio
    async def test_empty_search_message(self) -> None:
        view, _api, _n = _make_view(AsyncMock(return_value=DocumentPage()))

        snapshot = await view.set_search("zzz")

        assert snapshot.empty_message == "No documents found matching your search."

    @pytest.mark.asyncio
    async def test_failure_discards_previous_items(self) -> None:
        list_page = AsyncMock(
            side_effect=[
                DocumentPage(documents=_docs("d", 10), total=23),
                ApiResponseError("boom", 500),
            ]
        )
        view, _api, notifier = _make_view(list_page)
        await view.fetch()

        snapshot = await view.set_page(1)

        assert snapshot.items == ()
        assert not snapshot.loading
        assert view.state is ViewState.EMPTY
        assert [(n.variant, n.message) for n in notifier.pending] == [
            (Variant.ERROR, "Error fetching documents")
        ]

    @pytest.mark.asyncio
    async def test_identical_fetches_are_idempotent(self) -> None:
        view, _api, _n = _make_view()

        first = await view.fetch()
        second = await view.fetch()

        assert first.items == second.items
        assert first.total_count == second.total_count

    @pytest.mark.asyncio
    async def test_never_holds_more_than_page_size(self) -> None:
        view, _api, _n = _make_view(
            AsyncMock(return_value=DocumentPage(documents=_docs("d", 12), total=12))
        )

        snapshot = await view.fetch()

        assert len(snapshot.items) == 10


class TestPaginationAndSearch:
    @pytest.mark.asyncio
    async def test_page_change_refetches(self) -> None:
        view, api, _n = _make_view()

        await view.set_page(2)

        api.list_page.assert_awaited_once_with(2, 10, "")

    @pytest.mark.asyncio
    async def test_search_resets_page(self) -> None:
        view, api, _n = _make_view()
        await view.set_page(2)

        snapshot = await view.set_search("invoice")

        assert api.list_page.await_args_list[-1].args == (0, 10, "invoice")
        assert snapshot.page == 0

    @pytest.mark.asyncio
    async def test_page_size_change_resets_page(self) -> None:
        view, api, _n = _make_view()
        await view.set_page(2)

        await view.set_page_size(25)

        assert api.list_page.await_args_list[-1].args == (0, 25, "")

    @pytest.mark.asyncio
    async def test_rejects_unknown_page_size(self) -> None:
        view, _api, _n = _make_view()
        with pytest.raises(ValueError):
            await view.set_page_size(7)

    @pytest.mark.asyncio
    async def test_rejects_negative_page(self) -> None:
        view, _api, _n = _make_view()
        with pytest.raises(ValueError):
            await view.set_page(-1)


class TestNewestRequestWins:
    @pytest.mark.asyncio
    async def test_stale_response_is_discarded(self) -> None:
        gates = {"a": asyncio.Event(), "ab": asyncio.Event()}

        async def list_page(page: int, limit: int, search: str) -> DocumentPage:
            await gates[search].wait()
            return DocumentPage(documents=_docs(search, 1), total=1)

        view, _api, _n = _make_view(AsyncMock(side_effect=list_page))
        older = asyncio.create_task(view.set_search("a"))
        await asyncio.sleep(0)
        newer = asyncio.create_task(view.set_search("ab"))
        await asyncio.sleep(0)

        gates["ab"].set()
        await newer
        gates["a"].set()
        await older

        assert [d.id for d in view.items] == ["ab0"]
        assert view.snapshot.search_query == "ab"
        assert not view.snapshot.loading

    @pytest.mark.asyncio
    async def test_stale_failure_is_discarded(self) -> None:
        gate = asyncio.Event()

        async def list_page(page: int, limit: int, search: str) -> DocumentPage:
            if search == "old":
                await gate.wait()
                raise ApiResponseError("late failure", 500)
            return DocumentPage(documents=_docs("new", 2), total=2)

        view, _api, notifier = _make_view(AsyncMock(side_effect=list_page))
        older = asyncio.create_task(view.set_search("old"))
        await asyncio.sleep(0)
        await view.set_search("new")
        gate.set()
        await older

        assert len(view.items) == 2
        assert notifier.pending == []

    @pytest.mark.asyncio
    async def test_loading_until_latest_response(self) -> None:
        gate = asyncio.Event()

        async def list_page(page: int, limit: int, search: str) -> DocumentPage:
            if search == "slow":
                await gate.wait()
            return DocumentPage()

        view, _api, _n = _make_view(AsyncMock(side_effect=list_page))
        await view.set_search("fast")
        slow = asyncio.create_task(view.set_search("slow"))
        await asyncio.sleep(0)

        assert view.state is ViewState.LOADING

        gate.set()
        await slow
        assert view.state is ViewState.EMPTY

    @pytest.mark.asyncio
    async def test_debounce_skips_superseded_keystrokes(self) -> None:
        view, api, _n = _make_view(debounce_seconds=0.01)

        first = asyncio.create_task(view.set_search("i"))
        second = asyncio.create_task(view.set_search("in"))
        await asyncio.gather(first, second)

        api.list_page.assert_awaited_once_with(0, 10, "in")


class TestDelete:
    @pytest.mark.asyncio
    async def test_confirmed_delete_refetches_instead_of_splicing(self) -> None:
        confirm = MagicMock(return_value=True)
        view, api, notifier = _make_view(confirm=confirm)
        await view.fetch()
        api.list_page.reset_mock()

        deleted = await view.delete("d3", "Doc d3")

        assert deleted
        confirm.assert_called_once_with('Are you sure you want to delete "Doc d3"?')
        api.delete.assert_awaited_once_with("d3")
        api.list_page.assert_awaited_once_with(0, 10, "")
        assert notifier.pending[-1].message == "Document deleted successfully"

    @pytest.mark.asyncio
    async def test_declined_delete_sends_nothing(self) -> None:
        view, api, _n = _make_view(confirm=MagicMock(return_value=False))

        assert not await view.delete("d3", "Doc d3")
        api.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_async_confirmation_supported(self) -> None:
        view, api, _n = _make_view(confirm=AsyncMock(return_value=True))

        assert await view.delete("d3")
        api.delete.assert_awaited_once_with("d3")

    @pytest.mark.asyncio
    async def test_no_confirmation_hook_means_no_delete(self) -> None:
        view, api, _n = _make_view()

        assert not await view.delete("d3")
        api.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_failed_delete_keeps_list(self) -> None:
        view, api, notifier = _make_view(confirm=MagicMock(return_value=True))
        before = await view.fetch()
        api.delete.side_effect = ApiResponseError("nope", 500)
        api.list_page.reset_mock()

        assert not await view.delete("d3")

        assert view.snapshot == before
        api.list_page.assert_not_called()
        assert notifier.pending[-1].message == "Error deleting document"


class TestMalformedServerPage:
    @pytest.mark.asyncio
    async def test_null_total_empties_view_and_notifies(
        self, make_client: Callable[..., SessionClient]
    ) -> None:
        body = {"documents": [document_payload("d1")], "pagination": {"total": None}}
        client = make_client(lambda request: json_response(200, body))
        notifier = NotificationQueue()
        view = DocumentCollectionView(
            DocumentsApi(client), notifier, page_size_options=[5, 10, 25], page_size=10
        )

        snapshot = await view.fetch()

        assert view.state is ViewState.EMPTY
        assert not snapshot.loading
        assert snapshot.items == ()
        assert [(n.variant, n.message) for n in notifier.pending] == [
            (Variant.ERROR, "Error fetching documents")
        ]
