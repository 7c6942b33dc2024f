from typing import Any

from ocr_client.documents.models import Document, DocumentPage
from ocr_client.session.client import SessionClient
from ocr_client.session.exceptions import InvalidResponseError


class DocumentsApi:
    """Document resource calls on top of the session client."""

    def __init__(self, client: SessionClient) -> None:
        self._client = client

    async def list_page(self, page: int, limit: int, search: str = "") -> DocumentPage:
        """Fetch one page. `page` is zero-based here and 1-based on the wire."""
        body = await self._client.request(
            "GET",
            "/documents",
            params={"page": page + 1, "limit": limit, "search": search},
        )
        documents = _parse_documents(body)
        pagination = body.get("pagination")
        if not isinstance(pagination, dict) or "total" not in pagination:
            raise InvalidResponseError("document list response has no pagination.total")
        try:
            total = int(pagination["total"])
        except (TypeError, ValueError) as exc:
            raise InvalidResponseError(f"Malformed pagination.total: {exc}") from exc
        return DocumentPage(documents=documents, total=total)

    async def list_all(self) -> list[Document]:
        """Fetch the unpaginated document set for the current session."""
        body = await self._client.request("GET", "/documents")
        return _parse_documents(body)

    async def search(self, query: str) -> list[Document]:
        body = await self._client.request("GET", "/documents/search", params={"q": query})
        return _parse_documents(body)

    async def get(self, document_id: str) -> Document:
        body = await self._client.request("GET", f"/documents/{document_id}")
        if not isinstance(body, dict) or not isinstance(body.get("document"), dict):
            raise InvalidResponseError(f"response for document {document_id} has no document")
        return _parse_document(body["document"])

    async def delete(self, document_id: str) -> None:
        await self._client.request("DELETE", f"/documents/{document_id}")

    async def upload(
        self,
        filename: str,
        content: bytes,
        content_type: str,
        title: str,
    ) -> dict[str, Any]:
        """Send one file as multipart form data and return the server summary."""
        body = await self._client.request(
            "POST",
            "/upload",
            data={"title": title},
            files={"document": (filename, content, content_type)},
        )
        return body if isinstance(body, dict) else {}


def _parse_documents(body: Any) -> list[Document]:
    if not isinstance(body, dict):
        raise InvalidResponseError("document list response is not an object")
    if "documents" not in body:
        raise InvalidResponseError("document list response has no documents")
    raw = body["documents"]
    if not isinstance(raw, list):
        raise InvalidResponseError("'documents' is not a list")
    return [_parse_document(item) for item in raw]


def _parse_document(payload: Any) -> Document:
    if not isinstance(payload, dict):
        raise InvalidResponseError("document entry is not an object")
    try:
        return Document.from_payload(payload)
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidResponseError(f"Malformed document entry: {exc}") from exc
