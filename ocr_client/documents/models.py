from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class OcrStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class Document:
    """Read-only client projection of a server-owned document."""

    id: str
    title: str
    original_name: str
    file_type: str
    file_size: int
    ocr_status: str
    file_url: str = ""
    extracted_text: str = ""
    created_at: datetime | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Document":
        """Build a Document from a server JSON object.

        Raises:
            KeyError: if the payload has no identifier.
        """
        doc_id = payload.get("_id", payload.get("id"))
        if doc_id is None:
            raise KeyError("document payload has no '_id' or 'id'")
        return cls(
            id=str(doc_id),
            title=payload.get("title") or "",
            original_name=payload.get("originalName") or "",
            file_type=payload.get("fileType") or "",
            file_size=max(int(payload.get("fileSize") or 0), 0),
            ocr_status=payload.get("ocrStatus") or OcrStatus.PENDING.value,
            file_url=payload.get("fileUrl") or "",
            extracted_text=payload.get("extractedText") or "",
            created_at=_parse_timestamp(payload.get("createdAt")),
        )


@dataclass(frozen=True)
class DocumentPage:
    """One server page of documents plus the total matching count."""

    documents: list[Document] = field(default_factory=list)
    total: int = 0


def _parse_timestamp(value: object) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
