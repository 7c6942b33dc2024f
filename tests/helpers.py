import httpx


def json_response(status_code: int, body: object) -> httpx.Response:
    return httpx.Response(status_code, json=body)


def document_payload(doc_id: str, **overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "_id": doc_id,
        "title": f"Doc {doc_id}",
        "originalName": f"{doc_id}.pdf",
        "fileType": "application/pdf",
        "fileSize": 2048,
        "ocrStatus": "completed",
        "extractedText": "hello",
        "fileUrl": f"https://files.test/{doc_id}.pdf",
        "createdAt": "2024-05-01T10:30:00Z",
    }
    payload.update(overrides)
    return payload
