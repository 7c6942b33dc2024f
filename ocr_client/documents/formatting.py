from datetime import datetime

from ocr_client.documents.models import OcrStatus

_SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]

_STATUS_COLORS = {
    OcrStatus.PENDING.value: "default",
    OcrStatus.PROCESSING.value: "warning",
    OcrStatus.COMPLETED.value: "success",
    OcrStatus.FAILED.value: "error",
}


def format_file_size(size_bytes: int) -> str:
    """Human-readable size in base-1024 units, e.g. '1.5 KB'."""
    if size_bytes <= 0:
        return "0 Bytes"
    value = float(size_bytes)
    exponent = 0
    while value >= 1024 and exponent < len(_SIZE_UNITS) - 1:
        value /= 1024
        exponent += 1
    return f"{round(value, 2):g} {_SIZE_UNITS[exponent]}"


def status_color(status: str) -> str:
    return _STATUS_COLORS.get(status, "default")


def file_type_label(mime_type: str) -> str:
    """'application/pdf' -> 'PDF'; anything without a subtype -> 'FILE'."""
    _, _, subtype = mime_type.partition("/")
    return subtype.upper() if subtype else "FILE"


def format_timestamp(value: datetime | None) -> str:
    if value is None:
        return ""
    return value.strftime("%b %d, %Y %H:%M")
