from ocr_client.uploads.candidates import SelectedFile, UploadCandidate, derive_title
from ocr_client.uploads.orchestrator import UploadOrchestrator, UploadOutcome, UploadReport

__all__ = [
    "SelectedFile",
    "UploadCandidate",
    "UploadOrchestrator",
    "UploadOutcome",
    "UploadReport",
    "derive_title",
]
