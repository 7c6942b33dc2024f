import asyncio
import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from ocr_client.documents.api import DocumentsApi
from ocr_client.logging.logger import Log
from ocr_client.notifications.base import BaseNotifier, Variant
from ocr_client.session.exceptions import ApiError
from ocr_client.uploads.candidates import SelectedFile, UploadCandidate, build_candidates
from ocr_client.uploads.progress import UploadProgress

CompletionCallback = Callable[[], Awaitable[None] | None]

GENERIC_UPLOAD_ERROR = "Upload failed"


@dataclass(frozen=True)
class UploadOutcome:
    """Settled result of uploading one candidate."""

    candidate: UploadCandidate
    success: bool
    document: dict[str, Any] = field(default_factory=dict)
    error: str = ""


@dataclass(frozen=True)
class UploadReport:
    outcomes: list[UploadOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> list[UploadOutcome]:
        return [o for o in self.outcomes if o.success]

    @property
    def failed(self) -> list[UploadOutcome]:
        return [o for o in self.outcomes if not o.success]


class UploadOrchestrator:
    """Validates selected files and uploads them as one concurrent batch.

    Every file is sent at once with no concurrency cap. The batch waits for
    all uploads to settle, reports successes as one notification and each
    failure individually, then clears the candidate queue.
    """

    def __init__(
        self,
        documents_api: DocumentsApi,
        notifier: BaseNotifier,
        *,
        allowed_types: list[str],
        max_size_bytes: int,
        progress: UploadProgress | None = None,
    ) -> None:
        self._api = documents_api
        self._notifier = notifier
        self._allowed_types = set(allowed_types)
        self._max_size_bytes = max_size_bytes
        self._progress = progress or UploadProgress()
        self._candidates: list[UploadCandidate] = []
        self._callbacks: list[CompletionCallback] = []
        self._uploading = False

    @property
    def candidates(self) -> list[UploadCandidate]:
        return list(self._candidates)

    @property
    def uploading(self) -> bool:
        return self._uploading

    @property
    def progress(self) -> UploadProgress:
        return self._progress

    def on_complete(self, callback: CompletionCallback) -> None:
        """Register a callback run after a batch with at least one success."""
        self._callbacks.append(callback)

    def select(self, files: list[SelectedFile]) -> list[UploadCandidate]:
        """Replace the candidate set with the acceptable subset of `files`."""
        if self._uploading:
            Log.warning("File selection ignored while an upload is in progress")
            return self.candidates
        self._candidates = build_candidates(files, self._allowed_types, self._max_size_bytes)
        skipped = len(files) - len(self._candidates)
        if skipped:
            Log.debug(f"Skipped {skipped} file(s) with unsupported type or size")
        return self.candidates

    def remove(self, index: int) -> None:
        if self._uploading:
            return
        del self._candidates[index]

    def set_title(self, index: int, title: str) -> None:
        self._candidates[index].title = title

    async def upload_all(self) -> UploadReport:
        if self._uploading:
            Log.warning("Upload already in progress")
            return UploadReport()
        if not self._candidates:
            return UploadReport()

        batch = list(self._candidates)
        keys = [_progress_key(i, c) for i, c in enumerate(batch)]
        self._uploading = True
        self._progress.start(keys)
        Log.info(f"Uploading {len(batch)} file(s)")
        try:
            outcomes = await asyncio.gather(
                *(self._upload_one(key, c) for key, c in zip(keys, batch))
            )
        finally:
            self._candidates = []
            self._uploading = False
            self._progress.reset()

        report = UploadReport(outcomes=list(outcomes))
        await self._report(report)
        return report

    async def _upload_one(self, key: str, candidate: UploadCandidate) -> UploadOutcome:
        file = candidate.file
        try:
            content = file.read()
            document = await self._api.upload(
                file.name, content, file.content_type, candidate.title
            )
        except ApiError as exc:
            return UploadOutcome(
                candidate=candidate,
                success=False,
                error=exc.server_message or GENERIC_UPLOAD_ERROR,
            )
        except OSError as exc:
            Log.error(f"Could not read {file.name}: {exc}")
            return UploadOutcome(candidate=candidate, success=False, error=GENERIC_UPLOAD_ERROR)

        await self._progress.complete(key)
        return UploadOutcome(candidate=candidate, success=True, document=document)

    async def _report(self, report: UploadReport) -> None:
        succeeded = len(report.succeeded)
        Log.info(f"Upload batch settled: {succeeded} succeeded, {len(report.failed)} failed")
        if succeeded:
            self._notifier.notify(
                f"Successfully uploaded {succeeded} file(s)", Variant.SUCCESS
            )
        for outcome in report.failed:
            self._notifier.notify(
                f"Failed to upload {outcome.candidate.file.name}: {outcome.error}",
                Variant.ERROR,
            )
        if succeeded:
            await self._run_callbacks()

    async def _run_callbacks(self) -> None:
        for callback in self._callbacks:
            try:
                result = callback()
                if inspect.isawaitable(result):
                    await result
            except Exception as exc:
                Log.error(f"Upload completion callback failed: {exc}")


def _progress_key(index: int, candidate: UploadCandidate) -> str:
    return f"{index}:{candidate.file.name}"
