import mimetypes
import re
from dataclasses import dataclass
from pathlib import Path

_EXTENSION_SUFFIX = re.compile(r"\.[^/.]+$")


@dataclass(frozen=True)
class SelectedFile:
    """A file picked by the user, with its declared media type and size."""

    name: str
    content_type: str
    size: int
    path: Path | None = None
    content: bytes | None = None

    @classmethod
    def from_path(cls, path: Path) -> "SelectedFile":
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            content_type=content_type or "application/octet-stream",
            size=path.stat().st_size,
            path=path,
        )

    @classmethod
    def from_bytes(cls, name: str, content: bytes, content_type: str) -> "SelectedFile":
        return cls(name=name, content_type=content_type, size=len(content), content=content)

    def read(self) -> bytes:
        if self.content is not None:
            return self.content
        if self.path is None:
            raise FileNotFoundError(f"No content or path for {self.name}")
        return self.path.read_bytes()


@dataclass
class UploadCandidate:
    """A selected file waiting for upload, with its editable title."""

    file: SelectedFile
    title: str


def derive_title(filename: str) -> str:
    """Strip the last extension: 'scan.2024.pdf' -> 'scan.2024'."""
    return _EXTENSION_SUFFIX.sub("", filename)


def is_acceptable(file: SelectedFile, allowed_types: set[str], max_size_bytes: int) -> bool:
    return file.content_type in allowed_types and 0 <= file.size <= max_size_bytes


def build_candidates(
    files: list[SelectedFile],
    allowed_types: set[str],
    max_size_bytes: int,
) -> list[UploadCandidate]:
    """Keep acceptable files in selection order; others are dropped silently."""
    return [
        UploadCandidate(file=f, title=derive_title(f.name))
        for f in files
        if is_acceptable(f, allowed_types, max_size_bytes)
    ]
