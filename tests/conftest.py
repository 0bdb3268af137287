from __future__ import annotations

from pathlib import Path
from typing import Callable
import sys

import pytest
from pypdf import PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdfprotectx.exceptions import ArchiveCreationError, EncryptionFailedError  # noqa: E402
from pdfprotectx.types import Permissions, SourceDocument  # noqa: E402


class RecordingNativeBackend:
    """Native backend double that records every call."""

    name = "recording"

    def __init__(self, result: bytes = b"%PDF-1.7 encrypted") -> None:
        self.result = result
        self.calls: list[tuple[bytes, str, str, Permissions]] = []

    def encrypt(self, data: bytes, user_password: str, owner_password: str, permissions: Permissions) -> bytes:
        self.calls.append((data, user_password, owner_password, permissions))
        return self.result


class FailingNativeBackend(RecordingNativeBackend):
    name = "failing"

    def encrypt(self, data: bytes, user_password: str, owner_password: str, permissions: Permissions) -> bytes:
        self.calls.append((data, user_password, owner_password, permissions))
        raise EncryptionFailedError("engine exploded")


class RecordingArchiveBackend:
    """Archive backend double that records every call."""

    name = "recording-zip"

    def __init__(self, result: bytes = b"PK\x03\x04 archive") -> None:
        self.result = result
        self.calls: list[tuple[bytes, str, str, int]] = []

    def create_protected_archive(
        self,
        data: bytes,
        entry_name: str,
        password: str,
        compression_level: int = 0,
    ) -> bytes:
        self.calls.append((data, entry_name, password, compression_level))
        return self.result


class FailingArchiveBackend(RecordingArchiveBackend):
    name = "failing-zip"

    def create_protected_archive(
        self,
        data: bytes,
        entry_name: str,
        password: str,
        compression_level: int = 0,
    ) -> bytes:
        self.calls.append((data, entry_name, password, compression_level))
        raise ArchiveCreationError("disk full")


@pytest.fixture()
def sample_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "sample.pdf"
    writer = PdfWriter()
    for _ in range(5):
        writer.add_blank_page(width=200, height=200)
    writer.add_metadata({"/Producer": "pdfprotectx-tests", "/Title": "Sample"})
    with pdf_path.open("wb") as stream:
        writer.write(stream)
    return pdf_path


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> Callable[[str, int], Path]:
    def _create(filename: str, pages: int = 1) -> Path:
        path = tmp_path / filename
        writer = PdfWriter()
        for _ in range(pages):
            writer.add_blank_page(width=72, height=72)
        with path.open("wb") as handle:
            writer.write(handle)
        return path

    return _create


@pytest.fixture()
def sample_document(sample_pdf: Path) -> SourceDocument:
    return SourceDocument.from_path(sample_pdf)


@pytest.fixture()
def native_backend() -> RecordingNativeBackend:
    return RecordingNativeBackend()


@pytest.fixture()
def failing_native_backend() -> FailingNativeBackend:
    return FailingNativeBackend()


@pytest.fixture()
def archive_backend() -> RecordingArchiveBackend:
    return RecordingArchiveBackend()


@pytest.fixture()
def failing_archive_backend() -> FailingArchiveBackend:
    return FailingArchiveBackend()


def _pdf_with_trailer(trailer: bytes) -> bytes:
    body = b"%PDF-1.4\n1 0 obj\n<< /Producer (pdfprotectx-tests) >>\nendobj\n"
    xref_offset = len(body)
    xref = b"xref\n0 2\n0000000000 65535 f \n0000000009 00000 n \n"
    return (
        body
        + xref
        + b"trailer\n"
        + trailer
        + b"\nstartxref\n"
        + str(xref_offset).encode("ascii")
        + b"\n%%EOF\n"
    )


@pytest.fixture()
def broken_root_pdf() -> bytes:
    """A PDF whose trailer ``/Root`` is a number and which holds no catalog."""

    return _pdf_with_trailer(b"<< /Size 2 /Root 42 >>")
