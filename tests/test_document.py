from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from pdfprotectx.backends import PypdfBackend
from pdfprotectx.document import is_encrypted, load_document, preview_document, read_page_count
from pdfprotectx.exceptions import InvalidDocumentError
from pdfprotectx.types import Permissions, SourceDocument


def test_load_document_reads_bytes(sample_pdf: Path) -> None:
    document = asyncio.run(load_document(sample_pdf))

    assert document.name == "sample.pdf"
    assert document.data == sample_pdf.read_bytes()
    assert document.size == sample_pdf.stat().st_size


def test_load_document_rejects_non_pdf(tmp_path: Path) -> None:
    text_file = tmp_path / "notes.txt"
    text_file.write_text("hello")

    with pytest.raises(InvalidDocumentError):
        asyncio.run(load_document(text_file))


def test_load_document_rejects_missing_file(tmp_path: Path) -> None:
    with pytest.raises(InvalidDocumentError):
        asyncio.run(load_document(tmp_path / "missing.pdf"))


def test_uppercase_extension_is_accepted(pdf_factory) -> None:
    path = pdf_factory("SCAN.PDF", pages=2)

    document = SourceDocument.from_path(path)

    assert document.name == "SCAN.PDF"


def test_read_page_count(pdf_factory) -> None:
    assert read_page_count(pdf_factory("three.pdf", pages=3).read_bytes()) == 3
    assert read_page_count(b"not a pdf") is None


def test_preview_document(sample_document) -> None:
    preview = preview_document(sample_document)

    assert preview.name == "sample.pdf"
    assert preview.size == len(sample_document.data)
    assert preview.page_count == 5
    assert preview.page_label == "5"


def test_preview_of_unreadable_document() -> None:
    preview = preview_document(SourceDocument(name="broken.pdf", data=b"%PDF-garbage"))

    assert preview.page_count is None
    assert preview.page_label == "unknown"


def test_is_encrypted(sample_pdf: Path) -> None:
    data = sample_pdf.read_bytes()
    encrypted = PypdfBackend().encrypt(data, "open", "owner", Permissions())

    assert is_encrypted(data) is False
    assert is_encrypted(encrypted) is True
    assert is_encrypted(b"not a pdf") is None
