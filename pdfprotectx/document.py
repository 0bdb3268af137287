"""Loading and previewing the document selected for protection."""

from __future__ import annotations

import asyncio
import io
from pathlib import Path

from pypdf import PdfReader

from .types import DocumentPreview, SourceDocument
from .utils import get_logger

LOGGER = get_logger("pdfprotectx.document")


async def load_document(path: str | Path) -> SourceDocument:
    """Read ``path`` into a :class:`SourceDocument` without blocking the loop."""

    return await asyncio.to_thread(SourceDocument.from_path, path)


def read_page_count(data: bytes) -> int | None:
    """Return the page count of ``data``, or ``None`` when it cannot be parsed.

    The count is only shown to the user, so parse errors never propagate.
    """

    try:
        reader = PdfReader(io.BytesIO(data))
        return len(reader.pages)
    except Exception as exc:  # pypdf exceptions vary
        LOGGER.debug("Could not read page count: %s", exc)
        return None


def preview_document(document: SourceDocument) -> DocumentPreview:
    return DocumentPreview(
        name=document.name,
        size=document.size,
        page_count=read_page_count(document.data),
    )


def is_encrypted(data: bytes) -> bool | None:
    """Whether ``data`` is already an encrypted PDF; ``None`` if unreadable."""

    try:
        return bool(PdfReader(io.BytesIO(data)).is_encrypted)
    except Exception as exc:  # pypdf exceptions vary
        LOGGER.debug("Could not inspect encryption state: %s", exc)
        return None


__all__ = ["load_document", "read_page_count", "preview_document", "is_encrypted"]
