"""The protection pipeline: options, selection, execution and reporting."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Mapping

from .backends.archive import ZipArchiveBackend
from .backends.availability import BackendAvailability, default_availability
from .backends.base import ArchiveBackend
from .document import load_document
from .exceptions import InvalidDocumentError, PDFProtectXError, ProtectionInProgressError, ValidationError
from .executor import ProtectionExecutor
from .options import normalize
from .reporter import ArtifactDelivery, DirectoryDelivery, ProtectControl, ResultReporter, StatusSink
from .selector import select
from .types import (
    Permissions,
    ProtectionFailure,
    ProtectionOutcome,
    ProtectionRequest,
    SourceDocument,
    StatusLevel,
)
from .utils import get_logger

LOGGER = get_logger("pdfprotectx.pipeline")


class ProtectionPipeline:
    """Single-session protection pipeline.

    Only one request may be in flight at a time: the :class:`ProtectControl`
    is disabled before the first suspension point and re-armed in a
    ``finally`` block.
    """

    def __init__(
        self,
        *,
        delivery: ArtifactDelivery,
        availability: BackendAvailability | None = None,
        archive_backend: ArchiveBackend | None = None,
        status_sink: StatusSink | None = None,
        control: ProtectControl | None = None,
    ) -> None:
        self.availability = availability or default_availability()
        self.reporter = ResultReporter(delivery, status_sink)
        self.executor = ProtectionExecutor(
            self.availability,
            archive_backend or ZipArchiveBackend(),
            on_status=self.reporter.notify,
        )
        self.control = control or ProtectControl()

    def _acquire(self) -> None:
        if not self.control.enabled:
            raise ProtectionInProgressError()
        self.control.disable()

    async def protect(self, document: SourceDocument, request: ProtectionRequest) -> ProtectionOutcome:
        """Protect ``document`` according to ``request`` and report the outcome."""

        self._acquire()
        try:
            return await self._run(document, request)
        finally:
            self.reporter.restore(self.control)

    async def _run(self, document: SourceDocument, request: ProtectionRequest) -> ProtectionOutcome:
        selection = select(request, self.availability.available)
        LOGGER.debug("Protecting %s via %s", document.name, selection.strategy.value)
        outcome = await self.executor.execute(selection, document, request)
        self.reporter.report(outcome)
        return outcome

    async def protect_path(
        self,
        path: str | Path,
        open_password: str | None = None,
        owner_password: str | None = None,
        permissions: Permissions | Mapping[str, Any] | None = None,
    ) -> ProtectionOutcome:
        """Normalize raw options, read ``path`` and protect it.

        Option errors are reported before the file is touched.
        """

        try:
            request = normalize(open_password, owner_password, permissions)
        except ValidationError as exc:
            return self.report_failure(exc)

        self._acquire()
        try:
            self.reporter.notify(StatusLevel.INFO, "Reading file...")
            try:
                document = await load_document(path)
            except InvalidDocumentError as exc:
                return self.report_failure(exc)
            return await self._run(document, request)
        finally:
            self.reporter.restore(self.control)

    def report_failure(self, error: PDFProtectXError) -> ProtectionFailure:
        """Report ``error`` as a failed outcome without running a strategy."""

        failure = ProtectionFailure(kind=error.kind, message=error.message)
        self.reporter.report(failure)
        return failure


def protect_document(
    input: str | Path,
    output_dir: str | Path,
    *,
    open_password: str | None = None,
    owner_password: str | None = None,
    permissions: Permissions | Mapping[str, Any] | None = None,
    overwrite: bool = False,
    availability: BackendAvailability | None = None,
) -> ProtectionOutcome:
    """Convenience wrapper running :meth:`ProtectionPipeline.protect_path` synchronously."""

    pipeline = ProtectionPipeline(
        delivery=DirectoryDelivery(output_dir, overwrite=overwrite),
        availability=availability,
    )
    return asyncio.run(pipeline.protect_path(input, open_password, owner_password, permissions))


__all__ = ["ProtectionPipeline", "protect_document"]
