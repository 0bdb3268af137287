"""Execution of a selected protection strategy.

Each strategy suspends on exactly one backend call. The native path is the
only one with a recovery step: when the native backend fails, the request
is re-selected without it, which either lands on the archive fallback or on
a rejection when no open password exists. Archive failures are terminal.
"""

from __future__ import annotations

import asyncio
from typing import Callable

from .backends.availability import BackendAvailability
from .backends.base import ArchiveBackend
from .exceptions import (
    ArchiveCreationError,
    BackendFailure,
    BackendUnavailableError,
    SelectionRejection,
)
from .selector import reselect_after_native_failure
from .types import (
    ArtifactKind,
    Permissions,
    ProtectionFailure,
    ProtectionOutcome,
    ProtectionRequest,
    ProtectionSuccess,
    Selection,
    SourceDocument,
    StatusLevel,
    Strategy,
    suggested_filename,
)
from .utils import get_logger

LOGGER = get_logger("pdfprotectx.executor")

StatusCallback = Callable[[StatusLevel, str], None]

ARCHIVE_COMPRESSION_LEVEL = 0


class ProtectionExecutor:
    """Run a :class:`Selection` against the configured backends."""

    def __init__(
        self,
        availability: BackendAvailability,
        archive_backend: ArchiveBackend,
        *,
        on_status: StatusCallback | None = None,
    ) -> None:
        self.availability = availability
        self.archive_backend = archive_backend
        self._on_status = on_status

    def _notify(self, level: StatusLevel, text: str) -> None:
        if self._on_status is not None:
            self._on_status(level, text)

    async def execute(
        self,
        selection: Selection,
        document: SourceDocument,
        request: ProtectionRequest,
    ) -> ProtectionOutcome:
        if selection.strategy is Strategy.NATIVE_ENCRYPTION:
            return await self._native(document, request)
        if selection.strategy is Strategy.ARCHIVE_FALLBACK:
            return await self._archive(document, request)
        return self._reject(selection)

    async def _native(self, document: SourceDocument, request: ProtectionRequest) -> ProtectionOutcome:
        try:
            backend = self.availability.backend
            if backend is None:
                raise BackendUnavailableError()
            LOGGER.debug("Calling native backend %s for %s", backend.name, document.name)
            encrypted = await asyncio.to_thread(
                backend.encrypt,
                document.data,
                request.user_password,
                request.effective_owner_password,
                request.permissions,
            )
        except BackendFailure as exc:
            return await self._recover_from_native_failure(exc, document, request)

        return ProtectionSuccess(
            artifact_bytes=encrypted,
            artifact_kind=ArtifactKind.NATIVE_ENCRYPTED_DOCUMENT,
            suggested_filename=suggested_filename(document.name, ArtifactKind.NATIVE_ENCRYPTED_DOCUMENT),
        )

    async def _recover_from_native_failure(
        self,
        error: BackendFailure,
        document: SourceDocument,
        request: ProtectionRequest,
    ) -> ProtectionOutcome:
        LOGGER.warning("Native encryption failed: %s. Falling back to ZIP encryption.", error.message)
        selection = reselect_after_native_failure(request)
        if selection.strategy is Strategy.ARCHIVE_FALLBACK:
            self._notify(
                StatusLevel.INFO,
                "Native encryption not available. Using password-protected ZIP fallback...",
            )
        return await self.execute(selection, document, request)

    async def _archive(self, document: SourceDocument, request: ProtectionRequest) -> ProtectionOutcome:
        if request.open_password is None:
            return self._reject(
                Selection(Strategy.REJECT, SelectionRejection.kind),
            )
        if request.owner_password is not None or request.permissions != Permissions():
            LOGGER.debug("Archive fallback ignores owner password and permission flags")

        LOGGER.debug("Calling archive backend %s for %s", self.archive_backend.name, document.name)
        try:
            archive = await asyncio.to_thread(
                self.archive_backend.create_protected_archive,
                document.data,
                document.name,
                request.open_password,
                ARCHIVE_COMPRESSION_LEVEL,
            )
        except ArchiveCreationError as exc:
            LOGGER.warning("Archive creation failed: %s", exc.message)
            message = exc.message
            if message != exc.default_message:
                message = f"{exc.default_message.rstrip('.')}: {message}"
            return ProtectionFailure(kind=exc.kind, message=message)

        return ProtectionSuccess(
            artifact_bytes=archive,
            artifact_kind=ArtifactKind.PASSWORD_PROTECTED_ARCHIVE,
            suggested_filename=suggested_filename(document.name, ArtifactKind.PASSWORD_PROTECTED_ARCHIVE),
        )

    @staticmethod
    def _reject(selection: Selection) -> ProtectionFailure:
        rejection = SelectionRejection(kind=selection.reason) if selection.reason else SelectionRejection()
        return ProtectionFailure(kind=rejection.kind, message=rejection.message)


__all__ = ["ProtectionExecutor", "StatusCallback", "ARCHIVE_COMPRESSION_LEVEL"]
