"""
Custom exceptions for pdfprotectx.

Every error that the protection pipeline models carries a
:class:`FailureKind` so it can be turned into a
:class:`~pdfprotectx.types.ProtectionFailure` without string matching.
"""

from __future__ import annotations

from enum import Enum


class FailureKind(str, Enum):
    """Enumeration of the failure categories a request can end in."""

    NO_PASSWORD_PROVIDED = "no_password_provided"
    INVALID_OPTIONS = "invalid_options"
    INVALID_DOCUMENT = "invalid_document"
    OPEN_PASSWORD_REQUIRED_FOR_FALLBACK = "open_password_required_for_fallback"
    ENCRYPTION_FAILED = "encryption_failed"
    ARCHIVE_CREATION_FAILED = "archive_creation_failed"


class PDFProtectXError(Exception):
    """Base exception for all pdfprotectx errors."""

    kind: FailureKind | None = None

    def __init__(self, message: str = "", *, kind: FailureKind | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        if kind is not None:
            self.kind = kind

    @property
    def default_message(self) -> str:
        return "An unknown PDF protection error occurred."


class ValidationError(PDFProtectXError):
    """Raised when user supplied protection options are insufficient."""

    kind = FailureKind.NO_PASSWORD_PROVIDED

    @property
    def default_message(self) -> str:
        if self.kind is FailureKind.INVALID_OPTIONS:
            return "Invalid protection options."
        return "You must provide at least one password."


class SelectionRejection(PDFProtectXError):
    """Raised when no protection strategy can satisfy the request."""

    kind = FailureKind.OPEN_PASSWORD_REQUIRED_FOR_FALLBACK

    @property
    def default_message(self) -> str:
        return 'An "Open Password" is required for ZIP encryption fallback.'


class BackendFailure(PDFProtectXError):
    """Base class for failures reported by an encryption backend."""

    kind = FailureKind.ENCRYPTION_FAILED


class BackendUnavailableError(BackendFailure):
    """Raised when the native encryption engine cannot be loaded."""

    @property
    def default_message(self) -> str:
        return "Native encryption backend is not loaded."


class EncryptionFailedError(BackendFailure):
    """Raised when the native encryption engine fails to encrypt a document."""

    @property
    def default_message(self) -> str:
        return "Failed to encrypt PDF."


class ArchiveCreationError(BackendFailure):
    """Raised when the password-protected archive cannot be created."""

    kind = FailureKind.ARCHIVE_CREATION_FAILED

    @property
    def default_message(self) -> str:
        return "Failed to create ZIP file."


class InvalidDocumentError(PDFProtectXError):
    """Raised when the selected file is not a readable PDF document."""

    kind = FailureKind.INVALID_DOCUMENT

    @property
    def default_message(self) -> str:
        return "Please select a PDF file."


class ProtectionInProgressError(PDFProtectXError):
    """Raised when a request is submitted while another one is running."""

    @property
    def default_message(self) -> str:
        return "A protection request is already in progress."


class ConfigurationError(PDFProtectXError):
    """Raised when environment configuration holds an invalid value."""

    @property
    def default_message(self) -> str:
        return "Invalid pdfprotectx configuration."
