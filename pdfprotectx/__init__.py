"""
pdfprotectx - Password protection for PDF files.

Documents are protected with native PDF encryption (open and owner
passwords plus print/copy permissions) whenever a native encryption
engine is available. Otherwise the unmodified document is wrapped in a
store-only, AES encrypted ZIP archive locked with the open password.

Quick Start:
    >>> from pdfprotectx import protect_document
    >>> outcome = protect_document('report.pdf', 'out/', open_password='secret')
    >>> outcome.suggested_filename
    'report.protected.pdf'

Pipeline stages:
    - normalize: raw options -> ProtectionRequest
    - select: request + backend availability -> Selection
    - ProtectionExecutor: runs the selected strategy, with native -> ZIP recovery
    - ResultReporter: status messages and artifact delivery

For CLI usage, use the 'pdfprotectx' command after installation.
"""

__version__ = "1.0.0"

# Data types
from pdfprotectx.types import (
    ArtifactKind,
    DocumentPreview,
    Permissions,
    PrintLevel,
    ProtectionFailure,
    ProtectionOutcome,
    ProtectionRequest,
    ProtectionSuccess,
    Selection,
    SourceDocument,
    StatusLevel,
    StatusMessage,
    Strategy,
    suggested_filename,
)

# Exceptions
from pdfprotectx.exceptions import (
    ArchiveCreationError,
    BackendFailure,
    BackendUnavailableError,
    ConfigurationError,
    EncryptionFailedError,
    FailureKind,
    InvalidDocumentError,
    PDFProtectXError,
    ProtectionInProgressError,
    SelectionRejection,
    ValidationError,
)

# Pipeline stages
from pdfprotectx.options import normalize
from pdfprotectx.selector import select
from pdfprotectx.executor import ProtectionExecutor
from pdfprotectx.reporter import DirectoryDelivery, MemoryDelivery, ProtectControl, ResultReporter
from pdfprotectx.pipeline import ProtectionPipeline, protect_document

# Backends and configuration
from pdfprotectx.backends import (
    BackendAvailability,
    PikepdfBackend,
    PypdfBackend,
    ZipArchiveBackend,
    default_availability,
)
from pdfprotectx.config import ProtectionSettings
from pdfprotectx.document import load_document, preview_document, read_page_count

__all__ = [
    # Data types
    "ArtifactKind",
    "DocumentPreview",
    "Permissions",
    "PrintLevel",
    "ProtectionFailure",
    "ProtectionOutcome",
    "ProtectionRequest",
    "ProtectionSuccess",
    "Selection",
    "SourceDocument",
    "StatusLevel",
    "StatusMessage",
    "Strategy",
    "suggested_filename",
    # Exceptions
    "ArchiveCreationError",
    "BackendFailure",
    "BackendUnavailableError",
    "ConfigurationError",
    "EncryptionFailedError",
    "FailureKind",
    "InvalidDocumentError",
    "PDFProtectXError",
    "ProtectionInProgressError",
    "SelectionRejection",
    "ValidationError",
    # Pipeline
    "normalize",
    "select",
    "ProtectionExecutor",
    "ResultReporter",
    "DirectoryDelivery",
    "MemoryDelivery",
    "ProtectControl",
    "ProtectionPipeline",
    "protect_document",
    # Backends and configuration
    "BackendAvailability",
    "PikepdfBackend",
    "PypdfBackend",
    "ZipArchiveBackend",
    "default_availability",
    "ProtectionSettings",
    "load_document",
    "preview_document",
    "read_page_count",
    # Version info
    "__version__",
]
