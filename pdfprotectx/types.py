"""
Type definitions and dataclasses for pdfprotectx.

This module defines the data structures that flow through the protection
pipeline: the canonical request, the source document, the selected
strategy and the final outcome.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from .exceptions import FailureKind, InvalidDocumentError, ValidationError
from .utils import strip_extension


class PrintLevel(str, Enum):
    """Printing permission granted by a natively encrypted document."""

    NONE = "none"
    FULL = "full"


class ArtifactKind(Enum):
    """Kind of artifact produced by a successful protection run."""

    NATIVE_ENCRYPTED_DOCUMENT = ("native_encrypted_document", ".protected.pdf", "application/pdf")
    PASSWORD_PROTECTED_ARCHIVE = ("password_protected_archive", ".protected.zip", "application/zip")

    def __init__(self, label: str, suffix: str, media_type: str) -> None:
        self.label = label
        self.suffix = suffix
        self.media_type = media_type


class Strategy(str, Enum):
    """Protection path chosen for a request."""

    NATIVE_ENCRYPTION = "native_encryption"
    ARCHIVE_FALLBACK = "archive_fallback"
    REJECT = "reject"


class StatusLevel(str, Enum):
    """Severity of a status message shown to the user."""

    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Permissions:
    """
    Permission flags embedded by native encryption.

    Attributes:
        print: Printing level granted to users without the owner password
        copy: Whether text and graphics may be copied out of the document
    """
    print: PrintLevel = PrintLevel.NONE
    copy: bool = False

    @property
    def allow_print(self) -> bool:
        return self.print is PrintLevel.FULL

    @property
    def allow_copy(self) -> bool:
        return self.copy


@dataclass(frozen=True)
class ProtectionRequest:
    """
    Canonical, validated protection intent.

    Attributes:
        open_password: Password required to open the document
        owner_password: Password required to change permissions or remove protection
        permissions: Permission flags for native encryption
    """
    open_password: Optional[str] = None
    owner_password: Optional[str] = None
    permissions: Permissions = field(default_factory=Permissions)

    def __post_init__(self) -> None:
        # Empty strings and None both mean "not provided".
        object.__setattr__(self, "open_password", self.open_password or None)
        object.__setattr__(self, "owner_password", self.owner_password or None)
        if self.open_password is None and self.owner_password is None:
            raise ValidationError(kind=FailureKind.NO_PASSWORD_PROVIDED)

    @property
    def has_open_password(self) -> bool:
        return self.open_password is not None

    @property
    def user_password(self) -> str:
        return self.open_password or ""

    @property
    def effective_owner_password(self) -> str:
        """Owner password used for native encryption, defaulting to the open password."""

        return self.owner_password or self.open_password or ""

    def __repr__(self) -> str:
        return (
            "ProtectionRequest(open_password={open}, owner_password={owner}, permissions={perms!r})"
        ).format(
            open="<provided>" if self.open_password else None,
            owner="<provided>" if self.owner_password else None,
            perms=self.permissions,
        )


@dataclass(frozen=True)
class SourceDocument:
    """
    Immutable PDF buffer selected by the user.

    Attributes:
        name: Display name of the document, used for the archive entry and
            the suggested output filename
        data: Raw document bytes, read once
    """
    name: str
    data: bytes = field(repr=False)

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "SourceDocument":
        """Read ``path`` into memory, refusing anything that is not a PDF file."""

        pdf_path = Path(path).expanduser()
        if pdf_path.suffix.lower() != ".pdf":
            raise InvalidDocumentError()
        if not pdf_path.is_file():
            raise InvalidDocumentError(f"PDF file not found: {pdf_path}")
        try:
            data = pdf_path.read_bytes()
        except OSError as exc:
            raise InvalidDocumentError(f"Unable to read PDF file: {pdf_path}. Error: {exc}") from exc
        return cls(name=pdf_path.name, data=data)


@dataclass(frozen=True)
class Selection:
    """Result of strategy selection; ``reason`` is only set for rejections."""

    strategy: Strategy
    reason: Optional[FailureKind] = None


@dataclass(frozen=True)
class ProtectionSuccess:
    """
    Successful protection run.

    Attributes:
        artifact_bytes: Encrypted document or archive bytes
        artifact_kind: Which strategy produced the artifact
        suggested_filename: Download name derived from the source document
    """
    artifact_bytes: bytes = field(repr=False)
    artifact_kind: ArtifactKind
    suggested_filename: str

    ok = True

    def __str__(self) -> str:
        return f"ProtectionSuccess(kind={self.artifact_kind.label}, filename='{self.suggested_filename}')"


@dataclass(frozen=True)
class ProtectionFailure:
    """Failed protection run with its failure category and detail."""

    kind: FailureKind
    message: str

    ok = False

    def __str__(self) -> str:
        return f"ProtectionFailure(kind={self.kind.value}, message='{self.message}')"


ProtectionOutcome = Union[ProtectionSuccess, ProtectionFailure]


@dataclass(frozen=True)
class StatusMessage:
    """Status line emitted while a request is processed."""

    level: StatusLevel
    text: str
    kind: Optional[FailureKind] = None


@dataclass(frozen=True)
class DocumentPreview:
    """Decorative information about a selected document."""

    name: str
    size: int
    page_count: Optional[int] = None

    @property
    def page_label(self) -> str:
        return "unknown" if self.page_count is None else str(self.page_count)


def suggested_filename(name: str, kind: ArtifactKind) -> str:
    """Return ``name`` with its extension replaced by the suffix of ``kind``."""

    return f"{strip_extension(Path(name).name)}{kind.suffix}"
