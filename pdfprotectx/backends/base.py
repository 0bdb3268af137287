"""Backend protocols for document protection."""

from __future__ import annotations

from typing import Protocol

from ..types import Permissions


class NativeEncryptionBackend(Protocol):
    """Protocol for engines that embed encryption in the PDF itself."""

    name: str

    def encrypt(
        self,
        data: bytes,
        user_password: str,
        owner_password: str,
        permissions: Permissions,
    ) -> bytes:
        """Return ``data`` encrypted with the given passwords and permissions.

        Raises:
            EncryptionFailedError: If the engine cannot encrypt the document
        """


class ArchiveBackend(Protocol):
    """Protocol for engines that wrap a document in an encrypted archive."""

    name: str

    def create_protected_archive(
        self,
        data: bytes,
        entry_name: str,
        password: str,
        compression_level: int = 0,
    ) -> bytes:
        """Return an archive holding ``data`` as ``entry_name``, locked with ``password``.

        Raises:
            ArchiveCreationError: If the archive cannot be produced
        """
