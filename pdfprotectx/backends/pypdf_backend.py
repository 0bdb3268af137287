"""pypdf native encryption backend."""

from __future__ import annotations

import io

from pypdf import PdfReader, PdfWriter
from pypdf.constants import UserAccessPermissions

from ..exceptions import EncryptionFailedError
from ..types import Permissions
from ..utils import get_logger

LOGGER = get_logger("pdfprotectx.backends.pypdf")

# Every permission bit set, bits 1-2 and the sign bit cleared.
ALL_PERMISSIONS = (2**31 - 1) - 3
_PRINT_BITS = int(UserAccessPermissions.PRINT) | int(UserAccessPermissions.PRINT_TO_REPRESENTATION)
_COPY_BITS = int(UserAccessPermissions.EXTRACT)


def permissions_flag(permissions: Permissions) -> int:
    """Translate ``permissions`` into the ``/P`` value written by pypdf."""

    flag = ALL_PERMISSIONS
    if not permissions.allow_print:
        flag &= ~_PRINT_BITS
    if not permissions.allow_copy:
        flag &= ~_COPY_BITS
    return flag


def _copy_reader_contents(reader: PdfReader) -> PdfWriter:
    writer = PdfWriter()
    writer.clone_reader_document_root(reader)

    metadata = reader.metadata
    if metadata:
        writer.add_metadata(
            {
                key: str(value)
                for key, value in metadata.items()
                if isinstance(key, str) and value is not None
            }
        )

    return writer


class PypdfBackend:
    """Native backend that encrypts documents with ``pypdf`` (AES-256)."""

    name = "pypdf"
    algorithm = "AES-256"

    def encrypt(
        self,
        data: bytes,
        user_password: str,
        owner_password: str,
        permissions: Permissions,
    ) -> bytes:
        if not owner_password:
            raise EncryptionFailedError("An owner password is required for encryption")

        # pypdf parses lazily, so a damaged trailer or root may only surface
        # while checking encryption or cloning the document.
        try:
            reader = PdfReader(io.BytesIO(data))
            already_encrypted = reader.is_encrypted
            writer = None if already_encrypted else _copy_reader_contents(reader)
        except Exception as exc:  # pypdf exceptions vary
            raise EncryptionFailedError(f"Unable to read PDF: {exc}") from exc

        if already_encrypted:
            raise EncryptionFailedError("Input PDF is already encrypted")

        flag = permissions_flag(permissions)
        LOGGER.debug("Encrypting %d bytes with %s, /P=%d", len(data), self.algorithm, flag)

        try:
            writer.encrypt(
                user_password=user_password,
                owner_password=owner_password,
                permissions_flag=flag,
                algorithm=self.algorithm,
            )
        except Exception as exc:  # pragma: no cover - encryption errors vary
            raise EncryptionFailedError(f"Failed to encrypt PDF: {exc}") from exc

        output = io.BytesIO()
        try:
            writer.write(output)
        except Exception as exc:  # pragma: no cover - serialization errors vary
            raise EncryptionFailedError(f"Unable to serialize encrypted PDF: {exc}") from exc
        return output.getvalue()
