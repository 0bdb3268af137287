"""Password-protected ZIP archive backend built on ``pyzipper``."""

from __future__ import annotations

import io
from pathlib import PurePath

import pyzipper

from ..exceptions import ArchiveCreationError
from ..utils import get_logger

LOGGER = get_logger("pdfprotectx.backends.archive")


class ZipArchiveBackend:
    """Wrap a single document in a WinZip AES encrypted archive."""

    name = "pyzipper"

    def __init__(self, *, key_bits: int = 256) -> None:
        if key_bits not in (128, 192, 256):
            raise ValueError(f"Unsupported AES key size: {key_bits}")
        self.key_bits = key_bits

    def create_protected_archive(
        self,
        data: bytes,
        entry_name: str,
        password: str,
        compression_level: int = 0,
    ) -> bytes:
        if not password:
            raise ArchiveCreationError("A non-empty password is required for the archive")
        if not 0 <= compression_level <= 9:
            raise ArchiveCreationError(f"Invalid compression level: {compression_level}")

        # Entries are always stored flat, under the document's own name.
        arcname = PurePath(entry_name.replace("\\", "/")).name or "document.pdf"
        if compression_level == 0:
            compression, compresslevel = pyzipper.ZIP_STORED, None
        else:
            compression, compresslevel = pyzipper.ZIP_DEFLATED, compression_level

        LOGGER.debug(
            "Creating AES-%d archive entry %s (%d bytes, level %d)",
            self.key_bits,
            arcname,
            len(data),
            compression_level,
        )
        buffer = io.BytesIO()
        try:
            with pyzipper.AESZipFile(
                buffer,
                "w",
                compression=compression,
                encryption=pyzipper.WZ_AES,
            ) as archive:
                archive.setpassword(password.encode("utf-8"))
                archive.setencryption(pyzipper.WZ_AES, nbits=self.key_bits)
                archive.writestr(arcname, data, compress_type=compression, compresslevel=compresslevel)
        except Exception as exc:  # pragma: no cover - archive errors vary
            raise ArchiveCreationError(str(exc) or "Failed to create ZIP file.") from exc
        return buffer.getvalue()
