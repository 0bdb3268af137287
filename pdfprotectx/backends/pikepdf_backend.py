"""qpdf native encryption backend, driven through ``pikepdf``."""

from __future__ import annotations

import importlib
import io
from typing import Any

from ..exceptions import BackendUnavailableError, EncryptionFailedError
from ..types import Permissions
from ..utils import get_logger

LOGGER = get_logger("pdfprotectx.backends.pikepdf")


class PikepdfBackend:
    """Native backend that encrypts documents with qpdf (AES-256, R6).

    ``pikepdf`` wraps a compiled qpdf library, so it is loaded when the
    backend is constructed rather than at import time; a missing or broken
    installation surfaces as :class:`BackendUnavailableError`.
    """

    name = "pikepdf"
    revision = 6

    def __init__(self) -> None:
        try:
            self._pikepdf: Any = importlib.import_module("pikepdf")
        except ImportError as exc:
            raise BackendUnavailableError(f"pikepdf could not be loaded: {exc}") from exc

    def encrypt(
        self,
        data: bytes,
        user_password: str,
        owner_password: str,
        permissions: Permissions,
    ) -> bytes:
        pikepdf = self._pikepdf
        if not owner_password:
            raise EncryptionFailedError("An owner password is required for encryption")

        try:
            allow = pikepdf.Permissions(
                print_lowres=permissions.allow_print,
                print_highres=permissions.allow_print,
                extract=permissions.allow_copy,
            )
            encryption = pikepdf.Encryption(
                user=user_password,
                owner=owner_password,
                R=self.revision,
                allow=allow,
            )
        except Exception as exc:  # qpdf errors vary
            raise EncryptionFailedError(f"Invalid encryption settings: {exc}") from exc

        LOGGER.debug(
            "Encrypting %d bytes with qpdf R%d (print=%s, copy=%s)",
            len(data),
            self.revision,
            permissions.print.value,
            permissions.copy,
        )

        output = io.BytesIO()
        try:
            with pikepdf.open(io.BytesIO(data)) as pdf:
                pdf.save(
                    output,
                    encryption=encryption,
                    object_stream_mode=pikepdf.ObjectStreamMode.generate,
                    linearize=False,
                )
        except pikepdf.PasswordError as exc:
            raise EncryptionFailedError("Input PDF is already encrypted") from exc
        except Exception as exc:  # qpdf errors vary
            raise EncryptionFailedError(f"Failed to encrypt PDF: {exc}") from exc
        return output.getvalue()
