"""Backend abstractions for pdfprotectx."""

from .archive import ZipArchiveBackend
from .availability import (
    ENGINE_CHOICES,
    NATIVE_ENGINES,
    BackendAvailability,
    default_availability,
    detect_native_backend,
    resolver_for_engine,
)
from .base import ArchiveBackend, NativeEncryptionBackend
from .pikepdf_backend import PikepdfBackend
from .pypdf_backend import PypdfBackend

__all__ = [
    "ArchiveBackend",
    "NativeEncryptionBackend",
    "BackendAvailability",
    "default_availability",
    "detect_native_backend",
    "resolver_for_engine",
    "ENGINE_CHOICES",
    "NATIVE_ENGINES",
    "PikepdfBackend",
    "PypdfBackend",
    "ZipArchiveBackend",
]
