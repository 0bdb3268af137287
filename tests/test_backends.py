from __future__ import annotations

import io
from pathlib import Path

import pytest
import pyzipper
from pypdf import PdfReader
from pypdf.constants import UserAccessPermissions

from pdfprotectx.backends import (
    BackendAvailability,
    PypdfBackend,
    ZipArchiveBackend,
    detect_native_backend,
    resolver_for_engine,
)
from pdfprotectx.backends.pypdf_backend import ALL_PERMISSIONS, permissions_flag
from pdfprotectx.exceptions import (
    ArchiveCreationError,
    BackendUnavailableError,
    ConfigurationError,
    EncryptionFailedError,
)
from pdfprotectx.types import Permissions, PrintLevel


def _permission_bits(reader: PdfReader) -> int:
    return int(reader.trailer["/Encrypt"]["/P"]) & 0xFFFFFFFF


# -- pypdf native engine ------------------------------------------------------


def test_pypdf_backend_encrypts_with_both_passwords(sample_pdf: Path) -> None:
    encrypted = PypdfBackend().encrypt(
        sample_pdf.read_bytes(),
        "open",
        "owner",
        Permissions(print=PrintLevel.FULL, copy=True),
    )

    reader = PdfReader(io.BytesIO(encrypted))
    assert reader.is_encrypted is True
    assert reader.decrypt("open") != 0
    assert len(reader.pages) == 5
    bits = _permission_bits(reader)
    assert bits & int(UserAccessPermissions.PRINT)
    assert bits & int(UserAccessPermissions.EXTRACT)

    owner_reader = PdfReader(io.BytesIO(encrypted))
    assert owner_reader.decrypt("owner") != 0


def test_pypdf_backend_restricts_permissions(sample_pdf: Path) -> None:
    encrypted = PypdfBackend().encrypt(sample_pdf.read_bytes(), "open", "open", Permissions())

    reader = PdfReader(io.BytesIO(encrypted))
    bits = _permission_bits(reader)
    assert not bits & int(UserAccessPermissions.PRINT)
    assert not bits & int(UserAccessPermissions.EXTRACT)
    assert bits & int(UserAccessPermissions.MODIFY)


def test_pypdf_backend_refuses_encrypted_input(sample_pdf: Path) -> None:
    backend = PypdfBackend()
    encrypted = backend.encrypt(sample_pdf.read_bytes(), "open", "owner", Permissions())

    with pytest.raises(EncryptionFailedError):
        backend.encrypt(encrypted, "again", "again", Permissions())


def test_pypdf_backend_rejects_garbage() -> None:
    with pytest.raises(EncryptionFailedError):
        PypdfBackend().encrypt(b"definitely not a pdf", "open", "owner", Permissions())


def test_pypdf_backend_wraps_lazy_parse_errors(broken_root_pdf: bytes) -> None:
    with pytest.raises(EncryptionFailedError):
        PypdfBackend().encrypt(broken_root_pdf, "open", "owner", Permissions())


def test_permissions_flag_bits() -> None:
    assert permissions_flag(Permissions(print=PrintLevel.FULL, copy=True)) == ALL_PERMISSIONS
    restricted = permissions_flag(Permissions())
    assert restricted > 0
    assert not restricted & int(UserAccessPermissions.PRINT)
    assert not restricted & int(UserAccessPermissions.PRINT_TO_REPRESENTATION)
    assert not restricted & int(UserAccessPermissions.EXTRACT)


# -- pikepdf native engine ----------------------------------------------------


def test_pikepdf_backend_encrypts_document(sample_pdf: Path) -> None:
    pikepdf = pytest.importorskip("pikepdf")
    from pdfprotectx.backends import PikepdfBackend

    encrypted = PikepdfBackend().encrypt(
        sample_pdf.read_bytes(),
        "open",
        "owner",
        Permissions(print=PrintLevel.FULL, copy=False),
    )

    with pytest.raises(pikepdf.PasswordError):
        pikepdf.open(io.BytesIO(encrypted))
    with pikepdf.open(io.BytesIO(encrypted), password="open") as pdf:
        assert len(pdf.pages) == 5
        assert pdf.allow.print_highres is True
        assert pdf.allow.extract is False


def test_pikepdf_backend_reports_missing_module(monkeypatch) -> None:
    from pdfprotectx.backends import pikepdf_backend

    def _missing(name):
        raise ImportError(f"No module named '{name}'")

    monkeypatch.setattr(pikepdf_backend.importlib, "import_module", _missing)

    with pytest.raises(BackendUnavailableError):
        pikepdf_backend.PikepdfBackend()


# -- archive backend ----------------------------------------------------------


def test_archive_is_store_only_and_byte_identical(sample_pdf: Path) -> None:
    original = sample_pdf.read_bytes()

    data = ZipArchiveBackend().create_protected_archive(original, "sample.pdf", "abc")

    with pyzipper.AESZipFile(io.BytesIO(data)) as archive:
        archive.setpassword(b"abc")
        assert archive.namelist() == ["sample.pdf"]
        info = archive.getinfo("sample.pdf")
        assert info.file_size == len(original)
        assert info.compress_size >= info.file_size
        assert archive.read("sample.pdf") == original


def test_archive_compression_level_deflates() -> None:
    payload = b"A" * 20000

    data = ZipArchiveBackend().create_protected_archive(payload, "big.pdf", "abc", compression_level=9)

    with pyzipper.AESZipFile(io.BytesIO(data)) as archive:
        archive.setpassword(b"abc")
        assert archive.getinfo("big.pdf").compress_size < len(payload)
        assert archive.read("big.pdf") == payload


def test_archive_requires_the_right_password(sample_pdf: Path) -> None:
    data = ZipArchiveBackend().create_protected_archive(sample_pdf.read_bytes(), "sample.pdf", "abc")

    with pyzipper.AESZipFile(io.BytesIO(data)) as archive:
        archive.setpassword(b"wrong")
        with pytest.raises((RuntimeError, ValueError)):
            archive.read("sample.pdf")


def test_archive_entry_name_drops_directories() -> None:
    data = ZipArchiveBackend().create_protected_archive(b"%PDF", "C:\\scans\\invoice.pdf", "abc")

    with pyzipper.AESZipFile(io.BytesIO(data)) as archive:
        assert archive.namelist() == ["invoice.pdf"]


@pytest.mark.parametrize("password, level", [("", 0), ("abc", 10), ("abc", -1)])
def test_archive_rejects_invalid_arguments(password: str, level: int) -> None:
    with pytest.raises(ArchiveCreationError):
        ZipArchiveBackend().create_protected_archive(b"%PDF", "a.pdf", password, compression_level=level)


def test_archive_rejects_unknown_key_size() -> None:
    with pytest.raises(ValueError):
        ZipArchiveBackend(key_bits=64)


# -- availability ---------------------------------------------------------------


def test_availability_resolves_once() -> None:
    calls = []

    def resolver():
        calls.append(1)
        return PypdfBackend()

    availability = BackendAvailability(resolver)
    assert availability.resolved is False

    assert availability.available is True
    assert availability.available is True
    assert isinstance(availability.backend, PypdfBackend)
    assert calls == [1]


def test_fixed_availability() -> None:
    assert BackendAvailability.fixed(None).available is False
    assert BackendAvailability.fixed(None).resolved is True


def test_engine_none_is_unavailable() -> None:
    assert BackendAvailability.for_engine("none").available is False


def test_engine_pypdf_is_available() -> None:
    assert BackendAvailability.for_engine("pypdf").backend.name == "pypdf"


def test_unknown_engine_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        resolver_for_engine("ghostscript")
    with pytest.raises(ConfigurationError):
        detect_native_backend(["ghostscript"])


def test_detect_skips_unavailable_engines(monkeypatch) -> None:
    from pdfprotectx.backends import availability

    def _unavailable():
        raise BackendUnavailableError("not installed")

    monkeypatch.setitem(availability.NATIVE_ENGINES, "pikepdf", _unavailable)

    backend = detect_native_backend()

    assert isinstance(backend, PypdfBackend)
