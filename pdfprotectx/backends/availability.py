"""Process-wide resolution of the native encryption backend."""

from __future__ import annotations

from typing import Callable, Iterable

from ..exceptions import BackendUnavailableError, ConfigurationError
from ..utils import get_logger
from .base import NativeEncryptionBackend
from .pikepdf_backend import PikepdfBackend
from .pypdf_backend import PypdfBackend

LOGGER = get_logger("pdfprotectx.backends")

NATIVE_ENGINES: dict[str, Callable[[], NativeEncryptionBackend]] = {
    "pikepdf": PikepdfBackend,
    "pypdf": PypdfBackend,
}
AUTO_ORDER: tuple[str, ...] = ("pikepdf", "pypdf")
ENGINE_CHOICES: tuple[str, ...] = ("auto", *NATIVE_ENGINES, "none")


def detect_native_backend(preferred: Iterable[str] | None = None) -> NativeEncryptionBackend | None:
    """Load the first native backend from *preferred* order that initialises."""

    order = list(preferred) if preferred else list(AUTO_ORDER)
    for engine in order:
        try:
            factory = NATIVE_ENGINES[engine]
        except KeyError as exc:
            raise ConfigurationError(f"Unknown native encryption engine: {engine}") from exc
        try:
            backend = factory()
        except BackendUnavailableError as exc:
            LOGGER.info("Native engine %s unavailable: %s", engine, exc.message)
            continue
        LOGGER.debug("Resolved native encryption engine %s", engine)
        return backend
    return None


def resolver_for_engine(engine: str) -> Callable[[], NativeEncryptionBackend | None]:
    """Return a resolver honouring an engine name from :data:`ENGINE_CHOICES`."""

    if engine not in ENGINE_CHOICES:
        raise ConfigurationError(
            f"Unknown native encryption engine '{engine}', expected one of: {', '.join(ENGINE_CHOICES)}"
        )
    if engine == "none":
        return lambda: None
    if engine == "auto":
        return detect_native_backend
    return lambda: detect_native_backend([engine])


class BackendAvailability:
    """Whether the native encryption backend is loaded.

    The resolver runs once, on first access. The result is read-only from
    then on and is never reset, so concurrent readers need no locking.
    """

    def __init__(self, resolver: Callable[[], NativeEncryptionBackend | None]) -> None:
        self._resolver = resolver
        self._resolved = False
        self._backend: NativeEncryptionBackend | None = None

    @classmethod
    def fixed(cls, backend: NativeEncryptionBackend | None) -> "BackendAvailability":
        """Availability that is already resolved to ``backend``."""

        availability = cls(lambda: backend)
        availability.resolve()
        return availability

    @classmethod
    def for_engine(cls, engine: str) -> "BackendAvailability":
        return cls(resolver_for_engine(engine))

    @property
    def resolved(self) -> bool:
        return self._resolved

    def resolve(self) -> NativeEncryptionBackend | None:
        if not self._resolved:
            self._backend = self._resolver()
            self._resolved = True
            LOGGER.debug(
                "Native encryption backend %s",
                f"loaded ({self._backend.name})" if self._backend is not None else "not loaded",
            )
        return self._backend

    @property
    def backend(self) -> NativeEncryptionBackend | None:
        return self.resolve()

    @property
    def available(self) -> bool:
        return self.resolve() is not None


_DEFAULT_AVAILABILITY: BackendAvailability | None = None


def default_availability() -> BackendAvailability:
    """Return the process-wide availability, configured from the environment."""

    global _DEFAULT_AVAILABILITY
    if _DEFAULT_AVAILABILITY is None:
        from ..config import ProtectionSettings

        settings = ProtectionSettings.from_env()
        _DEFAULT_AVAILABILITY = BackendAvailability.for_engine(settings.native_engine)
    return _DEFAULT_AVAILABILITY


__all__ = [
    "NATIVE_ENGINES",
    "ENGINE_CHOICES",
    "BackendAvailability",
    "default_availability",
    "detect_native_backend",
    "resolver_for_engine",
]
