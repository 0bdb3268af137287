"""Deterministic choice of the protection strategy for a request."""

from __future__ import annotations

from .exceptions import FailureKind
from .types import ProtectionRequest, Selection, Strategy
from .utils import get_logger

LOGGER = get_logger("pdfprotectx.selector")


def select(request: ProtectionRequest, backend_available: bool) -> Selection:
    """Pick the protection path for ``request``.

    Native encryption always wins when its backend is available. Without it
    only the archive fallback remains, and that needs an open password since
    an archive has no notion of owner permissions.
    """

    if backend_available:
        selection = Selection(Strategy.NATIVE_ENCRYPTION)
    elif request.has_open_password:
        selection = Selection(Strategy.ARCHIVE_FALLBACK)
    else:
        selection = Selection(Strategy.REJECT, FailureKind.OPEN_PASSWORD_REQUIRED_FOR_FALLBACK)

    LOGGER.debug(
        "Selected %s (backend available: %s, open password: %s)",
        selection.strategy.value,
        backend_available,
        "<provided>" if request.has_open_password else "<missing>",
    )
    return selection


def reselect_after_native_failure(request: ProtectionRequest) -> Selection:
    """Selection used once the native backend has failed for ``request``."""

    return select(request, backend_available=False)


__all__ = ["select", "reselect_after_native_failure"]
