"""Turning protection outcomes into status messages and delivered artifacts."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Protocol

from .types import (
    ArtifactKind,
    ProtectionFailure,
    ProtectionOutcome,
    StatusLevel,
    StatusMessage,
)
from .utils import get_logger, resolve_path

LOGGER = get_logger("pdfprotectx.reporter")

StatusSink = Callable[[StatusMessage], None]

IDLE_LABEL = "Protect PDF"
BUSY_LABEL = "Processing..."

_SUCCESS_TEXT = {
    ArtifactKind.NATIVE_ENCRYPTED_DOCUMENT: "PDF encryption successful!",
    ArtifactKind.PASSWORD_PROTECTED_ARCHIVE: "ZIP creation successful!",
}


class ArtifactDelivery(Protocol):
    """Destination for successfully produced artifacts."""

    def deliver(self, data: bytes, filename: str) -> Path | None:
        """Hand ``data`` to the user under ``filename``."""


class DirectoryDelivery:
    """Write artifacts into ``output_dir``."""

    def __init__(self, output_dir: str | Path, *, overwrite: bool = False) -> None:
        self.output_dir = resolve_path(output_dir)
        self.overwrite = overwrite

    def deliver(self, data: bytes, filename: str) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        destination = self.output_dir / Path(filename).name
        if destination.exists() and not self.overwrite:
            raise FileExistsError(f"Refusing to overwrite existing file: {destination}")
        # Write to a sibling first so a failed write never leaves a partial artifact.
        partial = destination.with_name(destination.name + ".part")
        try:
            partial.write_bytes(data)
            partial.replace(destination)
        finally:
            partial.unlink(missing_ok=True)
        return destination


@dataclass
class MemoryDelivery:
    """Keep delivered artifacts in memory, keyed by filename."""

    artifacts: dict[str, bytes] = field(default_factory=dict)

    def deliver(self, data: bytes, filename: str) -> None:
        self.artifacts[filename] = data
        return None


@dataclass
class ProtectControl:
    """The control that starts a protection request.

    It is disabled while a request is in flight and must be re-armed once
    the request finishes, whatever the outcome.
    """

    enabled: bool = True
    label: str = IDLE_LABEL

    def disable(self) -> None:
        self.enabled = False
        self.label = BUSY_LABEL

    def reset(self) -> None:
        self.enabled = True
        self.label = IDLE_LABEL


class ResultReporter:
    """Publish statuses and deliver the artifact of a finished request."""

    def __init__(self, delivery: ArtifactDelivery, status_sink: StatusSink | None = None) -> None:
        self.delivery = delivery
        self._status_sink = status_sink
        self.last_status: StatusMessage | None = None

    def notify(self, level: StatusLevel, text: str) -> StatusMessage:
        return self._emit(StatusMessage(level, text))

    def _emit(self, status: StatusMessage) -> StatusMessage:
        self.last_status = status
        LOGGER.info("[%s] %s", status.level.value, status.text)
        if self._status_sink is not None:
            self._status_sink(status)
        return status

    def report(self, outcome: ProtectionOutcome) -> tuple[StatusMessage, Path | None]:
        if isinstance(outcome, ProtectionFailure):
            return self._emit(StatusMessage(StatusLevel.ERROR, outcome.message, outcome.kind)), None

        delivered = self.delivery.deliver(outcome.artifact_bytes, outcome.suggested_filename)
        text = _SUCCESS_TEXT[outcome.artifact_kind]
        if delivered is not None:
            text = f"{text} Saved to {delivered}"
        return self._emit(StatusMessage(StatusLevel.SUCCESS, text)), delivered

    def restore(self, control: ProtectControl) -> None:
        control.reset()


__all__ = [
    "ArtifactDelivery",
    "DirectoryDelivery",
    "MemoryDelivery",
    "ProtectControl",
    "ResultReporter",
    "StatusSink",
    "IDLE_LABEL",
    "BUSY_LABEL",
]
