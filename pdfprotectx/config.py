"""Environment driven configuration for pdfprotectx."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping

from .backends.availability import ENGINE_CHOICES
from .exceptions import ConfigurationError

ENV_PREFIX = "PDFPROTECTX_"
DEFAULT_NATIVE_ENGINE = "auto"
DEFAULT_LOG_LEVEL = "WARNING"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


def _parse_bool(name: str, value: str) -> bool:
    text = value.strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean value, got '{value}'")


@dataclass(frozen=True)
class ProtectionSettings:
    """
    Settings shared by the pipeline and the command line interface.

    Attributes:
        native_engine: Native encryption engine (``auto``, ``pikepdf``,
            ``pypdf`` or ``none``)
        output_dir: Directory protected artifacts are delivered to
        overwrite: Whether existing artifacts may be replaced
        log_level: Level applied to the ``pdfprotectx`` loggers
    """
    native_engine: str = DEFAULT_NATIVE_ENGINE
    output_dir: Path = field(default_factory=Path.cwd)
    overwrite: bool = False
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        if self.native_engine not in ENGINE_CHOICES:
            raise ConfigurationError(
                f"{ENV_PREFIX}NATIVE_ENGINE must be one of {', '.join(ENGINE_CHOICES)}, "
                f"got '{self.native_engine}'"
            )
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigurationError(f"{ENV_PREFIX}LOG_LEVEL is not a valid level: '{self.log_level}'")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ProtectionSettings":
        """Load settings from ``PDFPROTECTX_*`` environment variables."""

        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        engine = env.get(f"{ENV_PREFIX}NATIVE_ENGINE")
        if engine:
            values["native_engine"] = engine.strip().lower()

        output_dir = env.get(f"{ENV_PREFIX}OUTPUT_DIR")
        if output_dir:
            values["output_dir"] = Path(output_dir).expanduser()

        overwrite = env.get(f"{ENV_PREFIX}OVERWRITE")
        if overwrite is not None:
            values["overwrite"] = _parse_bool(f"{ENV_PREFIX}OVERWRITE", overwrite)

        log_level = env.get(f"{ENV_PREFIX}LOG_LEVEL")
        if log_level:
            values["log_level"] = log_level.strip().upper()

        return cls(**values)  # type: ignore[arg-type]

    def with_overrides(self, **overrides: object) -> "ProtectionSettings":
        """Return a copy with every non-``None`` override applied."""

        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
