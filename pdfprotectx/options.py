"""Normalization of raw user input into a :class:`ProtectionRequest`."""

from __future__ import annotations

from typing import Any, Mapping

from .exceptions import FailureKind, ValidationError
from .types import Permissions, PrintLevel, ProtectionRequest

_TRUE_STRINGS = frozenset({"on", "true", "yes", "1", "checked"})
_FALSE_STRINGS = frozenset({"", "off", "false", "no", "0"})


def coerce_print_level(value: Any) -> PrintLevel:
    """Coerce a checkbox value or level name into a :class:`PrintLevel`."""

    if value is None:
        return PrintLevel.NONE
    if isinstance(value, PrintLevel):
        return value
    if isinstance(value, bool):
        return PrintLevel.FULL if value else PrintLevel.NONE
    if isinstance(value, str):
        text = value.strip().lower()
        try:
            return PrintLevel(text)
        except ValueError:
            pass
        if text in _TRUE_STRINGS:
            return PrintLevel.FULL
        if text in _FALSE_STRINGS:
            return PrintLevel.NONE
    raise ValidationError(f"Unsupported print level: {value!r}", kind=FailureKind.INVALID_OPTIONS)


def coerce_flag(value: Any, *, name: str = "flag") -> bool:
    """Coerce a checkbox-like value into a boolean."""

    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise ValidationError(f"Unsupported value for {name}: {value!r}", kind=FailureKind.INVALID_OPTIONS)


def normalize_permissions(raw: Permissions | Mapping[str, Any] | None) -> Permissions:
    if raw is None:
        return Permissions()
    if isinstance(raw, Permissions):
        return raw
    if not isinstance(raw, Mapping):
        raise ValidationError(
            f"Permissions must be a mapping, got {type(raw).__name__}",
            kind=FailureKind.INVALID_OPTIONS,
        )
    return Permissions(
        print=coerce_print_level(raw.get("print")),
        copy=coerce_flag(raw.get("copy"), name="copy"),
    )


def normalize(
    raw_open: str | None,
    raw_owner: str | None,
    raw_permissions: Permissions | Mapping[str, Any] | None = None,
) -> ProtectionRequest:
    """Build a canonical :class:`ProtectionRequest` from raw form values.

    Passwords are taken verbatim; ``None`` and ``""`` both count as empty.
    Raises :class:`ValidationError` when neither password is provided or a
    permission value cannot be coerced.
    """

    if not raw_open and not raw_owner:
        raise ValidationError(kind=FailureKind.NO_PASSWORD_PROVIDED)

    permissions = normalize_permissions(raw_permissions)
    return ProtectionRequest(
        open_password=raw_open or None,
        owner_password=raw_owner or None,
        permissions=permissions,
    )


__all__ = ["normalize", "normalize_permissions", "coerce_print_level", "coerce_flag"]
