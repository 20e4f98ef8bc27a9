"""Config – Settings base class and the environment loader.

A settings class is a dataclass whose every field has a default; the
loader overrides fields from ``<PREFIX>_<FIELD>`` variables and coerces the
raw string to the type of the field's default::

    QUOTA_COMMENTS_LIMIT=20        -> comments_limit: int = 10
    QUOTA_CORS_ORIGINS=a,b         -> cors_origins: list[str] = ["*"]
"""
from __future__ import annotations

import dataclasses
import os
from typing import Any, ClassVar, Mapping, TypeVar

from quota_guard.config.errors import ConfigError, InvalidSettingError

S = TypeVar("S", bound="Settings")

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off", ""})


@dataclasses.dataclass
class Settings:
    """Base for environment-driven settings; subclasses override :meth:`_validate`."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        pass

    @classmethod
    def env_name(cls, field_name: str) -> str:
        if not cls._prefix:
            return field_name.upper()
        return f"{cls._prefix}_{field_name}".upper()


def _default_of(field: dataclasses.Field[Any]) -> Any:
    if field.default is not dataclasses.MISSING:
        return field.default
    if field.default_factory is not dataclasses.MISSING:
        return field.default_factory()
    return ""


def _coerce(raw: str, default: Any) -> Any:
    # bool first: bool is a subclass of int
    if isinstance(default, bool):
        lowered = raw.strip().lower()
        if lowered in _TRUTHY:
            return True
        if lowered in _FALSY:
            return False
        raise ValueError("expected a boolean")
    if isinstance(default, int):
        return int(raw)
    if isinstance(default, float):
        return float(raw)
    if isinstance(default, list):
        return [item.strip() for item in raw.split(",") if item.strip()]
    return raw


class EnvSettingsLoader:
    """Build a :class:`Settings` subclass from environment variables.

    *environ* defaults to :data:`os.environ`; pass a mapping in tests.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[S]) -> S:
        environ = os.environ if self._environ is None else self._environ
        overrides: dict[str, Any] = {}
        for field in dataclasses.fields(settings_class):
            name = settings_class.env_name(field.name)
            raw = environ.get(name)
            if raw is None:
                continue
            try:
                overrides[field.name] = _coerce(raw, _default_of(field))
            except ValueError as exc:
                raise InvalidSettingError(name, raw, str(exc)) from exc

        try:
            return settings_class(**overrides)
        except ConfigError:
            raise
        except TypeError as exc:
            raise ConfigError(f"Cannot build {settings_class.__name__}: {exc}") from exc


__all__ = ["EnvSettingsLoader", "Settings"]
