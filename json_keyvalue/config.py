"""Configuration models.

``TransformConfig`` drives the core transformation; ``DisplaySettings`` holds
the options of the panel adapter. Both are frozen pydantic models: build them
once, then pass them around read-only.
"""
from __future__ import annotations

import os
from typing import Any, Callable, Dict, FrozenSet, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import ConfigurationError

DEFAULT_SEPARATOR = ' → '
DEFAULT_EXCLUDE_SUFFIXES: Tuple[str, ...] = ('_error',)
DEFAULT_INDEX_FORMAT = ' #%d'
ENV_PREFIX = 'JSON_KEYVALUE__'

# Option names used by older configuration dicts.
_LEGACY_LOOKUP_KEYS = {
    'model': 'source',
    'field': 'match_field',
    'display': 'display_field',
    'fallback': 'fallback_key',
}


def format_index(fmt: str, position: int) -> str:
    """Render a printf-style item number; a format without a placeholder is used as-is."""
    try:
        return fmt % (position,)
    except TypeError:
        # no placeholder to take the number
        return fmt % ()

class LookupDescriptor(BaseModel):
    """Where to look a raw value up and which field of the hit to display."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    source: Any = None
    match_field: str
    display_field: str
    fallback_key: Optional[str] = None

    @model_validator(mode='before')
    @classmethod
    def _accept_legacy_keys(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            return {_LEGACY_LOOKUP_KEYS.get(k, k): v for k, v in data.items()}
        return data


class TransformConfig(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    skip: FrozenSet[str] = frozenset()
    exclude_suffixes: Tuple[str, ...] = DEFAULT_EXCLUDE_SUFFIXES
    exclude_prefixes: Tuple[str, ...] = ()
    flatten_nested: bool = True
    nested_separator: str = Field(default=DEFAULT_SEPARATOR, min_length=1)
    item_label: Optional[str] = None
    labels: Dict[str, str] = Field(default_factory=dict)
    formatters: Dict[str, Callable[..., Any]] = Field(default_factory=dict)
    lookups: Dict[str, LookupDescriptor] = Field(default_factory=dict)


class DisplaySettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    flatten_single_arrays: bool = False
    max_array_size: Optional[int] = Field(default=None, ge=0)
    skip_array_indices: bool = False
    array_index_format: str = DEFAULT_INDEX_FORMAT

    @field_validator('array_index_format')
    @classmethod
    def _check_index_format(cls, value: str) -> str:
        try:
            format_index(value, 1)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"array_index_format takes at most one integer placeholder: {exc}") from exc
        return value

    def index_suffix(self, position: int) -> str:
        return format_index(self.array_index_format, position)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, prefix: str = ENV_PREFIX) -> 'DisplaySettings':
        """Build settings from ``JSON_KEYVALUE__<OPTION>`` environment variables."""
        environ = os.environ if environ is None else environ
        values: Dict[str, Any] = {}
        for name in cls.model_fields:
            raw = environ.get(f"{prefix}{name.upper()}")
            if raw is None:
                continue
            if name == 'max_array_size' and raw.strip().lower() in ('', 'none', 'null'):
                values[name] = None
            else:
                values[name] = raw
        return _validated(cls, values)


def _validated(model, values: Mapping[str, Any]):
    try:
        return model.model_validate(dict(values))
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc


def make_config(**options: Any) -> TransformConfig:
    """Build a TransformConfig, reporting bad options as ConfigurationError."""
    return _validated(TransformConfig, options)


def make_settings(**options: Any) -> DisplaySettings:
    return _validated(DisplaySettings, options)


def config_from_mapping(
    options: Mapping[str, Any],
    defaults: Optional[DisplaySettings] = None,
) -> Tuple[TransformConfig, DisplaySettings]:
    """Split a flat option dict into transform config and display settings.

    Options absent from ``options`` keep their defaults; display options fall
    back to ``defaults`` first.
    """
    transform_names = set(TransformConfig.model_fields)
    display_names = set(DisplaySettings.model_fields)

    unknown = sorted(set(options) - transform_names - display_names)
    if unknown:
        raise ConfigurationError(f"Unknown option(s): {', '.join(unknown)}")

    transform = {k: v for k, v in options.items() if k in transform_names}
    display = defaults.model_dump() if defaults is not None else {}
    display.update({k: v for k, v in options.items() if k in display_names})
    return make_config(**transform), make_settings(**display)
