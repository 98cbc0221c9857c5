from __future__ import annotations

import json
from typing import Any, Mapping, Optional, Protocol

from .config import LookupDescriptor, TransformConfig
from .errors import FormatterError, LookupResolutionError
from .structure import is_list_like, is_structured, list_values

NOT_AVAILABLE = 'N/A'
UNKNOWN = 'Unknown'


class LookupResolver(Protocol):
    """Finds the record a raw value refers to, or returns None."""

    def resolve(self, descriptor: LookupDescriptor, value: Any) -> Any:
        ...


def _field_of(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _normalize_match(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (dict, list)):
        try:
            return json.dumps(value, sort_keys=True)
        except TypeError:
            return str(value)
    return value


class RecordListResolver:
    """In-memory resolver over ``descriptor.source``, a list of records.

    Records may be mappings or objects. The source is scanned on every
    call, so changes to it are seen right away; the first record with a
    matching value wins.
    """

    def resolve(self, descriptor: LookupDescriptor, value: Any) -> Any:
        if descriptor.source is None:
            raise LookupError("lookup descriptor has no source")
        wanted = _normalize_match(value)
        for record in descriptor.source:
            if _normalize_match(_field_of(record, descriptor.match_field)) == wanted:
                return record
        return None


def call_resolver(resolver: Any, descriptor: LookupDescriptor, value: Any) -> Any:
    if hasattr(resolver, 'resolve'):
        return resolver.resolve(descriptor, value)
    return resolver(descriptor, value)


def _plain(value: Any) -> Any:
    """Index-keyed mappings become lists, at any depth. ``{}`` stays an object."""
    if isinstance(value, (list, tuple)) or (value and is_list_like(value)):
        return [_plain(v) for v in list_values(value)]
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    return value


def default_display(value: Any) -> Any:
    """Structured values become compact JSON, None becomes 'N/A'."""
    if is_structured(value):
        return json.dumps(_plain(value), ensure_ascii=False, separators=(',', ':'), default=str)
    if value is None:
        return NOT_AVAILABLE
    return value


def resolve_lookup(key: str, value: Any, item: Mapping[str, Any], descriptor: LookupDescriptor, resolver: Any) -> Any:
    try:
        record = call_resolver(resolver, descriptor, value)
    except Exception as exc:
        raise LookupResolutionError(key, value, str(exc)) from exc

    if record is not None:
        return _field_of(record, descriptor.display_field)

    fallback = item.get(descriptor.fallback_key or key)
    return UNKNOWN if fallback is None else fallback


def resolve_value(
    key: str,
    value: Any,
    item: Mapping[str, Any],
    config: TransformConfig,
    resolver: Optional[Any] = None,
) -> Any:
    """Display value for one field: lookup, else formatter, else default."""
    descriptor = config.lookups.get(key)
    if descriptor is not None:
        return resolve_lookup(key, value, item, descriptor, resolver)

    formatter = config.formatters.get(key)
    if formatter is not None:
        try:
            return formatter(value, item)
        except Exception as exc:
            raise FormatterError(key, str(exc)) from exc

    return default_display(value)
