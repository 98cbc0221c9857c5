from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from .config import DisplaySettings, TransformConfig, config_from_mapping
from .panels import Panel, build_panels, from_nested_array, prepare_items
from .records import RecordOrFailure, check_config, transform_items


class KeyValueConverter:
    """Fluent builder around the transformation.

    Setters only record options; validation happens when a terminal method
    (``to_array``, ``to_panels``, ``build``) turns them into frozen configs.

        KeyValueConverter.make(payload, 'Payment').skip(['id']).to_array()
    """

    def __init__(self, data: Any, field_name: str, defaults: Optional[DisplaySettings] = None):
        self._data = data
        self._field_name = field_name
        self._defaults = defaults
        self._options: Dict[str, Any] = {}
        self._resolver: Optional[Any] = None

    @classmethod
    def make(cls, data: Any, field_name: str, defaults: Optional[DisplaySettings] = None) -> 'KeyValueConverter':
        return cls(data, field_name, defaults)

    def _set(self, name: str, value: Any) -> 'KeyValueConverter':
        self._options[name] = value
        return self

    def skip(self, keys: Iterable[str]) -> 'KeyValueConverter':
        return self._set('skip', list(keys))

    def exclude_suffixes(self, suffixes: Iterable[str]) -> 'KeyValueConverter':
        return self._set('exclude_suffixes', list(suffixes))

    def exclude_prefixes(self, prefixes: Iterable[str]) -> 'KeyValueConverter':
        return self._set('exclude_prefixes', list(prefixes))

    def flatten_nested(self, flatten: bool = True) -> 'KeyValueConverter':
        return self._set('flatten_nested', flatten)

    def nested_separator(self, separator: str) -> 'KeyValueConverter':
        return self._set('nested_separator', separator)

    def item_label(self, label: str) -> 'KeyValueConverter':
        return self._set('item_label', label)

    def labels(self, labels: Mapping[str, str]) -> 'KeyValueConverter':
        return self._set('labels', dict(labels))

    def formatters(self, formatters: Mapping[str, Callable[..., Any]]) -> 'KeyValueConverter':
        return self._set('formatters', dict(formatters))

    def lookups(self, lookups: Mapping[str, Any]) -> 'KeyValueConverter':
        return self._set('lookups', dict(lookups))

    def flatten_single_arrays(self, flatten: bool = True) -> 'KeyValueConverter':
        return self._set('flatten_single_arrays', flatten)

    def max_array_size(self, size: Optional[int]) -> 'KeyValueConverter':
        return self._set('max_array_size', size)

    def skip_array_indices(self, skip: bool = True) -> 'KeyValueConverter':
        return self._set('skip_array_indices', skip)

    def array_index_format(self, fmt: str) -> 'KeyValueConverter':
        return self._set('array_index_format', fmt)

    def config(self, options: Mapping[str, Any]) -> 'KeyValueConverter':
        """Merge a flat option dict over the options set so far."""
        self._options.update(options)
        return self

    def lookup_resolver(self, resolver: Any) -> 'KeyValueConverter':
        self._resolver = resolver
        return self

    def build(self) -> Tuple[TransformConfig, DisplaySettings]:
        defaults = self._defaults if self._defaults is not None else DisplaySettings.from_env()
        return config_from_mapping(self._options, defaults)

    def to_array(self) -> List[RecordOrFailure]:
        """Records only, one per item. Oversized input gives an empty list."""
        config, settings = self.build()
        check_config(config, self._resolver)
        prepared = prepare_items(self._data, settings)
        return transform_items(prepared.items, config, self._resolver)

    def to_panels(self) -> List[Panel]:
        config, settings = self.build()
        return build_panels(self._data, self._field_name, config, settings, self._resolver)

    @classmethod
    def from_nested_array(
        cls,
        data: Any,
        key_formatter: Optional[Callable[[str], str]] = None,
        options: Optional[Mapping[str, Any]] = None,
        resolver: Optional[Any] = None,
    ) -> List[Panel]:
        config, settings = config_from_mapping(options or {}, DisplaySettings.from_env())
        return from_nested_array(data, key_formatter, config, settings, resolver)
