"""Group transformed records into labelled panels for a renderer.

A panel is what a UI shows as one key/value box: a label plus either the
record of one item or a placeholder message.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, List, Mapping, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict

from .config import DisplaySettings, TransformConfig
from .labels import derive_label
from .normalizer import decode_input, normalize
from .records import check_config, transform_items
from .structure import is_list_like, is_map_like, is_structured, list_values

logger = logging.getLogger(__name__)


class Panel(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    label: str
    records: Any = None
    message: Optional[str] = None

    @property
    def is_placeholder(self) -> bool:
        return self.message is not None


class Prepared(NamedTuple):
    items: List[Mapping[str, Any]]
    single: bool
    oversized: Optional[int]


def prepare_items(raw: Any, settings: DisplaySettings) -> Prepared:
    """Decode input and apply the single-array and size options.

    ``oversized`` carries the item count when the outer list is longer than
    ``settings.max_array_size``; ``items`` is then empty.
    """
    data = decode_input(raw)
    if not is_structured(data) or not data:
        return Prepared([], False, None)

    if settings.flatten_single_arrays and is_list_like(data) and len(data) == 1:
        data = list_values(data)[0]

    if settings.max_array_size is not None and is_list_like(data) and len(data) > settings.max_array_size:
        logger.debug("Input has %d items, above max_array_size=%d", len(data), settings.max_array_size)
        return Prepared([], False, len(data))

    items, single = normalize(data)
    return Prepared(items, single, None)


def build_panels(
    raw: Any,
    field_name: str,
    config: Optional[TransformConfig] = None,
    settings: Optional[DisplaySettings] = None,
    resolver: Optional[Any] = None,
) -> List[Panel]:
    config = config or TransformConfig()
    settings = settings or DisplaySettings()
    check_config(config, resolver)

    prepared = prepare_items(raw, settings)
    if prepared.oversized is not None:
        return [Panel(label=field_name, message=f"Array too large to display ({prepared.oversized} items)")]
    if not prepared.items:
        return [Panel(label=field_name, message=f"No {field_name} available")]

    item_label = config.item_label or field_name
    panels: List[Panel] = []
    for index, record in enumerate(transform_items(prepared.items, config, resolver)):
        if settings.skip_array_indices or prepared.single:
            label = item_label
        else:
            label = item_label + settings.index_suffix(index + 1)
        panels.append(Panel(label=label, records=record))
    return panels


def from_nested_array(
    raw: Any,
    key_formatter: Optional[Callable[[str], str]] = None,
    config: Optional[TransformConfig] = None,
    settings: Optional[DisplaySettings] = None,
    resolver: Optional[Any] = None,
) -> List[Panel]:
    """One group of panels per top-level key of an object.

    A one-element list under a key is shown as that element. Scalars are
    shown as a single-field record.
    """
    config = config or TransformConfig()
    data = decode_input(raw)
    if not is_map_like(data):
        return []

    panels: List[Panel] = []
    for key, value in data.items():
        key = str(key)
        label = key_formatter(key) if key_formatter else derive_label(key, config.nested_separator)
        if is_list_like(value) and len(value) == 1:
            value = list_values(value)[0]
        if not is_structured(value):
            value = {key: value}
        group_config = config.model_copy(update={'item_label': label})
        panels.extend(build_panels(value, label, group_config, settings, resolver))
    return panels
