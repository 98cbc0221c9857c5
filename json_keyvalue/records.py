"""Turn normalized items into ordered label -> display value records."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Mapping, NamedTuple, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict

from .config import TransformConfig
from .errors import ConfigurationError, FormatterError
from .flattening import flatten
from .labels import include, label_for
from .normalizer import normalize
from .resolver import resolve_value

logger = logging.getLogger(__name__)


class FieldRecord(NamedTuple):
    key: str
    label: str
    raw_value: Any
    item: Mapping[str, Any]


class ItemFailure(BaseModel):
    """Stands in for the record of an item whose formatter raised."""

    model_config = ConfigDict(frozen=True)

    index: int
    key: str
    message: str


OutputRecord = Dict[str, Any]
RecordOrFailure = Union[OutputRecord, ItemFailure]


def check_config(config: TransformConfig, resolver: Optional[Any]) -> None:
    """Reject configurations that cannot run, before any item is touched."""
    if config.lookups and resolver is None:
        keys = ', '.join(sorted(config.lookups))
        raise ConfigurationError(f"Lookups configured for {keys} but no lookup resolver was given.")
    if resolver is not None and not (hasattr(resolver, 'resolve') or callable(resolver)):
        raise ConfigurationError("Lookup resolver must be callable or provide a resolve() method.")


def iter_fields(item: Mapping[str, Any], config: TransformConfig) -> Iterator[FieldRecord]:
    flattened = flatten(item, config.nested_separator) if config.flatten_nested else item
    for key, value in flattened.items():
        key = str(key)
        if not include(key, config):
            continue
        yield FieldRecord(key, label_for(key, config), value, item)


def build_record(item: Mapping[str, Any], config: TransformConfig, resolver: Optional[Any] = None) -> OutputRecord:
    record: OutputRecord = {}
    for field in iter_fields(item, config):
        # Later keys deriving the same label overwrite earlier ones.
        record[field.label] = resolve_value(field.key, field.raw_value, item, config, resolver)
    return record


def transform_items(
    items: Sequence[Mapping[str, Any]],
    config: TransformConfig,
    resolver: Optional[Any] = None,
) -> List[RecordOrFailure]:
    check_config(config, resolver)

    results: List[RecordOrFailure] = []
    for index, item in enumerate(items):
        try:
            results.append(build_record(item, config, resolver))
        except FormatterError as exc:
            logger.warning("Item %d: %s", index, exc)
            results.append(ItemFailure(index=index, key=exc.key, message=str(exc)))
    return results


def transform(raw: Any, config: Optional[TransformConfig] = None, resolver: Optional[Any] = None) -> List[RecordOrFailure]:
    """Run the whole pipeline on raw input (structure or JSON text)."""
    config = config or TransformConfig()
    check_config(config, resolver)
    items, _ = normalize(raw)
    logger.debug("Transforming %d item(s)", len(items))
    return transform_items(items, config, resolver)
