from __future__ import annotations

from typing import Any, Dict, Mapping

from .config import DEFAULT_SEPARATOR
from .structure import is_map_like


def flatten(item: Mapping[str, Any], separator: str = DEFAULT_SEPARATOR, prefix: str = '') -> Dict[str, Any]:
    """Collapse nested objects into composite keys joined by ``separator``.

    Only map-like values are descended into. Scalars, None, empty structures
    and lists stay as leaf values under their composite key. Keys come out
    in depth-first pre-order of the source.
    """
    result: Dict[str, Any] = {}
    for key, value in item.items():
        key = str(key)
        composite = f"{prefix}{separator}{key}" if prefix else key
        if is_map_like(value):
            result.update(flatten(value, separator, composite))
        else:
            result[composite] = value
    return result
