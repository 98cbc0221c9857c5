from __future__ import annotations

import logging
from typing import Any, List, Mapping, Tuple

from .io_utils import decode_json_text
from .structure import is_list_like, is_map_like, list_values

logger = logging.getLogger(__name__)

Item = Mapping[str, Any]


def decode_input(raw: Any) -> Any:
    """Decode JSON text input; structured values pass through untouched."""
    if isinstance(raw, (str, bytes)):
        if not raw.strip():
            return None
        return decode_json_text(raw)
    return raw


def normalize(raw: Any) -> Tuple[List[Item], bool]:
    """Coerce raw input into a list of items.

    Returns ``(items, wrapped)`` where ``wrapped`` tells whether a single
    object was wrapped into a one-element list. Empty or non-structured
    input gives ``([], False)``.
    """
    data = decode_input(raw)

    if not isinstance(data, (Mapping, list, tuple)) or not data:
        return [], False

    if not is_list_like(data):
        return [data], True

    items: List[Item] = []
    for position, entry in enumerate(list_values(data)):
        if is_map_like(entry) or (isinstance(entry, Mapping) and not entry):
            items.append(entry)
        else:
            logger.debug("Skipping element %d: not an object (%s)", position, type(entry).__name__)
    return items, False
