from __future__ import annotations

import re
from typing import Any, List, Mapping, Optional

_CANONICAL_INDEX = re.compile(r'0|[1-9][0-9]*')


def _as_index(key: Any) -> Optional[int]:
    """Return the integer position a key stands for, or None.

    Decoded JSON object keys are always strings, so '0', '1', ... count as
    positions too. Non-canonical forms like '01' or '+1' do not.
    """
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key
    if isinstance(key, str) and _CANONICAL_INDEX.fullmatch(key):
        return int(key)
    return None


def is_structured(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple))


def is_list_like(value: Any) -> bool:
    """True when the keys of ``value`` form exactly the range 0..n-1."""
    if isinstance(value, (list, tuple)):
        return True
    if not isinstance(value, Mapping):
        return False
    for expected, key in enumerate(value.keys()):
        if _as_index(key) != expected:
            return False
    return True


def is_map_like(value: Any) -> bool:
    """True for a non-empty mapping that is not list-like."""
    return isinstance(value, Mapping) and bool(value) and not is_list_like(value)


def list_values(value: Any) -> List[Any]:
    """Elements of a list-like value in position order."""
    if isinstance(value, Mapping):
        return list(value.values())
    return list(value)
