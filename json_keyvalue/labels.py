from __future__ import annotations

from .config import TransformConfig


def include(key: str, config: TransformConfig) -> bool:
    """Whether a composite key survives the skip / suffix / prefix rules."""
    if key in config.skip:
        return False
    if any(key.endswith(suffix) for suffix in config.exclude_suffixes):
        return False
    if any(key.startswith(prefix) for prefix in config.exclude_prefixes):
        return False
    return True


def humanize_segment(segment: str) -> str:
    """'home_address' -> 'Home Address'.

    Only the first letter of each underscore-delimited word is upper-cased;
    the rest of the word is left as written.
    """
    return ' '.join(word[:1].upper() + word[1:] for word in segment.split('_'))


def derive_label(key: str, separator: str) -> str:
    return separator.join(humanize_segment(part) for part in key.split(separator))


def label_for(key: str, config: TransformConfig) -> str:
    if key in config.labels:
        return config.labels[key]
    return derive_label(key, config.nested_separator)
