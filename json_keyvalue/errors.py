from __future__ import annotations

from typing import Any


class KeyValueError(Exception):
    """Base class for errors raised while building key/value records."""


class MalformedInputError(KeyValueError, ValueError):
    """JSON text input could not be decoded."""


class ConfigurationError(KeyValueError, ValueError):
    """Invalid or incomplete configuration, detected before any work is done."""


class LookupResolutionError(KeyValueError):
    def __init__(self, key: str, value: Any, reason: str):
        self.key = key
        self.value = value
        super().__init__(f"Lookup for '{key}' failed on value {value!r}: {reason}")


class FormatterError(KeyValueError):
    def __init__(self, key: str, reason: str):
        self.key = key
        super().__init__(f"Formatter for '{key}' failed: {reason}")
