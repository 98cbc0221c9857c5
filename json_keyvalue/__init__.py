"""Core logic for JSON to key/value display records.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- normalize JSON inputs into items
- flatten nested objects into composite keys
- filter fields and derive labels
- resolve display values (lookup, formatter or default)
- group records into labelled panels
"""
from .config import DisplaySettings, LookupDescriptor, TransformConfig, config_from_mapping, make_config
from .converter import KeyValueConverter
from .errors import (
    ConfigurationError,
    FormatterError,
    KeyValueError,
    LookupResolutionError,
    MalformedInputError,
)
from .flattening import flatten
from .labels import include, label_for
from .normalizer import normalize
from .panels import Panel, build_panels, from_nested_array
from .records import ItemFailure, transform
from .resolver import LookupResolver, RecordListResolver, resolve_value
