from __future__ import annotations

import json
import logging
import os
import tempfile
from typing import Any, Dict, List, Optional

import gradio as gr

from .config import DEFAULT_SEPARATOR, DisplaySettings, config_from_mapping
from .errors import KeyValueError
from .flattening import flatten
from .io_utils import read_json_content
from .labels import derive_label
from .normalizer import normalize
from .panels import Panel, build_panels
from .records import ItemFailure

logger = logging.getLogger(__name__)


def parse_list_option(text: Optional[str]) -> List[str]:
    """'a, b,,c' -> ['a', 'b', 'c']"""
    if not text:
        return []
    return [part.strip() for part in text.split(',') if part.strip()]


def extract_field_keys(data: Any, separator: str, sample_size: int = 50) -> List[str]:
    """Composite keys seen across the first ``sample_size`` items, in first-seen order."""
    try:
        items, _ = normalize(data)
    except KeyValueError:
        return []
    seen: Dict[str, None] = {}
    for item in items[:max(0, int(sample_size))]:
        for key in flatten(item, separator):
            seen.setdefault(key, None)
    return list(seen)


def build_label_table(keys: List[str], separator: str) -> List[List[str]]:
    return [[key, derive_label(key, separator)] for key in keys]


def labels_from_table(label_df) -> Dict[str, str]:
    if label_df is None:
        return {}
    try:
        rows = zip(label_df["Key"], label_df["Label"])
    except Exception:
        rows = ((row[0], row[1]) for row in label_df)
    return {str(k): str(v) for k, v in rows if k and v}


def panel_to_dict(panel: Panel) -> Dict[str, Any]:
    if panel.is_placeholder:
        return {"label": panel.label, "message": panel.message}
    records = panel.records
    if isinstance(records, ItemFailure):
        return {"label": panel.label, "error": records.model_dump()}
    return {"label": panel.label, "values": records}


def load_json_upload(file_obj, separator: str):
    if file_obj is None:
        return None, [], "No file uploaded."

    try:
        data = read_json_content(file_obj)
        items, _ = normalize(data)
    except (KeyValueError, ValueError) as e:
        return None, [], f"Error parsing JSON: {str(e)}"

    keys = extract_field_keys(data, separator or DEFAULT_SEPARATOR)
    table = build_label_table(keys, separator or DEFAULT_SEPARATOR)
    return data, table, f"Loaded {len(items)} item(s) with {len(keys)} unique fields."


def refresh_label_table(data, separator: str):
    if data is None:
        return []
    return build_label_table(extract_field_keys(data, separator or DEFAULT_SEPARATOR), separator or DEFAULT_SEPARATOR)


def collect_options(skip_text, suffixes_text, prefixes_text, separator, item_label, label_df,
                    flatten_nested=True, skip_indices=False, max_size=None) -> Dict[str, Any]:
    options: Dict[str, Any] = {
        "skip": parse_list_option(skip_text),
        "exclude_suffixes": parse_list_option(suffixes_text),
        "exclude_prefixes": parse_list_option(prefixes_text),
        "flatten_nested": bool(flatten_nested),
        "labels": labels_from_table(label_df),
        "skip_array_indices": bool(skip_indices),
    }
    if separator:
        options["nested_separator"] = separator
    if item_label and item_label.strip():
        options["item_label"] = item_label.strip()
    if max_size not in (None, "", 0):
        options["max_array_size"] = int(max_size)
    return options


def render_panels(data, field_name: str, options: Dict[str, Any]):
    """Run the transformation for the UI; errors come back as a status text."""
    try:
        config, settings = config_from_mapping(options, DisplaySettings.from_env())
        panels = build_panels(data, field_name or "Data", config, settings)
    except KeyValueError as exc:
        logger.info("Preview failed: %s", exc)
        return None, f"Error: {exc}"
    return [panel_to_dict(p) for p in panels], f"{len(panels)} panel(s)."


def preview_panels_handler(data, field_name, skip_text, suffixes_text, prefixes_text, separator,
                           item_label, label_df, flatten_nested=True, skip_indices=False, max_size=None):
    if data is None:
        return None, "No data loaded."
    options = collect_options(skip_text, suffixes_text, prefixes_text, separator, item_label, label_df,
                              flatten_nested, skip_indices, max_size)
    return render_panels(data, field_name, options)


def export_panels_handler(data, field_name, skip_text, suffixes_text, prefixes_text, separator,
                          item_label, label_df, flatten_nested, skip_indices, max_size, file_name):
    if data is None:
        return None, "No data loaded."

    options = collect_options(skip_text, suffixes_text, prefixes_text, separator, item_label, label_df,
                              flatten_nested, skip_indices, max_size)
    rows, status = render_panels(data, field_name, options)
    if rows is None:
        return None, status

    if not file_name or not file_name.strip():
        file_name = "panels"
    if not file_name.lower().endswith(".json"):
        file_name += ".json"

    path = os.path.join(tempfile.gettempdir(), file_name)
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(rows, f, indent=2, ensure_ascii=False, default=str)
    except OSError as e:
        return None, f"Error during export: {str(e)}"
    return path, f"Export successful! Saved to {path}"


def separator_change_handler(data, separator):
    return gr.update(value=refresh_label_table(data, separator))
