from __future__ import annotations

import json
from typing import Any, Union

from .errors import MalformedInputError


def decode_json_text(content: Union[str, bytes]) -> Any:
    """Decode JSON text, raising MalformedInputError on bad syntax or encoding."""
    try:
        if isinstance(content, bytes):
            content = content.decode('utf-8')
        return json.loads(content)
    except ValueError as exc:
        raise MalformedInputError(f"Invalid JSON input: {exc}") from exc


def read_json_content(file_obj):
    """Read JSON content from an uploaded file or file path."""
    if file_obj is None:
        raise ValueError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        return decode_json_text(file_obj.read())

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    with open(path, 'r', encoding='utf-8') as f:
        return decode_json_text(f.read())
