"""Ready-made value formatters.

Every factory returns a callable taking ``(value, item=None)`` so it can be
dropped straight into ``TransformConfig.formatters``.
"""
from __future__ import annotations

import html
import json
import re
from datetime import date as date_type
from typing import Any, Callable, Dict, Mapping, Optional

from dateutil import parser as date_parser

Formatter = Callable[..., Any]

_PHONE_PATTERN = re.compile(r'(\d{3})(\d{3})(\d{4})')
_WORD_START = re.compile(r'(^|\s)(\S)')
_SIZE_UNITS = ('B', 'KB', 'MB', 'GB', 'TB')


def _number(value: Any, decimals: int) -> str:
    return f"{float(value or 0):,.{decimals}f}"


def _parse_date(value: Any):
    if isinstance(value, date_type):
        return value
    return date_parser.parse(str(value))


def _capitalize_words(text: str) -> str:
    return _WORD_START.sub(lambda m: m.group(1) + m.group(2).upper(), text)


def currency(symbol: str = '₦', decimals: int = 2) -> Formatter:
    return lambda value, item=None: f"{symbol}{_number(value, decimals)}"


def date(fmt: str = '%b %d, %Y') -> Formatter:
    return lambda value, item=None: _parse_date(value).strftime(fmt) if value else 'N/A'


def datetime_(fmt: str = '%b %d, %Y %I:%M %p') -> Formatter:
    return lambda value, item=None: _parse_date(value).strftime(fmt) if value else 'N/A'


def boolean(true_label: str = 'Yes', false_label: str = 'No') -> Formatter:
    return lambda value, item=None: true_label if value else false_label


def uppercase() -> Formatter:
    return lambda value, item=None: str(value).upper()


def lowercase() -> Formatter:
    return lambda value, item=None: str(value).lower()


def title_case() -> Formatter:
    return lambda value, item=None: _capitalize_words(str(value).lower())


def phone(country_code: str = '') -> Formatter:
    return lambda value, item=None: country_code + _PHONE_PATTERN.sub(r'(\1) \2-\3', str(value))


def truncate(length: int = 50, ending: str = '...') -> Formatter:
    def fmt(value, item=None):
        text = str(value)
        return text[:length] + ending if len(text) > length else text
    return fmt


def percentage(decimals: int = 2) -> Formatter:
    return lambda value, item=None: f"{_number(value, decimals)}%"


def file_size() -> Formatter:
    """Bytes to a human readable size, e.g. 1536 -> '1.5 KB'."""
    def fmt(value, item=None):
        size = max(float(value or 0), 0.0)
        power = 0
        while size >= 1024 and power < len(_SIZE_UNITS) - 1:
            size /= 1024
            power += 1
        scaled = round(size, 2)
        shown = str(int(scaled)) if scaled == int(scaled) else str(scaled)
        return f"{shown} {_SIZE_UNITS[power]}"
    return fmt


def json_(pretty: bool = True) -> Formatter:
    indent = 4 if pretty else None
    return lambda value, item=None: json.dumps(value, indent=indent, ensure_ascii=False, default=str)


def badge(colors: Optional[Mapping[Any, str]] = None) -> Formatter:
    colors = dict(colors or {})

    def fmt(value, item=None):
        color = colors.get(value, 'gray')
        return f"<span class='badge badge-{html.escape(str(color))}'>{html.escape(str(value))}</span>"
    return fmt


def url(text: str = 'View') -> Formatter:
    return lambda value, item=None: f"<a href='{html.escape(str(value))}' target='_blank'>{html.escape(text)}</a>"


def email() -> Formatter:
    def fmt(value, item=None):
        address = html.escape(str(value))
        return f"<a href='mailto:{address}'>{address}</a>"
    return fmt


def enum_label(labels: Dict[Any, str]) -> Formatter:
    def fmt(value, item=None):
        if value in labels:
            return labels[value]
        return _capitalize_words(str(value).replace('_', ' '))
    return fmt
