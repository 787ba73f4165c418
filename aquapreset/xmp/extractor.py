"""
Attribute lookup over raw sidecar text.

Sidecars are scanned as text rather than parsed as XML: files written by
third-party tools are often not well-formed, and the values we need are
all `prefix:Name="value"` attributes.
"""

import re
from functools import lru_cache
from typing import Any, Optional, Union

_NUMBER_RE = re.compile(r'[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?')
_LEADING_FLOAT_RE = re.compile(r'\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)')
_LEADING_INT_RE = re.compile(r'\s*([+-]?\d+)')


@lru_cache(maxsize=256)
def attribute_pattern(key: str) -> 're.Pattern':
    """Case-insensitive pattern matching `key="value"` and capturing the value."""
    return re.compile(re.escape(key) + r'="([^"]*)"', re.IGNORECASE)


def to_number(text: str) -> Optional[float]:
    """Return text as a float if the whole (stripped) string is a decimal number."""
    text = text.strip()
    if _NUMBER_RE.fullmatch(text):
        return float(text)
    return None


def leading_float(text: str) -> Optional[float]:
    """Parse the numeric prefix of text, ignoring anything after it."""
    match = _LEADING_FLOAT_RE.match(text)
    return float(match.group(1)) if match else None


def leading_int(text: str) -> Optional[int]:
    """Parse the integer prefix of text; `"12.7"` gives 12."""
    match = _LEADING_INT_RE.match(text)
    return int(match.group(1)) if match else None


def extract_value(source: str, key: str, default: Any = None,
                  numeric: bool = True) -> Union[float, str, Any]:
    """
    Find the first `key="value"` in source.

    Args:
        source: Raw sidecar (or payload) text
        key: Attribute name including its namespace prefix, e.g. `crs:Tint`
        default: Returned when the attribute is absent or empty
        numeric: Convert numeric values to float; other values stay strings

    Returns:
        The value as float or string, or default
    """
    match = attribute_pattern(key).search(source)
    if not match or not match.group(1):
        return default
    value = match.group(1)
    if numeric:
        number = to_number(value)
        if number is not None:
            return number
    return value
