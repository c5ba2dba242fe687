"""Shared utilities for the Technicians Business app."""

from utils.cache import TTLCache
from utils.config import AppConfig
from utils.formatting import format_amount, format_percent
from utils.strings import display_text, parse_optional_number, safe_float

__all__ = [
    "AppConfig",
    "TTLCache",
    "display_text",
    "format_amount",
    "format_percent",
    "parse_optional_number",
    "safe_float",
]
