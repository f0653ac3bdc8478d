"""
Helpers Module - Utility functions for common request parsing
"""

from datetime import datetime, date
from flask import request


def get_json_body():
    """Request JSON as a dict; a missing or malformed body reads as empty"""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def parse_date(value):
    """Parse 'YYYY-MM-DD' (an ISO datetime prefix is tolerated), None for blanks"""
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.strptime(value.strip()[:10], '%Y-%m-%d').date()
    raise ValueError(f"Unsupported date value: {value!r}")


def parse_bool(value, default=False):
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        return value.strip().lower() in ('true', '1', 'yes', 'on')
    return default


def clean_str(value):
    if value is None:
        return None
    return str(value).strip()


__all__ = ['get_json_body', 'parse_date', 'parse_bool', 'clean_str']
