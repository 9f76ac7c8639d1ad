"""
Parsers package for Logdog.

Turns raw JSON log lines into styled, human readable text.
"""

from .log_formatter import format_entry, format_line, format_lines, parse_timestamp

__all__ = [
    'format_entry',
    'format_line',
    'format_lines',
    'parse_timestamp'
]
