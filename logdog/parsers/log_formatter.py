"""
Structured log line formatting.

Each line written by a logdog logger is a JSON object:

    {"timestamp": "2024-01-15T14:30:45Z", "level": "INFO",
     "message": "hi", "data": {"x": 1}}

and is rendered as

    Jan 15 14:30:45 [INFO] hi {x=1}

Any field may be missing. Lines that are not JSON objects are shown as-is.
"""
import json
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, Optional

from rich.text import Text

TIME_STYLE = "color(240)"
MESSAGE_STYLE = "color(252)"
DATA_STYLE = "color(99)"

LEVEL_STYLES = {
    "ERROR": "bold color(196)",
    "WARN": "bold color(208)",
    "INFO": "bold color(46)",
    "DEBUG": "bold color(240)",
}
DEFAULT_LEVEL_STYLE = "bold color(252)"

HUMAN_TIME_FORMAT = "%b %d %H:%M:%S"

RFC3339_RE = re.compile(
    r'^(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?'
    r'(?:([Zz])|([+-])(\d{2}):(\d{2}))$',
    re.ASCII,
)


def parse_timestamp(value: str) -> Optional[datetime]:
    """Parse an RFC3339 timestamp, returning None if it is not one.

    Fractions of any length are accepted and cut to microseconds.
    """
    match = RFC3339_RE.match(value.strip())
    if match is None:
        return None

    year, month, day, hour, minute, second, fraction, utc, sign, off_h, off_m = match.groups()
    microsecond = int((fraction or "")[:6].ljust(6, "0"))
    try:
        if utc:
            tz = timezone.utc
        else:
            offset = timedelta(hours=int(off_h), minutes=int(off_m))
            tz = timezone(-offset if sign == "-" else offset)
        return datetime(int(year), int(month), int(day), int(hour), int(minute), int(second),
                        microsecond, tzinfo=tz)
    except ValueError:
        # Out-of-range fields, e.g. month 13 or an offset of 24h
        return None


def format_value(value: Any) -> str:
    """Render one data value."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "<nil>"
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), sort_keys=True)
    return str(value)


def format_entry(entry: Dict[str, Any]) -> Text:
    """Render a parsed log record."""
    parts = []

    timestamp = entry.get("timestamp")
    if isinstance(timestamp, str) and timestamp:
        parsed = parse_timestamp(timestamp)
        shown = parsed.strftime(HUMAN_TIME_FORMAT) if parsed else timestamp
        parts.append(Text(shown, style=TIME_STYLE))

    level = entry.get("level")
    if isinstance(level, str) and level:
        parts.append(Text(f"[{level}]", style=LEVEL_STYLES.get(level, DEFAULT_LEVEL_STYLE)))

    message = entry.get("message")
    if isinstance(message, str) and message:
        parts.append(Text(message, style=MESSAGE_STYLE))

    data = entry.get("data")
    if isinstance(data, dict) and data:
        pairs = ", ".join(f"{key}={format_value(data[key])}" for key in sorted(data))
        parts.append(Text(f"{{{pairs}}}", style=DATA_STYLE))

    return Text(" ").join(parts)


def format_line(raw_line: str) -> Text:
    """Render one raw log line, falling back to the trimmed line itself."""
    line = raw_line.strip()
    try:
        entry = json.loads(line)
    except ValueError:
        return Text(line)
    if not isinstance(entry, dict):
        return Text(line)
    return format_entry(entry)


def format_lines(lines: Iterable[str]) -> Text:
    """Render a whole log file, one formatted line per non-blank input line."""
    return Text("\n").join(format_line(line) for line in lines if line.strip())
