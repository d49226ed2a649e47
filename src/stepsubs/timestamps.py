"""Elapsed-time formatting for subtitle cues."""

import re

MS_PLACEHOLDER = "#"

_TIMESTAMP_PATTERN = re.compile(r"^(\d{2,}):([0-5]\d):([0-5]\d)[#,.](\d{3})$")


def format_timestamp(elapsed_ms: int) -> str:
    """Format elapsed milliseconds as HH:MM:SS#mmm.

    The '#' placeholder is swapped for the grammar-specific separator when a
    cue is rendered. Hours keep counting past 24.
    """
    if elapsed_ms < 0:
        raise ValueError(f"Elapsed time must be non-negative, got {elapsed_ms}")
    total_seconds, ms = divmod(int(elapsed_ms), 1000)
    total_minutes, s = divmod(total_seconds, 60)
    h, m = divmod(total_minutes, 60)
    return f"{h:02d}:{m:02d}:{s:02d}{MS_PLACEHOLDER}{ms:03d}"


def parse_timestamp(value: str) -> int:
    """Parse HH:MM:SS#mmm (or with ',' / '.') back to milliseconds."""
    match = _TIMESTAMP_PATTERN.match(value.strip())
    if not match:
        raise ValueError(f"Invalid timestamp: {value!r}")
    h, m, s, ms = (int(part) for part in match.groups())
    return h * 3_600_000 + m * 60_000 + s * 1000 + ms


def with_separator(timestamp: str, separator: str) -> str:
    """Replace the millisecond placeholder with a concrete separator."""
    return timestamp.replace(MS_PLACEHOLDER, separator)
