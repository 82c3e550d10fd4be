"""Formatting utilities for the deltaenv CLI.

Provides deterministic output for tables, JSON, and colored text.
All functions are pure and read-only.

Key design principles:
- Stable ordering: rows keep the order they are given, JSON keys are sorted
- Optional color: all color can be disabled with --no-color
- Non-TTY safe: works when stdout is redirected
"""

import json
import re
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Sequence


class ColorMode(Enum):
    """Color output mode."""

    AUTO = "auto"  # Color if TTY, no color otherwise
    ALWAYS = "always"  # Always use color
    NEVER = "never"  # Never use color


# ANSI color codes
_COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "cyan": "\033[36m",
}

_ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*m")

UNSET = "(unset)"


def _should_color(mode: ColorMode) -> bool:
    """Determine if output should be colored."""
    if mode == ColorMode.NEVER:
        return False
    if mode == ColorMode.ALWAYS:
        return True
    # AUTO: color if stdout is a TTY
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def colorize(text: str, color: str, mode: ColorMode = ColorMode.AUTO) -> str:
    """Apply color to text if color mode allows.

    Args:
        text: Text to colorize.
        color: Color name (green, yellow, cyan, bold, dim).
        mode: Color mode (auto, always, never).

    Returns:
        Colored text if mode allows, otherwise plain text.
    """
    if not _should_color(mode):
        return text

    code = _COLORS.get(color, "")
    if not code:
        return text

    return f"{code}{text}{_COLORS['reset']}"


def format_value(value: Any, color_mode: ColorMode = ColorMode.AUTO) -> str:
    """Format a snapshot value for display; None shows as a dim marker."""
    if value is None:
        return colorize(UNSET, "dim", color_mode)
    if isinstance(value, Path):
        return colorize(str(value), "cyan", color_mode)
    return str(value)


@dataclass
class Column:
    """Table column definition."""

    name: str
    header: str
    width: Optional[int] = None


def render_table(
    rows: Sequence[dict[str, Any]],
    columns: Sequence[Column | str],
    *,
    color_mode: ColorMode = ColorMode.AUTO,
    show_header: bool = True,
) -> str:
    """Render rows as a formatted table.

    Widths are computed on the visible text, so cells may already contain
    color codes. The last column is never padded or truncated.

    Args:
        rows: Sequence of dicts to render, in display order.
        columns: Column definitions (Column objects or field names).
        color_mode: Color output mode for the header.
        show_header: Whether to show column headers.

    Returns:
        Formatted table as string.
    """
    if not rows:
        return ""

    cols = [
        Column(name=c, header=c.upper()) if isinstance(c, str) else c
        for c in columns
    ]

    widths = []
    for col in cols:
        if col.width:
            widths.append(col.width)
        else:
            max_len = len(col.header)
            for row in rows:
                max_len = max(max_len, len(strip_ansi(str(row.get(col.name, "")))))
            widths.append(max_len)

    lines = []

    if show_header:
        header_line = "  ".join(
            _pad(col.header, widths[i], last=i == len(cols) - 1)
            for i, col in enumerate(cols)
        )
        lines.append(colorize(header_line, "bold", color_mode))
        lines.append("  ".join("-" * w for w in widths))

    for row in rows:
        parts = [
            _pad(str(row.get(col.name, "")), widths[i], last=i == len(cols) - 1)
            for i, col in enumerate(cols)
        ]
        lines.append("  ".join(parts))

    return "\n".join(lines)


def _pad(text: str, width: int, last: bool) -> str:
    """Left-align text within width, ignoring ANSI codes."""
    if last:
        return text
    return text + " " * max(0, width - len(strip_ansi(text)))


def render_json(
    obj: Any,
    *,
    indent: int = 2,
    sort_keys: bool = True,
) -> str:
    """Render object as JSON with stable key ordering.

    Args:
        obj: Object to serialize.
        indent: Indentation level (None for compact).
        sort_keys: Whether to sort dictionary keys.

    Returns:
        JSON string with stable ordering.
    """
    return json.dumps(
        obj,
        indent=indent,
        sort_keys=sort_keys,
        ensure_ascii=False,
        default=_json_default,
    )


def _json_default(obj: Any) -> Any:
    """JSON serialization fallback for non-standard types."""
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if isinstance(obj, Enum):
        return obj.value
    return str(obj)


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from text."""
    return _ANSI_PATTERN.sub("", text)
