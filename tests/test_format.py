"""Tests for CLI formatting helpers."""

import json
from pathlib import Path

from deltaenv.format import (
    ColorMode,
    Column,
    colorize,
    format_value,
    render_json,
    render_table,
    strip_ansi,
)
from deltaenv.pager import PagerSource


ROWS = [
    {"field": "features", "value": "side-by-side"},
    {"field": "pagers.fallback", "value": "less"},
]

COLUMNS = [
    Column(name="field", header="FIELD"),
    Column(name="value", header="VALUE"),
]


class TestColorize:
    """Tests for colorize."""

    def test_never(self):
        assert colorize("x", "green", ColorMode.NEVER) == "x"

    def test_always(self):
        assert colorize("x", "green", ColorMode.ALWAYS) == "\033[32mx\033[0m"

    def test_unknown_color(self):
        assert colorize("x", "plaid", ColorMode.ALWAYS) == "x"

    def test_strip_ansi(self):
        assert strip_ansi(colorize("x", "bold", ColorMode.ALWAYS)) == "x"


class TestFormatValue:
    """Tests for format_value."""

    def test_none(self):
        assert format_value(None, ColorMode.NEVER) == "(unset)"

    def test_path(self):
        assert format_value(Path("/work"), ColorMode.NEVER) == str(Path("/work"))

    def test_string(self):
        assert format_value("abc", ColorMode.ALWAYS) == "abc"


class TestRenderTable:
    """Tests for render_table."""

    def test_layout(self):
        output = render_table(ROWS, COLUMNS, color_mode=ColorMode.NEVER)

        assert output.splitlines() == [
            "FIELD            VALUE",
            "---------------  ------------",
            "features         side-by-side",
            "pagers.fallback  less",
        ]

    def test_colored_cells_align(self):
        rows = [
            {"field": colorize("a", "cyan", ColorMode.ALWAYS), "value": "1"},
            {"field": "bbb", "value": "2"},
        ]

        output = strip_ansi(render_table(rows, COLUMNS, color_mode=ColorMode.NEVER))

        assert output.splitlines()[2] == "a      1"

    def test_empty(self):
        assert render_table([], COLUMNS) == ""

    def test_string_columns(self):
        output = render_table(ROWS, ["field"], color_mode=ColorMode.NEVER)
        assert output.splitlines()[0] == "FIELD"


class TestRenderJson:
    """Tests for render_json."""

    def test_sorted_keys(self):
        assert render_json({"b": 1, "a": 2}, indent=None) == '{"a": 2, "b": 1}'

    def test_enum_and_path(self):
        data = json.loads(render_json({"s": PagerSource.PAGER, "p": Path("x")}))
        assert data == {"s": "PAGER", "p": "x"}

    def test_deterministic(self):
        assert render_json(ROWS) == render_json(ROWS)
