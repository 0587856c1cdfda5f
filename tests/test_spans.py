"""Pruebas de las reglas de normalización de spans y de la limpieza de texto."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import pytest

from html_table_extractor.cleaners import cell_text, clean_cell_text
from html_table_extractor.config import MAX_COLSPAN, MAX_ROWSPAN
from html_table_extractor.parser import parse_html_document
from html_table_extractor.spans import (
    fit_column_span,
    fit_row_span,
    normalize_colspan,
    normalize_rowspan,
    normalize_span,
    required_width,
)


class TestNormalizeSpan:

    @pytest.mark.parametrize("raw, expected", [
        (None, 1),
        ("", 1),
        ("0", 1),
        ("-2", 1),
        ("abc", 1),
        ("1", 1),
        ("3", 3),
        (" 4 ", 4),
        ("+2", 2),
        ("2px", 2),
        ("2.7", 2),
    ])
    def test_values(self, raw, expected):
        assert normalize_span(raw, 100) == expected

    def test_limits(self):
        assert normalize_colspan("5000") == MAX_COLSPAN
        assert normalize_rowspan("99999") == MAX_ROWSPAN


class TestFitting:

    def test_column_span_free_run(self):
        assert fit_column_span(0, 3, set()) == 3

    def test_column_span_stops_at_occupied(self):
        assert fit_column_span(1, 4, {0, 3}) == 2

    def test_column_span_never_below_one(self):
        assert fit_column_span(2, 1, {3}) == 1

    def test_row_span_clipped_at_end(self):
        assert fit_row_span(3, 10, 5) == 2
        assert fit_row_span(4, 10, 5) == 1
        assert fit_row_span(0, 2, 5) == 2

    def test_required_width_extends_on_overflow(self):
        assert required_width(3, 3, 2) == 5
        assert required_width(5, 0, 2) == 5


class TestCleaners:

    def test_clean_cell_text(self):
        assert clean_cell_text("  a\n\t b \u200bc\xa0 ") == "a b c"
        assert clean_cell_text("") == ""

    def test_inline_markup_does_not_split_words(self):
        _, root = parse_html_document("<p>pre<b>fix</b> <i>word</i></p>")
        assert cell_text(root) == "prefix word"

    def test_scripts_and_comments_are_ignored(self):
        _, root = parse_html_document("<div>a<script>var x = 1;</script><!-- note --><style>p{}</style>b</div>")
        assert cell_text(root) == "ab"

    def test_block_boundaries_separate_words(self):
        _, root = parse_html_document("<div>x<div>y</div>z<p>a</p><p>b</p>c<br>d</div>")
        assert cell_text(root) == "x y z a b c d"

    def test_deep_nesting_does_not_overflow(self):
        _, root = parse_html_document("<div>" + "<b>" * 1500 + "deep" + "</b>" * 1500 + "</div>")
        assert cell_text(root) == "deep"
