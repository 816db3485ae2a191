"""Unit tests for the markup-shape helpers (Next marker, Next target, inputs)."""

from nav_tracker.markup import (
    InputField,
    find_next_target,
    form_inputs,
    has_next_marker,
    iter_row_cells,
)

NEXT_TARGET = "ctl00$ContentPlaceHolder1$gvNAV$ctl13$lnkNext"


class TestNextMarker:

    def test_marker_present(self, make_page):
        assert has_next_marker(make_page(next_target=NEXT_TARGET)) is True

    def test_marker_absent(self, make_page):
        assert has_next_marker(make_page()) is False

    def test_prev_link_is_not_next(self):
        assert has_next_marker('<a href="#">Prev</a>') is False


class TestFindNextTarget:
    """Priority patterns first, then the fallback window."""

    def test_plain_quotes(self, make_page):
        assert find_next_target(make_page(next_target=NEXT_TARGET)) == NEXT_TARGET

    def test_html_escaped_quotes(self, make_page):
        html = make_page(next_target="ctl00$gv$lnkNext", escaped_quotes=True)
        assert find_next_target(html) == "ctl00$gv$lnkNext"

    def test_anchor_with_extra_attributes(self):
        html = (
            "<a class=\"pager\" href=\"javascript:__doPostBack('gv$next','')\" "
            'title="next page">Next</a>'
        )
        assert find_next_target(html) == "gv$next"

    def test_case_insensitive_label(self):
        html = "<a href=\"javascript:__doPostBack('gv$next','')\">NEXT</a>"
        assert find_next_target(html) == "gv$next"

    def test_first_pattern_wins_over_prev_link(self):
        html = (
            "<a href=\"javascript:__doPostBack('gv$prev','')\">Prev</a> "
            "<a href=\"javascript:__doPostBack('gv$next','')\">Next</a>"
        )
        assert find_next_target(html) == "gv$next"

    def test_postback_with_argument_uses_anchor_pattern(self):
        # Non-empty event argument: only the generic <a ...>Next</a> pattern fits.
        html = "<a href=\"javascript:__doPostBack('gv','Page$Next')\">Next</a>"
        assert find_next_target(html) == "gv"

    def test_fallback_window_before_marker(self):
        html = (
            "<span onclick=\"__doPostBack('gv$pager','')\">"
            "<b>Next</b></span>"
        )
        assert find_next_target(html) == "gv$pager"

    def test_fallback_ignores_postback_far_before_marker(self):
        html = (
            "<a onclick=\"__doPostBack('far$away','')\">x</a>"
            + " " * 500
            + "<b>Next</b>"
        )
        assert find_next_target(html) is None

    def test_no_marker_no_target(self, make_page):
        assert find_next_target(make_page()) is None


class TestFormInputs:

    def test_attribute_order_does_not_matter(self):
        html = (
            '<input type="hidden" name="a" value="1" />'
            '<input name="b" type="hidden" value="2" />'
            '<input value="3" name="c" type="HIDDEN" />'
        )
        assert form_inputs(html) == [
            InputField(name="a", value="1", hidden=True),
            InputField(name="b", value="2", hidden=True),
            InputField(name="c", value="3", hidden=True),
        ]

    def test_visible_inputs_are_flagged(self):
        fields = form_inputs('<input type="text" name="q" value="x" />')
        assert fields == [InputField(name="q", value="x", hidden=False)]

    def test_inputs_without_name_or_value_are_skipped(self):
        html = (
            '<input type="hidden" value="orphan" />'
            '<input type="hidden" name="novalue" />'
        )
        assert form_inputs(html) == []

    def test_empty_value_is_kept(self):
        assert form_inputs('<input type="hidden" name="e" value="" />') == [
            InputField(name="e", value="", hidden=True)
        ]

    def test_entities_are_decoded(self):
        fields = form_inputs('<input type="hidden" name="t" value="a&amp;b" />')
        assert fields[0].value == "a&b"


class TestIterRowCells:

    def test_raw_cells(self, make_page):
        html = make_page(rows=[("01-01-2024", "FundA", "Growth", "1.5")])
        assert list(iter_row_cells(html)) == [("01-01-2024", "FundA", "Growth", "1.5")]
