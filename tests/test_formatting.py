#!/usr/bin/env python
"""Tests for the HTML formatting helpers."""

from datetime import datetime, timezone

from bs4 import BeautifulSoup

from canvasview.canvas.assignment import Assignment, Criterion, Rating
from canvasview.formatting import (
    assignment_row,
    escape_html,
    format_due_date,
    format_instructions,
    format_points,
    format_rubric,
    html_to_text,
    truncate_html,
)


class TestEscapeHtml:
    """Test the escape_html helper function."""

    def test_escapes_markup(self):
        assert escape_html("<b>A & B</b>") == "&lt;b&gt;A &amp; B&lt;/b&gt;"

    def test_none_is_empty(self):
        assert escape_html(None) == ""

    def test_quotes_untouched(self):
        """Quotes are left alone, as with element text content."""
        assert escape_html('say "hi"') == 'say "hi"'


class TestTruncateHtml:
    """Test the truncate_html helper function."""

    def test_short_html_unchanged(self):
        markup = "<p>Read <em>chapter 3</em> &amp; answer.</p>"
        assert truncate_html(markup, 200) == markup

    def test_exact_limit_unchanged(self):
        """Markup does not count toward the limit, only visible text."""
        markup = "<div><strong>" + "x" * 200 + "</strong></div>"
        assert truncate_html(markup, 200) == markup

    def test_long_html_is_collapsed(self):
        markup = "<p>" + "a" * 150 + "</p><p>" + "b" * 150 + "</p>"
        result = truncate_html(markup, 200)
        soup = BeautifulSoup(result, "html.parser")
        summary = soup.find("summary").get_text()
        assert summary == html_to_text(markup)[:200] + "..."
        assert soup.find("div", class_="full-instructions").decode_contents() == markup
        assert result.startswith("<details>")

    def test_entities_not_double_escaped(self):
        markup = "<p>" + "&amp;" * 250 + "</p>"
        result = truncate_html(markup, 200)
        assert "&amp;amp;" not in result
        summary = BeautifulSoup(result, "html.parser").find("summary").get_text()
        assert summary == "&" * 200 + "..."

    def test_never_cuts_inside_a_tag(self):
        markup = '<p><a href="https://example.com/a-very-long-link">' + "z" * 300 + "</a></p>"
        result = truncate_html(markup, 10)
        assert "<summary>zzzzzzzzzz...</summary>" in result


class TestFormatRubric:
    """Test the format_rubric helper function."""

    def test_none_rubric(self):
        assert format_rubric(None) == "No rubric"

    def test_empty_rubric(self):
        assert format_rubric([]) == "No rubric"

    def test_one_item_per_criterion_in_order(self):
        rubric = [Criterion("First", 5), Criterion("Second", 3), Criterion("Third", 2)]
        soup = BeautifulSoup(format_rubric(rubric), "html.parser")
        items = soup.find("ul", class_="rubric-list").find_all("li")
        assert [li.strong.get_text() for li in items] == ["First", "Second", "Third"]

    def test_criterion_with_ratings(self):
        rubric = [Criterion("Thesis", 5.0, [Rating("Clear", 5.0), Rating("Weak", 2.5)])]
        assert format_rubric(rubric) == (
            '<ul class="rubric-list"><li><strong>Thesis</strong> (5pts)'
            "<br><small>Clear (5pts), Weak (2.5pts)</small></li></ul>"
        )

    def test_criterion_without_ratings_has_no_small_line(self):
        html = format_rubric([Criterion("Effort", 2)])
        assert "<small>" not in html

    def test_descriptions_escaped(self):
        rubric = [Criterion("<script>", 1, [Rating("A & B", 1)])]
        html = format_rubric(rubric)
        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert "A &amp; B (1pts)" in html


class TestAssignmentRow:
    """Test the per-column formatting of assignment rows."""

    def test_no_due_date(self):
        assert format_due_date(Assignment(id=1, name="A")) == "No due date"

    def test_due_date_is_localized(self):
        assignment = Assignment(
            id=1, name="A", due_at=datetime(2026, 6, 15, 12, 0, tzinfo=timezone.utc)
        )
        text = format_due_date(assignment)
        assert text != "No due date"
        assert "2026" in text

    def test_zero_points(self):
        assert format_points(Assignment(id=1, name="A", points_possible=0)) == "0"

    def test_null_points(self):
        assert format_points(Assignment(id=1, name="A", points_possible=None)) == "N/A"

    def test_float_points(self):
        assert format_points(Assignment(id=1, name="A", points_possible=10.0)) == "10"
        assert format_points(Assignment(id=1, name="A", points_possible=2.5)) == "2.5"

    def test_no_instructions(self):
        assert format_instructions(Assignment(id=1, name="A")) == "No instructions"
        assert format_instructions(Assignment(id=1, name="A", description="")) == "No instructions"

    def test_long_instructions_truncated(self):
        assignment = Assignment(id=1, name="A", description="<p>" + "w" * 500 + "</p>")
        assert format_instructions(assignment).startswith("<details>")

    def test_title_link(self):
        row = assignment_row(
            Assignment(id=1, name="Lab <1>", html_url="https://canvas.example.edu/a?x=1&y=2")
        )
        assert row.title == (
            '<a href="https://canvas.example.edu/a?x=1&amp;y=2" target="_blank">'
            "Lab &lt;1&gt;</a>"
        )
        assert row.rubric == "No rubric"
