"""HTML formatting helpers for the course and assignment views."""

import html
from dataclasses import dataclass

from bs4 import BeautifulSoup

from canvasview.canvas.assignment import Assignment, Criterion

INSTRUCTIONS_MAX_LENGTH = 200


def escape_html(text: str | None) -> str:
    """Escape text for use as HTML element content. None becomes ""."""
    if not text:
        return ""
    return html.escape(text, quote=False)


def html_to_text(markup: str) -> str:
    """Return the visible text of an HTML fragment, with entities decoded."""
    return BeautifulSoup(markup, "html.parser").get_text()


def format_number(value: float) -> str:
    """Format a point value the way Canvas shows it: 10.0 -> "10", 2.5 -> "2.5"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_due_date(assignment: Assignment) -> str:
    """Format the due date in local time, or "No due date"."""
    if assignment.due_at is None:
        return "No due date"
    return assignment.due_at.astimezone().strftime("%c")


def format_points(assignment: Assignment) -> str:
    """Format points possible; zero is a real value, None is "N/A"."""
    if assignment.points_possible is None:
        return "N/A"
    return format_number(assignment.points_possible)


def format_rubric(rubric: list[Criterion] | None) -> str:
    """Render a rubric as an HTML list, one item per criterion.

    Each item shows the criterion description in bold with its points, and
    underneath, in small type, the rating tiers as "description (Npts)".
    """
    if not rubric:
        return "No rubric"

    items = []
    for criterion in rubric:
        ratings = ", ".join(
            f"{r.description} ({format_number(r.points)}pts)" for r in criterion.ratings
        )
        item = (
            f"<li><strong>{escape_html(criterion.description)}</strong> "
            f"({format_number(criterion.points)}pts)"
        )
        if ratings:
            item += f"<br><small>{escape_html(ratings)}</small>"
        items.append(item + "</li>")

    return f'<ul class="rubric-list">{"".join(items)}</ul>'


def truncate_html(markup: str, max_length: int) -> str:
    """Collapse long HTML behind a summary of its first `max_length` characters.

    Length is measured on the visible text, not the markup. Short input is
    returned unchanged. Long input becomes a <details> element whose summary
    is the escaped start of the text and whose body is the original HTML.
    """
    text = html_to_text(markup)
    if len(text) <= max_length:
        return markup
    return (
        f"<details><summary>{escape_html(text[:max_length])}...</summary>"
        f'<div class="full-instructions">{markup}</div></details>'
    )


def format_instructions(assignment: Assignment) -> str:
    if not assignment.description:
        return "No instructions"
    return truncate_html(assignment.description, INSTRUCTIONS_MAX_LENGTH)


@dataclass
class AssignmentRow:
    """The five HTML cells of one assignment table row."""

    title: str
    due_date: str
    points: str
    rubric: str
    instructions: str


def assignment_row(assignment: Assignment) -> AssignmentRow:
    """Compute the table cells for an assignment."""
    url = html.escape(assignment.html_url, quote=True)
    return AssignmentRow(
        title=f'<a href="{url}" target="_blank">{escape_html(assignment.name)}</a>',
        due_date=format_due_date(assignment),
        points=format_points(assignment),
        rubric=format_rubric(assignment.rubric),
        instructions=format_instructions(assignment),
    )
