"""Module for representing Canvas assignments and their rubrics."""

from dataclasses import dataclass, field
from datetime import datetime


def _parse_timestamp(value: str | None) -> datetime | None:
    """Parse a Canvas ISO-8601 timestamp such as "2026-02-01T04:59:59Z"."""
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


@dataclass
class Rating:
    """One rating tier of a rubric criterion."""

    description: str
    points: float

    @classmethod
    def from_dict(cls, data: dict) -> "Rating":
        return cls(description=data.get("description") or "", points=data.get("points") or 0)

    def to_dict(self) -> dict:
        return {"description": self.description, "points": self.points}


@dataclass
class Criterion:
    """A rubric criterion with its point value and optional rating tiers."""

    description: str
    points: float
    ratings: list[Rating] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "Criterion":
        return cls(
            description=data.get("description") or "",
            points=data.get("points") or 0,
            ratings=[Rating.from_dict(r) for r in data.get("ratings") or []],
        )

    def to_dict(self) -> dict:
        return {
            "description": self.description,
            "points": self.points,
            "ratings": [r.to_dict() for r in self.ratings],
        }


@dataclass
class Assignment:
    """Represents a Canvas assignment.

    Attributes:
        id: The Canvas assignment ID
        name: The assignment name/title
        html_url: Link to the assignment page on Canvas
        due_at: When the assignment is due, if it has a due date
        points_possible: Total points possible; None is distinct from 0
        rubric: Rubric criteria in display order, if a rubric is attached
        description: Assignment instructions as HTML
    """

    id: int
    name: str
    html_url: str = ""
    due_at: datetime | None = None
    points_possible: float | None = None
    rubric: list[Criterion] | None = None
    description: str | None = None

    def __str__(self) -> str:
        """String representation of the assignment."""
        return f"Assignment(id={self.id}, name={self.name})"

    @classmethod
    def from_dict(cls, data: dict) -> "Assignment":
        """Create an Assignment object from a Canvas API assignment record.

        The `rubric` key is only present when the request asked for
        `include[]=rubric`.

        Args:
            data: Dictionary as returned by `GET /courses/:id/assignments`

        Returns:
            Assignment object
        """
        rubric = data.get("rubric")
        if rubric is not None:
            rubric = [Criterion.from_dict(c) for c in rubric]

        return cls(
            id=data.get("id", 0),
            name=data.get("name") or "",
            html_url=data.get("html_url") or "",
            due_at=_parse_timestamp(data.get("due_at")),
            points_possible=data.get("points_possible"),
            rubric=rubric,
            description=data.get("description"),
        )

    def to_dict(self) -> dict:
        """Convert the Assignment object to a dictionary in the Canvas shape.

        Returns:
            Dictionary representation of the assignment
        """
        return {
            "id": self.id,
            "name": self.name,
            "html_url": self.html_url,
            "due_at": self.due_at.isoformat() if self.due_at else None,
            "points_possible": self.points_possible,
            "rubric": [c.to_dict() for c in self.rubric] if self.rubric is not None else None,
            "description": self.description,
        }
