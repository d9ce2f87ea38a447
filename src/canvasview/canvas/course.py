"""Module for representing Canvas courses."""

from dataclasses import dataclass


@dataclass
class Course:
    """Represents a Canvas course the user is enrolled in.

    Attributes:
        id: The Canvas course ID
        name: The full course name (e.g., "Calculus II, Spring 2026")
        course_code: The short course code (e.g., "MATH-UA 122"), if any
    """

    id: int
    name: str
    course_code: str | None = None

    def __str__(self) -> str:
        """String representation of the course."""
        return f"Course(id={self.id}, name={self.name or self.course_code or 'Unknown'})"

    @classmethod
    def from_dict(cls, data: dict) -> "Course":
        """Create a Course object from a Canvas API course record.

        Args:
            data: Dictionary as returned by `GET /courses`

        Returns:
            Course object
        """
        return cls(
            id=data.get("id", 0),
            name=data.get("name") or "",
            course_code=data.get("course_code"),
        )

    def to_dict(self) -> dict:
        """Convert the Course object to a dictionary.

        Returns:
            Dictionary representation of the course
        """
        return {
            "id": self.id,
            "name": self.name,
            "course_code": self.course_code,
        }
