# models/report.py

"""
Represents a score recorded for a student in a subject.

Reports are append-only history: a student may receive any number of reports for the same subject,
and a `Report` cannot be changed once created.

Notes:
- Validation is enforced on construction via `validate_score_input()`.
- Authorship rules (an Active teacher of the subject) are enforced by the `Registry`.
"""

from __future__ import annotations

from typing import Any

MIN_SCORE = 0
MAX_SCORE = 100


class Report:

    def __init__(self, student_id: str, subject_name: str, score: int):
        self._student_id: str = student_id
        self._subject_name: str = subject_name
        self._score: int = Report.validate_score_input(score)

    # === properties ===

    @property
    def student_id(self) -> str:
        return self._student_id

    @property
    def subject_name(self) -> str:
        return self._subject_name

    @property
    def score(self) -> int:
        return self._score

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "student_id": self._student_id,
            "subject_name": self._subject_name,
            "score": self._score,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Report:
        return cls(
            student_id=data["student_id"],
            subject_name=data["subject_name"],
            score=data["score"],
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Report):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash((self._student_id, self._subject_name, self._score))

    def __repr__(self) -> str:
        return f"Report({self._student_id}, {self._subject_name}, {self._score})"

    def __str__(self) -> str:
        return f"REPORT: student id: {self._student_id}, subject: {self._subject_name}, score: {self._score}"

    # === data validators ===

    @staticmethod
    def validate_score_input(score: Any) -> int:
        """
        Validates a `Report` score.

        Accepts integers only (booleans are rejected even though they subclass `int`), and
        requires the value to fall within `MIN_SCORE` and `MAX_SCORE`, both inclusive.

        Args:
            score (Any): The input value to validate.

        Returns:
            The validated score.

        Raises:
            TypeError: If the input is not an integer.
            ValueError: If the input is outside the allowed range.
        """
        if isinstance(score, bool) or not isinstance(score, int):
            raise TypeError("Invalid input. Score must be a whole number.")

        if not MIN_SCORE <= score <= MAX_SCORE:
            raise ValueError(
                f"Invalid input. Score must be between {MIN_SCORE} and {MAX_SCORE}."
            )

        return score
