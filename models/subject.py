# models/subject.py

"""
Represents a subject taught at the school.

A subject is keyed by its name and holds an ordered list of teacher ids. Every id must belong to a
registered teacher (status is irrelevant), but the list is otherwise stored exactly as given:
order is preserved and duplicates are not removed.
"""

from __future__ import annotations


class Subject:

    def __init__(self, name: str, teachers: list[str] | None = None):
        self._name: str = name
        self._teachers: list[str] = list(teachers or [])

    # === properties ===

    @property
    def name(self) -> str:
        return self._name

    @property
    def teachers(self) -> list[str]:
        return list(self._teachers)

    @teachers.setter
    def teachers(self, teacher_ids: list[str]) -> None:
        self._teachers = list(teacher_ids)

    def is_taught_by(self, teacher_id: str) -> bool:
        return teacher_id in self._teachers

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "name": self._name,
            "teachers": list(self._teachers),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Subject:
        teachers = data["teachers"]
        if not isinstance(teachers, list):
            raise TypeError(f"Subject teachers must be a list, got {type(teachers)}.")

        return cls(
            name=data["name"],
            teachers=teachers,
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Subject({self._name}, {self._teachers})"

    def __str__(self) -> str:
        return f"SUBJECT: {self._name} - (Teachers: {len(self._teachers)})"
