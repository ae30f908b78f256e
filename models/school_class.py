# models/school_class.py

"""
Represents a class (homeroom group) of students.

A class is keyed by its name and points at the teacher administratively responsible for it.
The homeroom teacher must be Active when assigned, but is not re-validated afterward: a teacher
who is later deactivated stays on record as the homeroom teacher.
"""

from __future__ import annotations


class SchoolClass:

    def __init__(self, name: str, homeroom_teacher: str):
        self._name: str = name
        self._homeroom_teacher: str = homeroom_teacher

    # === properties ===

    @property
    def name(self) -> str:
        return self._name

    @property
    def homeroom_teacher(self) -> str:
        return self._homeroom_teacher

    @homeroom_teacher.setter
    def homeroom_teacher(self, teacher_id: str) -> None:
        self._homeroom_teacher = teacher_id

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "name": self._name,
            "homeroom_teacher": self._homeroom_teacher,
        }

    @classmethod
    def from_dict(cls, data: dict) -> SchoolClass:
        return cls(
            name=data["name"],
            homeroom_teacher=data["homeroom_teacher"],
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"SchoolClass({self._name}, {self._homeroom_teacher})"

    def __str__(self) -> str:
        return f"CLASS: {self._name} - (Homeroom: {self._homeroom_teacher})"
