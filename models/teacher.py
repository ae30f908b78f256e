# models/teacher.py

"""
Represents a teacher registered with the school.

A teacher is keyed by its caller identity (`id`) and carries a display name and an
Active/Inactive status. Only Active teachers may serve as homeroom teachers or record reports,
while subject membership only requires that the teacher is registered.

Teachers are never deleted; resignation is modeled by deactivation.
"""

from __future__ import annotations

from models.status import PersonStatus


class Teacher:

    def __init__(
        self,
        id: str,
        name: str,
        status: PersonStatus = PersonStatus.INACTIVE,
    ):
        self._id: str = id
        self._name: str = name
        self._status: PersonStatus = PersonStatus(status)

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def status(self) -> PersonStatus:
        return self._status

    @property
    def is_active(self) -> bool:
        return self._status is PersonStatus.ACTIVE

    def activate(self) -> None:
        self._status = PersonStatus.ACTIVE

    def deactivate(self) -> None:
        self._status = PersonStatus.INACTIVE

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
            "status": self._status.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Teacher:
        return cls(
            id=data["id"],
            name=data["name"],
            status=PersonStatus(data["status"]),
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Teacher({self._id}, {self._name}, {self._status.value})"

    def __str__(self) -> str:
        return f"TEACHER: {self._name} - (ID: {self._id})"
