# models/student.py

"""
Represents a student registered with the school.

Stores the student's caller identity, display name, the name of the class they belong to
(an empty string when unassigned), and an Active/Inactive status.

Includes functionality for:
- Validating and normalizing name input
- Serializing to and from JSON-compatible dictionaries
- Mutating individual fields via property access

Referential checks (e.g. that `class_name` names a registered class) belong to the `Registry`,
since a `Student` has no view of the other collections.
"""

from __future__ import annotations

from models.status import PersonStatus


class Student:

    def __init__(
        self,
        id: str,
        name: str,
        class_name: str = "",
        status: PersonStatus = PersonStatus.INACTIVE,
    ):
        self._id: str = id
        self._name: str = Student.validate_name_input(name)
        self._class_name: str = Student.validate_class_name_input(class_name)
        self._status: PersonStatus = PersonStatus(status)

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._name = Student.validate_name_input(name)

    @property
    def class_name(self) -> str:
        return self._class_name

    @class_name.setter
    def class_name(self, class_name: str) -> None:
        self._class_name = Student.validate_class_name_input(class_name)

    @property
    def has_class(self) -> bool:
        return self._class_name != ""

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
            "class_name": self._class_name,
            "status": self._status.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Student:
        return cls(
            id=data["id"],
            name=data["name"],
            class_name=data.get("class_name", ""),
            status=PersonStatus(data["status"]),
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Student({self._id}, {self._name}, {self._class_name}, {self._status.value})"

    def __str__(self) -> str:
        return f"STUDENT: {self._name} - (ID: {self._id})"

    # === data validators ===

    @staticmethod
    def validate_name_input(name: str) -> str:
        """
        Validates and normalizes a Student name.

        Args:
            name: The input name to validate.

        Returns:
            The name with leading and trailing whitespace removed.

        Raises:
            TypeError: If the input is not a string.
            ValueError: If the name is empty after stripping whitespace.
        """
        if not isinstance(name, str):
            raise TypeError("Invalid input. Student name must be a string.")

        name = name.strip()
        if not name:
            raise ValueError("Invalid input. Student name cannot be empty.")
        return name

    @staticmethod
    def validate_class_name_input(class_name: str) -> str:
        if not isinstance(class_name, str):
            raise TypeError("Invalid input. Class name must be a string.")
        return class_name
