# models/registry.py

"""
The Registry model is the central data object of the program and the single source of truth for the school.

Teachers, Classes, Subjects, and Students are stored in insertion-ordered dictionaries keyed by id or name,
and Reports in an append-only list. A single `headmaster` identity holds elevated privileges.

Every mutating operation takes the verified caller identity as its first argument, runs all of its
precondition checks before writing anything, and returns a structured `Response`. A rejected operation
leaves the registry exactly as it was.

Provides functions for creating, loading, and saving a Registry as JSON, for looking up and listing records,
and for each business action (registering people, organizing classes and subjects, recording reports).
"""

from __future__ import annotations

import copy
import datetime
import json
import logging
import os
import threading
from typing import Any, Callable, Iterable

from core.response import ErrorCode, RegistryError, Response
from models.report import Report
from models.school_class import SchoolClass
from models.status import PersonStatus
from models.student import Student
from models.subject import Subject
from models.teacher import Teacher
from models.types import RecordType

logger = logging.getLogger(__name__)


class Registry:

    def __init__(
        self,
        headmaster: str,
        save_dir_path: str | None = None,
        *,
        legacy_homeroom_guard: bool = False,
    ):
        if not isinstance(headmaster, str) or not headmaster.strip():
            raise ValueError("A registry requires a non-empty headmaster identity.")

        self._headmaster: str = headmaster
        self._metadata: dict[str, Any] = {
            "legacy_homeroom_guard": legacy_homeroom_guard,
            "created_at": datetime.datetime.now().isoformat(),
        }
        self._teachers: dict[str, Teacher] = {}
        self._classes: dict[str, SchoolClass] = {}
        self._subjects: dict[str, Subject] = {}
        self._students: dict[str, Student] = {}
        self._reports: list[Report] = []
        self._dir_path: str | None = save_dir_path
        self._unsaved_changes: bool = False
        # guards the headmaster pointer and all five collections
        self._lock = threading.RLock()

    # === properties ===

    @property
    def headmaster(self) -> str:
        return self._headmaster

    # --- metadata fields ---

    @property
    def legacy_homeroom_guard(self) -> bool:
        return self._metadata["legacy_homeroom_guard"]

    @property
    def created_at(self) -> str:
        return self._metadata["created_at"]

    # --- status markers ---

    @property
    def has_unsaved_changes(self) -> bool:
        return self._unsaved_changes

    # === public classmethods ===

    @classmethod
    def create(
        cls,
        headmaster: str,
        save_dir_path: str,
        *,
        legacy_homeroom_guard: bool = False,
    ) -> Response:
        """
        Creates, saves, and returns a new `Registry` instance.

        Args:
            headmaster (str): The identity of the initial headmaster.
            save_dir_path (str): The path for writing and reading serialized data.
            legacy_homeroom_guard (bool): Selects the original `change_homeroom_teacher` guard.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the `Registry` object was created and saved successfully.
                    - False if invalid data is passed or the save fails.
                - detail (str | None):
                    - On failure, a human-readable description of the error.
                    - On success, None.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_FIELD_VALUE` if ValueError raised.
                    - `ErrorCode.INTERNAL_ERROR` if the save fails or for unexpected errors.
                - status_code (int | None):
                    - 200 on success
                    - 400 or 500 on failure
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "registry" (Registry): The newly created `Registry` object.
                    - On failure:
                        - None

        Notes:
            - This method writes to disk with `registry.save()` before returning.
        """
        try:
            registry = cls(
                headmaster,
                save_dir_path,
                legacy_homeroom_guard=legacy_homeroom_guard,
            )

        except ValueError as e:
            return Response.fail(
                detail=f"Invalid field value: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        except Exception as e:
            return Response.from_exception(e)

        save_response = registry.save(save_dir_path)

        if not save_response.success:
            return save_response

        return Response.succeed(
            data={
                "registry": registry,
            },
        )

    @classmethod
    def load(cls, save_dir_path: str) -> Response:
        """
        Loads previously serialized data from disk and returns a `Registry` instance.

        Args:
            save_dir_path (str): The directory path where the registry data is stored.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the load operation was successful and every record passed integrity checks.
                    - False for JSON deserialization issues, invalid input, missing fields, or broken invariants.
                - detail (str | None):
                    - On failure, a human-readable description of the error.
                    - On success, None.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_INPUT` if JSONDecodeError raised.
                    - `ErrorCode.INVALID_FIELD_VALUE` if ValueError raised.
                    - `ErrorCode.MISSING_REQUIRED_FIELD` if KeyError or TypeError raised.
                    - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
                - status_code (int | None):
                    - 200 on success
                    - 400 or 500 on failure
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "registry" (Registry): The loaded `Registry` object.
                    - On failure:
                        - None

        Notes:
            - Collections are imported in dependency order: teachers, classes, subjects, students, reports.
            - The caller is responsible for ensuring that `save_dir_path` exists and is readable.
        """

        def read_json(filename: str) -> list[Any] | dict[str, Any]:
            with open(os.path.join(save_dir_path, filename), "r") as f:
                return json.load(f)

        def load_and_import(
            filename: str, import_fn: Callable[[list[Any]], None]
        ) -> None:
            data = read_json(filename)
            if not isinstance(data, list):
                raise ValueError(f"Expected {filename} to contain a list.")
            else:
                import_fn(data)

        try:
            metadata = read_json("metadata.json")
            if not isinstance(metadata, dict):
                raise ValueError("metadata.json must contain a dictionary.")

            legacy_homeroom_guard = metadata.get("legacy_homeroom_guard", False)
            if not isinstance(legacy_homeroom_guard, bool):
                raise ValueError(
                    f"legacy_homeroom_guard must be true or false, got {legacy_homeroom_guard!r}."
                )

            registry = cls(
                metadata["headmaster"],
                save_dir_path,
                legacy_homeroom_guard=legacy_homeroom_guard,
            )
            if "created_at" in metadata:
                registry._metadata["created_at"] = metadata["created_at"]

            load_and_import("teachers.json", registry.import_teachers)
            load_and_import("classes.json", registry.import_classes)
            load_and_import("subjects.json", registry.import_subjects)
            load_and_import("students.json", registry.import_students)
            load_and_import("reports.json", registry.import_reports)

        except json.JSONDecodeError as e:
            return Response.fail(
                detail=f"Failed to parse JSON data: {e}",
                error=ErrorCode.INVALID_INPUT,
            )

        except ValueError as e:
            return Response.fail(
                detail=f"Invalid field value: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        except (KeyError, TypeError) as e:
            return Response.fail(
                detail=f"Missing required field: {e}",
                error=ErrorCode.MISSING_REQUIRED_FIELD,
            )

        except Exception as e:
            logger.error(
                "Failed to load registry from %s", save_dir_path, exc_info=True
            )
            return Response.from_exception(e)

        else:
            logger.info(
                "Loaded registry from %s (%d teachers, %d students, %d reports)",
                save_dir_path,
                len(registry._teachers),
                len(registry._students),
                len(registry._reports),
            )
            return Response.succeed(
                data={
                    "registry": registry,
                },
            )

    # === persistence and import ===

    def save(self, save_dir_path: str | None = None) -> Response:
        """
        Serializes and saves registry data to disk in JSON format.

        Args:
            save_dir_path (str):
                - The directory path where the registry data will be saved.
                - If no argument is provided, the directory the registry was created or loaded with is used.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the registry data was saved successfully to disk.
                    - False for JSON serialization issues, a missing save path, or filesystem errors.
                - detail (str | None):
                    - On success:
                        - "Registry successfully saved to disk."
                    - On failure:
                        - Description of the error if the save failed.
                - error (ErrorCode | str | None):
                    - `ErrorCode.MISSING_REQUIRED_FIELD` if no save path is known.
                    - `ErrorCode.INVALID_FIELD_VALUE` if ValueError or TypeError raised.
                    - `ErrorCode.INTERNAL_ERROR` if OSError raised or for unexpected errors.
                - status_code (int | None):
                    - 200 on success
                    - 400 or 500 on failure
                - data (dict | None):
                    - Always None, this method does not return any payload.

        Notes:
            - Each collection is written as a list in creation order.
            - The caller is responsible for ensuring that `save_dir_path` exists if passed as an argument.
        """
        target_dir = save_dir_path if save_dir_path is not None else self._dir_path

        if target_dir is None:
            return Response.fail(
                detail="No save directory has been set for this registry.",
                error=ErrorCode.MISSING_REQUIRED_FIELD,
            )

        def write_json(filename: str, data: list | dict) -> None:
            # intentionally overwrites existing data
            with open(os.path.join(target_dir, filename), "w") as f:
                json.dump(data, f, indent=2)

        with self._lock:
            try:
                write_json(
                    "metadata.json",
                    {"headmaster": self._headmaster, **self._metadata},
                )
                write_json(
                    "teachers.json", [t.to_dict() for t in self._teachers.values()]
                )
                write_json(
                    "classes.json", [c.to_dict() for c in self._classes.values()]
                )
                write_json(
                    "subjects.json", [s.to_dict() for s in self._subjects.values()]
                )
                write_json(
                    "students.json", [s.to_dict() for s in self._students.values()]
                )
                write_json("reports.json", [r.to_dict() for r in self._reports])

            except (ValueError, TypeError) as e:
                return Response.fail(
                    detail=f"Object not JSON serializable: {e}",
                    error=ErrorCode.INVALID_FIELD_VALUE,
                )

            except OSError as e:
                logger.error("Failed to write registry to %s: %s", target_dir, e)
                return Response.fail(
                    detail=f"Failed to write data to disk: {e}",
                    error=ErrorCode.INTERNAL_ERROR,
                )

            except Exception as e:
                logger.error("Unexpected error saving registry", exc_info=True)
                return Response.from_exception(e)

            else:
                self._unsaved_changes = False
                logger.info("Saved registry to %s", target_dir)

                return Response.succeed(detail="Registry successfully saved to disk.")

    def _import_records(
        self,
        data: list[dict[str, Any]],
        from_dict_fn: Callable[[dict[str, Any]], RecordType],
        restore_fn: Callable[[RecordType], Response],
        record_name: str,
    ) -> None:
        """
        Deserializes and restores a list of records into the registry, failing fast on error.

        Args:
            data (list[dict[str, Any]]): A list of dictionaries representing serialized records.
            from_dict_fn (Callable[[dict[str, Any]], RecordType]): Deserializes a record dictionary.
            restore_fn (Callable[[RecordType], Response]): Inserts the record after integrity checks.
            record_name (str): A human-readable name used in error messages (e.g., "teacher", "report").

        Raises:
            - ValueError:
                - If a record dictionary is malformed or fails an integrity check.
            - KeyError:
                - If a record dictionary is missing a required key.
            - RuntimeError:
                - If an internal error occurs during the restore.

        Notes:
            - This method fails fast: if any record fails deserialization or insertion, the import is aborted.
        """
        for record_dict in data:
            try:
                record = from_dict_fn(record_dict)
            except (ValueError, TypeError) as e:
                raise ValueError(
                    f"Failed to deserialize {record_name}: {record_dict} - {e}"
                )

            response = restore_fn(record)

            if not response.success:
                message = (
                    f"Failed to import {record_name}: {record_dict} - {response.detail}"
                )
                match response.error:
                    case ErrorCode.INTERNAL_ERROR:
                        raise RuntimeError(message)
                    case _:
                        raise ValueError(message)

    def import_teachers(self, teacher_data: list) -> None:
        self._import_records(
            data=teacher_data,
            from_dict_fn=Teacher.from_dict,
            restore_fn=self._restore_teacher,
            record_name="teacher",
        )

    def import_classes(self, class_data: list) -> None:
        self._import_records(
            data=class_data,
            from_dict_fn=SchoolClass.from_dict,
            restore_fn=self._restore_class,
            record_name="class",
        )

    def import_subjects(self, subject_data: list) -> None:
        self._import_records(
            data=subject_data,
            from_dict_fn=Subject.from_dict,
            restore_fn=self._restore_subject,
            record_name="subject",
        )

    def import_students(self, student_data: list) -> None:
        self._import_records(
            data=student_data,
            from_dict_fn=Student.from_dict,
            restore_fn=self._restore_student,
            record_name="student",
        )

    def import_reports(self, report_data: list) -> None:
        self._import_records(
            data=report_data,
            from_dict_fn=Report.from_dict,
            restore_fn=self._restore_report,
            record_name="report",
        )

    # --- integrity-checked restores ---

    # ---
    # Restores re-check the keyspace and referential invariants that the business operations
    # enforce, but not the authorization or status rules, which only apply at the time of the
    # original mutation.
    # ---

    def _restore_teacher(self, teacher: Teacher) -> Response:
        try:
            self.require_unique_teacher_id(teacher.id)
            self._teachers[teacher.id] = teacher
        except RegistryError as e:
            return e.to_response()
        return Response.succeed(data={"record": teacher})

    def _restore_class(self, school_class: SchoolClass) -> Response:
        try:
            self.require_unique_class_name(school_class.name)
            self.require_teacher(school_class.homeroom_teacher)
            self._classes[school_class.name] = school_class
        except RegistryError as e:
            return e.to_response()
        return Response.succeed(data={"record": school_class})

    def _restore_subject(self, subject: Subject) -> Response:
        try:
            self.require_unique_subject_name(subject.name)
            self.require_registered_teachers(subject.teachers)
            self._subjects[subject.name] = subject
        except RegistryError as e:
            return e.to_response()
        return Response.succeed(data={"record": subject})

    def _restore_student(self, student: Student) -> Response:
        try:
            self.require_unique_student_id(student.id)
            if student.has_class:
                self.require_class(student.class_name)
            self._students[student.id] = student
        except RegistryError as e:
            return e.to_response()
        return Response.succeed(data={"record": student})

    def _restore_report(self, report: Report) -> Response:
        try:
            self.require_student(report.student_id)
            self.require_subject(report.subject_name)
            self._reports.append(report)
        except RegistryError as e:
            return e.to_response()
        return Response.succeed(data={"record": report})

    # === data accessors ===

    def _snapshot(self, records: Any) -> Response:
        """
        Returns deep copies of the given records in creation order, wrapped in a `Response`.

        Notes:
            - The lock is held only while copying; callers iterate their own snapshot.
            - The "records" key is always included on success, even if the result is empty.
        """
        with self._lock:
            try:
                snapshot = copy.deepcopy(list(records))

            except Exception as e:
                logger.error("Failed to snapshot records", exc_info=True)
                return Response.from_exception(e)

        return Response.succeed(
            data={
                "records": snapshot,
            }
        )

    def list_teachers(self) -> Response:
        return self._snapshot(self._teachers.values())

    def list_classes(self) -> Response:
        return self._snapshot(self._classes.values())

    def list_subjects(self) -> Response:
        return self._snapshot(self._subjects.values())

    def list_students(self) -> Response:
        return self._snapshot(self._students.values())

    def list_reports(self) -> Response:
        return self._snapshot(self._reports)

    # --- find record by key ---

    def find_record_by_key(
        self,
        key: str,
        dictionary: dict[str, RecordType],
    ) -> Response:
        """
        Finds a record by its id or name within a given dictionary.

        Args:
            key (str): The id or name of the record.
            dictionary (dict[str, RecordType]): The dictionary of records to search.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the record was found.
                    - False if no match is found.
                - error (ErrorCode | str | None):
                    - `ErrorCode.NOT_FOUND` if no match is found.
                - status_code (int | None):
                    - 200 on success
                    - 404 if not found
                - data (dict): Payload with the following keys:
                    - On success:
                        - "record" (RecordType): A copy of the matched record.

        Notes:
            - This method is read-only and does not raise.
        """
        with self._lock:
            record = dictionary.get(key)

            if record is None:
                return Response.fail(
                    detail=f"No matching record found for {key!r}.",
                    error=ErrorCode.NOT_FOUND,
                )

            return Response.succeed(
                data={
                    "record": copy.deepcopy(record),
                },
            )

    def find_teacher_by_id(self, id: str) -> Response:
        return self.find_record_by_key(id, self._teachers)

    def find_class_by_name(self, name: str) -> Response:
        return self.find_record_by_key(name, self._classes)

    def find_subject_by_name(self, name: str) -> Response:
        return self.find_record_by_key(name, self._subjects)

    def find_student_by_id(self, id: str) -> Response:
        return self.find_record_by_key(id, self._students)

    def get_reports_for_student(self, student_id: str) -> Response:
        """
        Returns copies of every report recorded for a student, in the order they were recorded.

        Returns:
            Response: On success, "records" (list[Report]), possibly empty. `ErrorCode.NOT_FOUND`
            if the student is not registered.
        """
        with self._lock:
            if student_id not in self._students:
                return Response.fail(
                    detail=f"No student is registered with id {student_id!r}.",
                    error=ErrorCode.NOT_FOUND,
                )

            return self._snapshot(
                r for r in self._reports if r.student_id == student_id
            )

    def record_counts(self) -> dict[str, int]:
        """
        Returns the number of records in each collection, keyed by collection name.

        Nothing is copied, so this is the cheap way to size the registry.
        """
        with self._lock:
            return {
                "teachers": len(self._teachers),
                "classes": len(self._classes),
                "subjects": len(self._subjects),
                "students": len(self._students),
                "reports": len(self._reports),
            }

    def role_of(self, id: str) -> str | None:
        """
        Returns "headmaster", "teacher", "student", or None for an unknown identity.

        The headmaster role takes precedence, since the headmaster may also be registered as a teacher.
        """
        with self._lock:
            if id == self._headmaster:
                return "headmaster"
            if id in self._teachers:
                return "teacher"
            if id in self._students:
                return "student"
            return None

    # === data manipulators ===

    def _mark_dirty(self) -> None:
        self._unsaved_changes = True

    def _reject(self, operation: str, caller: str, error: RegistryError) -> Response:
        logger.warning(
            "%s rejected for caller %r: [%s] %s",
            operation,
            caller,
            error.error.value,
            error.detail,
        )
        return error.to_response()

    def _fail_unexpected(self, operation: str, exc: Exception) -> Response:
        logger.error("%s failed unexpectedly", operation, exc_info=True)
        return Response.from_exception(exc)

    # --- identity & role operations ---

    def change_headmaster(self, caller: str, new_id: str) -> Response:
        """
        Hands headmaster privileges to a new identity.

        Args:
            caller (str): The verified identity invoking the operation.
            new_id (str): The identity that becomes headmaster.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the headmaster was replaced.
                    - False if the caller is not the headmaster or the target is disallowed.
                - detail (str | None):
                    - On failure, a human-readable description of the error.
                    - On success, a confirmation message naming the new headmaster.
                - error (ErrorCode | str | None):
                    - `ErrorCode.UNAUTHORIZED` if the caller is not the headmaster.
                    - `ErrorCode.INVALID_TARGET` if `new_id` is empty or a registered student.
                    - `ErrorCode.NO_OP` if `new_id` is already the headmaster.
                - status_code (int | None):
                    - 200 on success
                    - 403, 409, or 400 on failure
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "previous" (str): The outgoing headmaster.
                        - "headmaster" (str): The incoming headmaster.

        Notes:
            - This method mutates `Registry` state and calls `_mark_dirty()` if successful.
            - A teacher may become headmaster; a student may not.
        """
        with self._lock:
            try:
                self.require_headmaster(caller)

                if not isinstance(new_id, str) or not new_id:
                    raise RegistryError(
                        ErrorCode.INVALID_TARGET,
                        "The new headmaster identity cannot be empty.",
                    )

                if new_id in self._students:
                    raise RegistryError(
                        ErrorCode.INVALID_TARGET,
                        f"{new_id!r} is a registered student and cannot become headmaster.",
                    )

                if new_id == self._headmaster:
                    raise RegistryError(
                        ErrorCode.NO_OP,
                        f"{new_id!r} is already the headmaster.",
                    )

            except RegistryError as e:
                return self._reject("change_headmaster", caller, e)

            except Exception as e:
                return self._fail_unexpected("change_headmaster", e)

            else:
                previous = self._headmaster
                self._headmaster = new_id
                self._mark_dirty()
                logger.info("Headmaster changed from %r to %r", previous, new_id)

                return Response.succeed(
                    detail=f"Headmaster successfully changed to: {new_id}.",
                    data={
                        "previous": previous,
                        "headmaster": new_id,
                    },
                )

    def register_new_teacher(self, caller: str, id: str, name: str) -> Response:
        """
        Registers a new `Teacher`.

        Args:
            caller (str): The verified identity invoking the operation.
            id (str): The identity of the new teacher.
            name (str): The teacher's display name.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the teacher was registered.
                    - False if the id is already taken by a teacher or a student.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_TARGET` if `id` is empty.
                    - `ErrorCode.DUPLICATE_ID` if `id` is already a teacher.
                    - `ErrorCode.ROLE_CONFLICT` if `id` is already a student.
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "record" (Teacher): A copy of the registered `Teacher`.

        Notes:
            - Anyone may call this. Registrations by the headmaster start Active; all others
              (self-registration) start Inactive and await `activate_teacher()`.
        """
        with self._lock:
            try:
                self.require_identity(id)
                self.require_unique_teacher_id(id)

            except RegistryError as e:
                return self._reject("register_new_teacher", caller, e)

            except Exception as e:
                return self._fail_unexpected("register_new_teacher", e)

            else:
                status = (
                    PersonStatus.ACTIVE
                    if caller == self._headmaster
                    else PersonStatus.INACTIVE
                )
                teacher = Teacher(id, name, status)
                self._teachers[id] = teacher
                self._mark_dirty()
                logger.info(
                    "Teacher %r registered by %r with status %s",
                    id,
                    caller,
                    status.value,
                )

                return Response.succeed(
                    detail=f"Teacher {name} successfully registered as {status.value}.",
                    data={
                        "record": copy.deepcopy(teacher),
                    },
                )

    def activate_teacher(self, caller: str, id: str) -> Response:
        """
        Sets a registered teacher's status to Active.

        Returns:
            Response: `ErrorCode.UNAUTHORIZED` unless the caller is the headmaster,
            `ErrorCode.NOT_FOUND` if `id` is not a teacher. On success, "record" holds a copy of the teacher.

        Notes:
            - Activating an already-Active teacher succeeds without changes.
        """
        with self._lock:
            try:
                self.require_headmaster(caller)
                teacher = self.require_teacher(id)

            except RegistryError as e:
                return self._reject("activate_teacher", caller, e)

            except Exception as e:
                return self._fail_unexpected("activate_teacher", e)

            if teacher.is_active:
                return Response.succeed(
                    detail="The teacher is already active. No changes made.",
                    data={
                        "record": copy.deepcopy(teacher),
                    },
                )

            teacher.activate()
            self._mark_dirty()
            logger.info("Teacher %r activated by %r", id, caller)

            return Response.succeed(
                detail=f"Teacher {teacher.name} successfully activated.",
                data={
                    "record": copy.deepcopy(teacher),
                },
            )

    def deactivate_person(self, caller: str, id: str) -> Response:
        """
        Sets a teacher's or student's status to Inactive.

        Args:
            caller (str): The verified identity invoking the operation.
            id (str): The teacher or student being deactivated.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the matching record is now Inactive.
                    - False if `id` is unknown or the caller is neither the headmaster nor `id` itself.
                - error (ErrorCode | str | None):
                    - `ErrorCode.NOT_FOUND` if `id` is neither a teacher nor a student.
                    - `ErrorCode.UNAUTHORIZED` if the caller is a third party.
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "role" (str): "teacher" or "student".
                        - "record" (Teacher | Student): A copy of the deactivated record.

        Notes:
            - Self-service deactivation models resignation or withdrawal.
        """
        with self._lock:
            try:
                record: Teacher | Student
                if id in self._teachers:
                    role, record = "teacher", self._teachers[id]
                elif id in self._students:
                    role, record = "student", self._students[id]
                else:
                    raise RegistryError(
                        ErrorCode.NOT_FOUND,
                        f"No teacher or student is registered with id {id!r}.",
                    )

                if caller != self._headmaster and caller != id:
                    raise RegistryError(
                        ErrorCode.UNAUTHORIZED,
                        "Only the headmaster or the person themselves may deactivate this record.",
                    )

            except RegistryError as e:
                return self._reject("deactivate_person", caller, e)

            except Exception as e:
                return self._fail_unexpected("deactivate_person", e)

            else:
                record.deactivate()
                self._mark_dirty()
                logger.info("%s %r deactivated by %r", role.capitalize(), id, caller)

                return Response.succeed(
                    detail=f"{role.capitalize()} {record.name} successfully deactivated.",
                    data={
                        "role": role,
                        "record": copy.deepcopy(record),
                    },
                )

    # --- organizational structure ---

    def register_new_class(self, caller: str, name: str, homeroom_id: str) -> Response:
        """
        Registers a new `SchoolClass` with an Active homeroom teacher.

        Returns:
            Response: A structured response with the following contract:
                - error (ErrorCode | str | None):
                    - `ErrorCode.UNAUTHORIZED` if the caller is not the headmaster.
                    - `ErrorCode.DUPLICATE_CLASS` if `name` is already used.
                    - `ErrorCode.NOT_FOUND` if `homeroom_id` is not a teacher.
                    - `ErrorCode.INACTIVE_TEACHER` if that teacher is Inactive.
                - data (dict | None):
                    - On success:
                        - "record" (SchoolClass): A copy of the new class.
        """
        with self._lock:
            try:
                self.require_headmaster(caller)
                self.require_unique_class_name(name)
                self.require_active_teacher(homeroom_id)

            except RegistryError as e:
                return self._reject("register_new_class", caller, e)

            except Exception as e:
                return self._fail_unexpected("register_new_class", e)

            else:
                school_class = SchoolClass(name, homeroom_id)
                self._classes[name] = school_class
                self._mark_dirty()
                logger.info(
                    "Class %r registered with homeroom teacher %r", name, homeroom_id
                )

                return Response.succeed(
                    detail=f"Class {name} successfully registered.",
                    data={
                        "record": copy.deepcopy(school_class),
                    },
                )

    def change_homeroom_teacher(
        self, caller: str, name: str, new_teacher_id: str
    ) -> Response:
        """
        Reassigns a class's homeroom teacher.

        Args:
            caller (str): The verified identity invoking the operation.
            name (str): The class being updated.
            new_teacher_id (str): The Active teacher taking over the class.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the homeroom teacher was reassigned.
                - error (ErrorCode | str | None):
                    - `ErrorCode.UNAUTHORIZED` if the caller is not the headmaster.
                    - `ErrorCode.NOT_FOUND` if the class or the teacher does not exist.
                    - `ErrorCode.INACTIVE_TEACHER` if the teacher is Inactive.
                    - `ErrorCode.NO_OP` if the guard rejects the change (see Notes).
                - data (dict | None):
                    - On success:
                        - "previous" (str): The outgoing homeroom teacher.
                        - "record" (SchoolClass): A copy of the updated class.

        Notes:
            - By default the guard rejects a `new_teacher_id` that already is the homeroom teacher.
            - With `legacy_homeroom_guard` enabled, the guard instead rejects any `new_teacher_id` that
              is NOT already the homeroom teacher, so the operation can only ever reassign the same teacher.
        """
        with self._lock:
            try:
                self.require_headmaster(caller)
                school_class = self.require_class(name)
                self.require_active_teacher(new_teacher_id)

                is_current = school_class.homeroom_teacher == new_teacher_id

                if self.legacy_homeroom_guard and not is_current:
                    raise RegistryError(
                        ErrorCode.NO_OP,
                        f"{new_teacher_id!r} is not the current homeroom teacher of {name}.",
                    )

                if not self.legacy_homeroom_guard and is_current:
                    raise RegistryError(
                        ErrorCode.NO_OP,
                        f"{new_teacher_id!r} is already the homeroom teacher of {name}.",
                    )

            except RegistryError as e:
                return self._reject("change_homeroom_teacher", caller, e)

            except Exception as e:
                return self._fail_unexpected("change_homeroom_teacher", e)

            else:
                previous = school_class.homeroom_teacher
                school_class.homeroom_teacher = new_teacher_id
                self._mark_dirty()
                logger.info(
                    "Homeroom teacher of %r changed from %r to %r",
                    name,
                    previous,
                    new_teacher_id,
                )

                return Response.succeed(
                    detail=f"Homeroom teacher of {name} successfully updated to: {new_teacher_id}.",
                    data={
                        "previous": previous,
                        "record": copy.deepcopy(school_class),
                    },
                )

    def register_new_subject(
        self, caller: str, name: str, teacher_ids: Iterable[str]
    ) -> Response:
        """
        Registers a new `Subject` taught by the given teachers.

        Returns:
            Response: `ErrorCode.UNAUTHORIZED`, `ErrorCode.DUPLICATE_SUBJECT`, `ErrorCode.INVALID_FIELD_VALUE`, or
            `ErrorCode.UNREGISTERED_TEACHER` on failure; "record" holds a copy of the subject on success.

        Notes:
            - Teacher status is irrelevant here, and the list is stored as given (order kept, duplicates kept).
        """
        with self._lock:
            try:
                self.require_headmaster(caller)
                self.require_unique_subject_name(name)
                teacher_ids = self.require_teacher_id_list(teacher_ids)
                self.require_registered_teachers(teacher_ids)

            except RegistryError as e:
                return self._reject("register_new_subject", caller, e)

            except Exception as e:
                return self._fail_unexpected("register_new_subject", e)

            else:
                subject = Subject(name, teacher_ids)
                self._subjects[name] = subject
                self._mark_dirty()
                logger.info(
                    "Subject %r registered with %d teachers", name, len(teacher_ids)
                )

                return Response.succeed(
                    detail=f"Subject {name} successfully registered.",
                    data={
                        "record": copy.deepcopy(subject),
                    },
                )

    def update_subject(
        self, caller: str, name: str, teacher_ids: Iterable[str]
    ) -> Response:
        """
        Replaces a subject's entire teacher list.

        Returns:
            Response: `ErrorCode.UNAUTHORIZED`, `ErrorCode.NOT_FOUND`, `ErrorCode.INVALID_FIELD_VALUE`, or `ErrorCode.UNREGISTERED_TEACHER`
            on failure; "record" holds a copy of the updated subject on success.
        """
        with self._lock:
            try:
                self.require_headmaster(caller)
                subject = self.require_subject(name)
                teacher_ids = self.require_teacher_id_list(teacher_ids)
                self.require_registered_teachers(teacher_ids)

            except RegistryError as e:
                return self._reject("update_subject", caller, e)

            except Exception as e:
                return self._fail_unexpected("update_subject", e)

            else:
                subject.teachers = teacher_ids
                self._mark_dirty()
                logger.info("Subject %r teachers replaced: %s", name, teacher_ids)

                return Response.succeed(
                    detail=f"Subject {name} successfully updated.",
                    data={
                        "record": copy.deepcopy(subject),
                    },
                )

    # --- students and records ---

    def register_new_student(
        self, caller: str, id: str, name: str, class_name: str = ""
    ) -> Response:
        """
        Registers a new `Student`, optionally placed in a class.

        Args:
            caller (str): The verified identity invoking the operation.
            id (str): The identity of the new student.
            name (str): The student's display name. Must not be empty.
            class_name (str): The class to join, or "" for none.

        Returns:
            Response: A structured response with the following contract:
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_TARGET` if `id` is empty.
                    - `ErrorCode.DUPLICATE_ID` if `id` is already a student.
                    - `ErrorCode.ROLE_CONFLICT` if `id` is already a teacher.
                    - `ErrorCode.INVALID_NAME` if `name` is empty.
                    - `ErrorCode.INVALID_FIELD_VALUE` if `class_name` is not a string.
                    - `ErrorCode.NOT_FOUND` if `class_name` is non-empty and not a registered class.
                - data (dict | None):
                    - On success:
                        - "record" (Student): A copy of the registered student.

        Notes:
            - Registrations by the headmaster start Active; all others start Inactive.
        """
        with self._lock:
            try:
                self.require_identity(id)
                self.require_unique_student_id(id)
                self.require_valid_name(name)
                self.require_class_name_input(class_name)
                if class_name:
                    self.require_class(class_name)

            except RegistryError as e:
                return self._reject("register_new_student", caller, e)

            except Exception as e:
                return self._fail_unexpected("register_new_student", e)

            else:
                status = (
                    PersonStatus.ACTIVE
                    if caller == self._headmaster
                    else PersonStatus.INACTIVE
                )
                student = Student(id, name, class_name, status)
                self._students[id] = student
                self._mark_dirty()
                logger.info(
                    "Student %r registered by %r with status %s",
                    id,
                    caller,
                    status.value,
                )

                return Response.succeed(
                    detail=f"Student {student.name} successfully registered as {status.value}.",
                    data={
                        "record": copy.deepcopy(student),
                    },
                )

    def update_student(
        self, caller: str, id: str, name: str = "", class_name: str = ""
    ) -> Response:
        """
        Updates a student's name and/or class.

        Args:
            caller (str): The verified identity invoking the operation.
            id (str): The student being updated.
            name (str): The new name, or "" to leave the name unchanged.
            class_name (str): The new class, or "" to leave the class unchanged.

        Returns:
            Response: A structured response with the following contract:
                - error (ErrorCode | str | None):
                    - `ErrorCode.UNAUTHORIZED` if the caller is not the headmaster.
                    - `ErrorCode.NOT_FOUND` if the student or the named class does not exist.
                    - `ErrorCode.INVALID_FIELD_VALUE` if `class_name` is not a string.
                - data (dict | None):
                    - On success:
                        - "record" (Student): A copy of the updated student.

        Notes:
            - The empty string means "leave unchanged"; this operation cannot clear a student's class.
        """
        with self._lock:
            try:
                self.require_headmaster(caller)
                student = self.require_student(id)
                self.require_class_name_input(class_name)
                if class_name:
                    self.require_class(class_name)
                if name:
                    self.require_valid_name(name)

            except RegistryError as e:
                return self._reject("update_student", caller, e)

            except Exception as e:
                return self._fail_unexpected("update_student", e)

            else:
                if name:
                    student.name = name
                if class_name:
                    student.class_name = class_name

                if name or class_name:
                    self._mark_dirty()
                    logger.info("Student %r updated by %r", id, caller)

                return Response.succeed(
                    detail=f"Student {student.name} successfully updated.",
                    data={
                        "record": copy.deepcopy(student),
                    },
                )

    def activate_student(self, caller: str, id: str) -> Response:
        with self._lock:
            try:
                self.require_headmaster(caller)
                student = self.require_student(id)

            except RegistryError as e:
                return self._reject("activate_student", caller, e)

            except Exception as e:
                return self._fail_unexpected("activate_student", e)

            if student.is_active:
                return Response.succeed(
                    detail="The student is already active. No changes made.",
                    data={
                        "record": copy.deepcopy(student),
                    },
                )

            student.activate()
            self._mark_dirty()
            logger.info("Student %r activated by %r", id, caller)

            return Response.succeed(
                detail=f"Student {student.name} successfully activated.",
                data={
                    "record": copy.deepcopy(student),
                },
            )

    def set_report(
        self, caller: str, student_id: str, subject_name: str, score: int
    ) -> Response:
        """
        Records a score for a student in a subject.

        Args:
            caller (str): The verified identity invoking the operation. Must be an Active teacher.
            student_id (str): The student receiving the report.
            subject_name (str): The subject being reported on.
            score (int): A whole number from 0 to 100, inclusive.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if a new `Report` was appended.
                    - False if any precondition fails.
                - detail (str | None):
                    - On failure, a human-readable description of the error.
                    - On success, a confirmation message.
                - error (ErrorCode | str | None):
                    - `ErrorCode.UNAUTHORIZED` if the caller is not an Active teacher.
                    - `ErrorCode.NOT_FOUND` if the student or subject does not exist.
                    - `ErrorCode.INVALID_FIELD_VALUE` if `score` is not a whole number.
                    - `ErrorCode.OUT_OF_RANGE` if `score` is outside 0 to 100.
                    - `ErrorCode.NOT_TEACHING_SUBJECT` if the caller is not one of the subject's teachers.
                - status_code (int | None):
                    - 200 on success
                    - 403, 404, or 400 on failure
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "record" (Report): The new `Report`.

        Notes:
            - Reports are append-only: earlier reports for the same student and subject are kept.
            - The caller's role is checked before anything about the target.
        """
        with self._lock:
            try:
                self.require_active_teacher_caller(caller)
                self.require_student(student_id)
                subject = self.require_subject(subject_name)

                try:
                    report = Report(student_id, subject_name, score)
                except TypeError as e:
                    raise RegistryError(ErrorCode.INVALID_FIELD_VALUE, str(e))
                except ValueError as e:
                    raise RegistryError(ErrorCode.OUT_OF_RANGE, str(e))

                if not subject.is_taught_by(caller):
                    raise RegistryError(
                        ErrorCode.NOT_TEACHING_SUBJECT,
                        f"{caller!r} does not teach {subject_name}.",
                    )

            except RegistryError as e:
                return self._reject("set_report", caller, e)

            except Exception as e:
                return self._fail_unexpected("set_report", e)

            else:
                self._reports.append(report)
                self._mark_dirty()
                logger.info(
                    "Report recorded by %r: %s / %s = %d",
                    caller,
                    student_id,
                    subject_name,
                    score,
                )

                return Response.succeed(
                    detail=f"Report for {student_id} in {subject_name} successfully recorded.",
                    data={
                        "record": report,
                    },
                )

    # === data validators ===

    # ---
    # Validators raise `RegistryError` and never mutate state. Operations call them
    # before any write so that a rejection leaves the registry unchanged.
    # ---

    def require_headmaster(self, caller: str) -> None:
        if caller != self._headmaster:
            raise RegistryError(
                ErrorCode.UNAUTHORIZED,
                "Only the headmaster may perform this action.",
            )

    def require_active_teacher_caller(self, caller: str) -> None:
        teacher = self._teachers.get(caller)
        if teacher is None or not teacher.is_active:
            raise RegistryError(
                ErrorCode.UNAUTHORIZED,
                "Only an active teacher may perform this action.",
            )

    def require_identity(self, id: str) -> None:
        if not isinstance(id, str) or not id:
            raise RegistryError(
                ErrorCode.INVALID_TARGET,
                "An identity must be a non-empty string.",
            )

    def require_valid_name(self, name: str) -> None:
        try:
            Student.validate_name_input(name)
        except (TypeError, ValueError) as e:
            raise RegistryError(ErrorCode.INVALID_NAME, str(e))

    def require_class_name_input(self, class_name: str) -> None:
        try:
            Student.validate_class_name_input(class_name)
        except TypeError as e:
            raise RegistryError(ErrorCode.INVALID_FIELD_VALUE, str(e))

    def require_teacher_id_list(self, teacher_ids: Iterable[str]) -> list[str]:
        """
        Materializes `teacher_ids` once so that validation and storage see the same ids.

        Raises:
            RegistryError: `ErrorCode.INVALID_FIELD_VALUE` if `teacher_ids` is a bare string,
            is not iterable, or holds anything other than strings.
        """
        if isinstance(teacher_ids, str):
            raise RegistryError(
                ErrorCode.INVALID_FIELD_VALUE,
                "Teacher ids must be given as a list, not a single string.",
            )

        try:
            ids = list(teacher_ids)
        except TypeError:
            raise RegistryError(
                ErrorCode.INVALID_FIELD_VALUE,
                f"Teacher ids must be a list of strings, got {type(teacher_ids).__name__}.",
            )

        if not all(isinstance(t, str) for t in ids):
            raise RegistryError(
                ErrorCode.INVALID_FIELD_VALUE,
                "Teacher ids must be a list of strings.",
            )
        return ids

    def require_unique_teacher_id(self, id: str) -> None:
        """
        Validates that `id` can take the teacher role.

        Raises:
            RegistryError:
                - `ErrorCode.DUPLICATE_ID` if `id` is already a teacher.
                - `ErrorCode.ROLE_CONFLICT` if `id` is a student.
        """
        if id in self._teachers:
            raise RegistryError(
                ErrorCode.DUPLICATE_ID,
                f"A teacher with the id {id!r} already exists.",
            )
        if id in self._students:
            raise RegistryError(
                ErrorCode.ROLE_CONFLICT,
                f"{id!r} is already registered as a student.",
            )

    def require_unique_student_id(self, id: str) -> None:
        """
        Validates that `id` can take the student role.

        Raises:
            RegistryError:
                - `ErrorCode.DUPLICATE_ID` if `id` is already a student.
                - `ErrorCode.ROLE_CONFLICT` if `id` is a teacher.
        """
        if id in self._students:
            raise RegistryError(
                ErrorCode.DUPLICATE_ID,
                f"A student with the id {id!r} already exists.",
            )
        if id in self._teachers:
            raise RegistryError(
                ErrorCode.ROLE_CONFLICT,
                f"{id!r} is already registered as a teacher.",
            )

    def require_unique_class_name(self, name: str) -> None:
        if name in self._classes:
            raise RegistryError(
                ErrorCode.DUPLICATE_CLASS,
                f"A class with the name {name!r} already exists.",
            )

    def require_unique_subject_name(self, name: str) -> None:
        if name in self._subjects:
            raise RegistryError(
                ErrorCode.DUPLICATE_SUBJECT,
                f"A subject with the name {name!r} already exists.",
            )

    def require_teacher(self, id: str) -> Teacher:
        teacher = self._teachers.get(id)
        if teacher is None:
            raise RegistryError(
                ErrorCode.NOT_FOUND,
                f"No teacher is registered with id {id!r}.",
            )
        return teacher

    def require_active_teacher(self, id: str) -> Teacher:
        teacher = self.require_teacher(id)
        if not teacher.is_active:
            raise RegistryError(
                ErrorCode.INACTIVE_TEACHER,
                f"Teacher {id!r} is not active.",
            )
        return teacher

    def require_registered_teachers(self, teacher_ids: list[str]) -> None:
        unregistered = [t for t in teacher_ids if t not in self._teachers]
        if unregistered:
            raise RegistryError(
                ErrorCode.UNREGISTERED_TEACHER,
                f"Not registered as teachers: {', '.join(map(repr, unregistered))}.",
            )

    def require_student(self, id: str) -> Student:
        student = self._students.get(id)
        if student is None:
            raise RegistryError(
                ErrorCode.NOT_FOUND,
                f"No student is registered with id {id!r}.",
            )
        return student

    def require_class(self, name: str) -> SchoolClass:
        school_class = self._classes.get(name)
        if school_class is None:
            raise RegistryError(
                ErrorCode.NOT_FOUND,
                f"No class is registered with the name {name!r}.",
            )
        return school_class

    def require_subject(self, name: str) -> Subject:
        subject = self._subjects.get(name)
        if subject is None:
            raise RegistryError(
                ErrorCode.NOT_FOUND,
                f"No subject is registered with the name {name!r}.",
            )
        return subject

    # === dunder methods ===

    def __repr__(self) -> str:
        return (
            f"Registry(headmaster={self._headmaster!r}, teachers={len(self._teachers)}, "
            f"classes={len(self._classes)}, subjects={len(self._subjects)}, "
            f"students={len(self._students)}, reports={len(self._reports)})"
        )
