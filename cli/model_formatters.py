# cli/model_formatters.py

# anything that renders domain objects or performs Registry read-only operations
from textwrap import dedent

import core.formatters as formatters
from models.registry import Registry
from models.report import Report
from models.school_class import SchoolClass
from models.student import Student
from models.subject import Subject
from models.teacher import Teacher

# === people formatters ===


def format_teacher_oneline(teacher: Teacher) -> str:
    status = formatters.format_status_tag(teacher.is_active)

    return f"{teacher.name:<20} | {teacher.id}{status}"


def format_student_oneline(student: Student) -> str:
    status = formatters.format_status_tag(student.is_active)
    class_name = student.class_name if student.has_class else "[NO CLASS]"

    return f"{student.name:<20} | {student.id:<12} | {class_name}{status}"


# === organization formatters ===


def format_class_oneline(school_class: SchoolClass) -> str:
    return f"{school_class.name:<20} | Homeroom: {school_class.homeroom_teacher}"


def format_subject_oneline(subject: Subject) -> str:
    teachers = formatters.format_list_with_and(subject.teachers) or "[NO TEACHERS]"

    return f"{subject.name:<20} | {teachers}"


# === report formatters ===


def format_report_oneline(report: Report) -> str:
    return f"{report.student_id:<12} | {report.subject_name:<20} | {report.score:>3} / 100"


# === registry formatters ===


def format_registry_summary(registry: Registry) -> str:
    count_lines = "\n".join(
        f"... {collection.capitalize()}: {count}"
        for collection, count in registry.record_counts().items()
    )

    return dedent(
        f"""\
        Registry:
        ... Headmaster: {registry.headmaster}
        ... Legacy homeroom guard: {"ON" if registry.legacy_homeroom_guard else "OFF"}
        """
    ) + count_lines
