# tests/conftest.py

import pytest

from models.registry import Registry
from models.report import Report
from models.school_class import SchoolClass
from models.status import PersonStatus
from models.student import Student
from models.subject import Subject
from models.teacher import Teacher

HEADMASTER = "h001"


@pytest.fixture
def registry():
    return Registry(HEADMASTER)


@pytest.fixture
def staffed_registry():
    """
    A registry with two active teachers, one class, one subject, and one active student:

    - t001 "Ada" (homeroom of 7A, teaches Math)
    - t002 "Grace"
    - class 7A
    - subject Math [t001]
    - student s001 "Sean" in 7A
    """
    registry = Registry(HEADMASTER)
    registry.register_new_teacher(HEADMASTER, "t001", "Ada")
    registry.register_new_teacher(HEADMASTER, "t002", "Grace")
    registry.register_new_class(HEADMASTER, "7A", "t001")
    registry.register_new_subject(HEADMASTER, "Math", ["t001"])
    registry.register_new_student(HEADMASTER, "s001", "Sean", "7A")
    return registry


@pytest.fixture
def sample_teacher():
    return Teacher("t001", "Ada", PersonStatus.ACTIVE)


@pytest.fixture
def sample_student():
    return Student("s001", "Sean", "7A", PersonStatus.ACTIVE)


@pytest.fixture
def sample_class():
    return SchoolClass("7A", "t001")


@pytest.fixture
def sample_subject():
    return Subject("Math", ["t001", "t002"])


@pytest.fixture
def sample_report():
    return Report("s001", "Math", 85)
