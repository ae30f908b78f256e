# models/types.py

"""
Holds TypeVar definition for simplifying type checks.
"""

from typing import TypeVar

from .report import Report
from .school_class import SchoolClass
from .student import Student
from .subject import Subject
from .teacher import Teacher

RecordType = TypeVar("RecordType", Teacher, SchoolClass, Subject, Student, Report)
