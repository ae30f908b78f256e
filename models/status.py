# models/status.py

"""
Enrollment and employment status shared by `Teacher` and `Student` records.
"""

from enum import Enum


class PersonStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
