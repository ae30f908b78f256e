# tests/test_school_class.py

from models.school_class import SchoolClass


def test_class_to_dict(sample_class):
    assert sample_class.to_dict() == {"name": "7A", "homeroom_teacher": "t001"}


def test_class_from_dict():
    school_class = SchoolClass.from_dict({"name": "8B", "homeroom_teacher": "t002"})

    assert school_class.name == "8B"
    assert school_class.homeroom_teacher == "t002"


def test_homeroom_teacher_setter(sample_class):
    sample_class.homeroom_teacher = "t009"

    assert sample_class.homeroom_teacher == "t009"
    assert str(sample_class) == "CLASS: 7A - (Homeroom: t009)"
