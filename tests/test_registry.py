# tests/test_registry.py

import json
import logging
import os
import tempfile
import threading

import pytest

from core.response import ErrorCode
from models.registry import Registry
from models.status import PersonStatus

H = "h001"


def state_of(registry):
    """
    Serializes every collection plus the headmaster, for before/after comparisons.
    """
    return {
        "headmaster": registry.headmaster,
        "teachers": [t.to_dict() for t in registry.list_teachers().data["records"]],
        "classes": [c.to_dict() for c in registry.list_classes().data["records"]],
        "subjects": [s.to_dict() for s in registry.list_subjects().data["records"]],
        "students": [s.to_dict() for s in registry.list_students().data["records"]],
        "reports": [r.to_dict() for r in registry.list_reports().data["records"]],
    }


def test_create_registry_requires_headmaster():
    with pytest.raises(ValueError):
        Registry("")


def test_new_registry_is_empty(registry):
    state = state_of(registry)

    assert state["headmaster"] == H
    assert all(state[key] == [] for key in state if key != "headmaster")
    assert not registry.has_unsaved_changes


# === identity & role operations ===

# --- change_headmaster ---


def test_change_headmaster(staffed_registry):
    response = staffed_registry.change_headmaster(H, "t002")

    assert response.success
    assert response.data == {"previous": H, "headmaster": "t002"}
    assert staffed_registry.headmaster == "t002"
    assert staffed_registry.has_unsaved_changes


def test_old_headmaster_loses_privileges(staffed_registry):
    staffed_registry.change_headmaster(H, "h002")

    response = staffed_registry.activate_teacher(H, "t001")

    assert response.error is ErrorCode.UNAUTHORIZED


def test_change_headmaster_requires_headmaster(staffed_registry):
    response = staffed_registry.change_headmaster("t001", "t001")

    assert response.error is ErrorCode.UNAUTHORIZED
    assert response.status_code == 403
    assert staffed_registry.headmaster == H


def test_change_headmaster_rejects_student(staffed_registry):
    response = staffed_registry.change_headmaster(H, "s001")

    assert response.error is ErrorCode.INVALID_TARGET


def test_change_headmaster_rejects_empty_identity(registry):
    assert registry.change_headmaster(H, "").error is ErrorCode.INVALID_TARGET


def test_change_headmaster_rejects_no_op(registry):
    response = registry.change_headmaster(H, H)

    assert response.error is ErrorCode.NO_OP
    assert not registry.has_unsaved_changes


# --- register_new_teacher ---


def test_headmaster_registers_active_teacher(registry):
    response = registry.register_new_teacher(H, "t001", "Ada")

    assert response.success
    assert response.data["record"].status is PersonStatus.ACTIVE


def test_self_registered_teacher_is_inactive(staffed_registry):
    response = staffed_registry.register_new_teacher("t003", "t003", "Alan")

    assert response.success
    assert response.data["record"].status is PersonStatus.INACTIVE


def test_student_registering_teacher_yields_inactive(staffed_registry):
    response = staffed_registry.register_new_teacher("s001", "t003", "Bob")

    assert response.success
    assert response.data["record"].status is PersonStatus.INACTIVE


@pytest.mark.parametrize("caller", [H, "t001", "stranger"])
def test_duplicate_teacher_id_rejected(staffed_registry, caller):
    response = staffed_registry.register_new_teacher(caller, "t001", "Someone")

    assert response.error is ErrorCode.DUPLICATE_ID
    assert staffed_registry.find_teacher_by_id("t001").data["record"].name == "Ada"


def test_teacher_id_cannot_be_student(staffed_registry):
    response = staffed_registry.register_new_teacher(H, "s001", "Sean")

    assert response.error is ErrorCode.ROLE_CONFLICT


def test_headmaster_may_register_as_teacher(registry):
    response = registry.register_new_teacher(H, H, "The Head")

    assert response.success
    assert registry.role_of(H) == "headmaster"


# --- activate_teacher ---


def test_activate_teacher(staffed_registry):
    staffed_registry.register_new_teacher("t003", "t003", "Alan")

    response = staffed_registry.activate_teacher(H, "t003")

    assert response.success
    assert staffed_registry.find_teacher_by_id("t003").data["record"].is_active


def test_activate_teacher_is_idempotent(staffed_registry):
    response = staffed_registry.activate_teacher(H, "t001")

    assert response.success
    assert "No changes made" in response.detail


def test_activate_teacher_requires_headmaster(staffed_registry):
    staffed_registry.register_new_teacher("t003", "t003", "Alan")

    response = staffed_registry.activate_teacher("t003", "t003")

    assert response.error is ErrorCode.UNAUTHORIZED


def test_activate_unknown_teacher(registry):
    assert registry.activate_teacher(H, "t404").error is ErrorCode.NOT_FOUND


# --- deactivate_person ---


def test_headmaster_deactivates_teacher(staffed_registry):
    response = staffed_registry.deactivate_person(H, "t002")

    assert response.success
    assert response.data["role"] == "teacher"
    assert not staffed_registry.find_teacher_by_id("t002").data["record"].is_active


def test_student_deactivates_self(staffed_registry):
    response = staffed_registry.deactivate_person("s001", "s001")

    assert response.success
    assert response.data["role"] == "student"
    assert not staffed_registry.find_student_by_id("s001").data["record"].is_active


@pytest.mark.parametrize("caller", ["t001", "t002", "stranger"])
def test_third_party_cannot_deactivate(staffed_registry, caller):
    response = staffed_registry.deactivate_person(caller, "s001")

    assert response.error is ErrorCode.UNAUTHORIZED
    assert staffed_registry.find_student_by_id("s001").data["record"].is_active


def test_deactivate_unknown_person(staffed_registry):
    # NOT_FOUND is checked before authorization
    response = staffed_registry.deactivate_person("stranger", "x404")

    assert response.error is ErrorCode.NOT_FOUND


def test_deactivated_homeroom_teacher_stays_on_class(staffed_registry):
    staffed_registry.deactivate_person("t001", "t001")

    school_class = staffed_registry.find_class_by_name("7A").data["record"]

    assert school_class.homeroom_teacher == "t001"


# === organizational structure ===

# --- register_new_class ---


def test_register_class(staffed_registry):
    response = staffed_registry.register_new_class(H, "8B", "t002")

    assert response.success
    assert response.data["record"].homeroom_teacher == "t002"


def test_register_class_requires_headmaster(staffed_registry):
    response = staffed_registry.register_new_class("t001", "8B", "t001")

    assert response.error is ErrorCode.UNAUTHORIZED


def test_register_duplicate_class(staffed_registry):
    response = staffed_registry.register_new_class(H, "7A", "t002")

    assert response.error is ErrorCode.DUPLICATE_CLASS


def test_register_class_with_unknown_teacher(staffed_registry):
    response = staffed_registry.register_new_class(H, "8B", "t404")

    assert response.error is ErrorCode.NOT_FOUND


def test_register_class_with_inactive_teacher(staffed_registry):
    staffed_registry.register_new_teacher("t003", "t003", "Alan")

    response = staffed_registry.register_new_class(H, "8B", "t003")

    assert response.error is ErrorCode.INACTIVE_TEACHER
    assert staffed_registry.find_class_by_name("8B").error is ErrorCode.NOT_FOUND


# --- change_homeroom_teacher ---


def test_change_homeroom_teacher(staffed_registry):
    response = staffed_registry.change_homeroom_teacher(H, "7A", "t002")

    assert response.success
    assert response.data["previous"] == "t001"
    assert response.data["record"].homeroom_teacher == "t002"


def test_change_homeroom_teacher_rejects_same_teacher(staffed_registry):
    response = staffed_registry.change_homeroom_teacher(H, "7A", "t001")

    assert response.error is ErrorCode.NO_OP


def test_change_homeroom_teacher_requires_headmaster(staffed_registry):
    response = staffed_registry.change_homeroom_teacher("t001", "7A", "t002")

    assert response.error is ErrorCode.UNAUTHORIZED


def test_change_homeroom_teacher_unknown_class(staffed_registry):
    response = staffed_registry.change_homeroom_teacher(H, "9Z", "t002")

    assert response.error is ErrorCode.NOT_FOUND


def test_change_homeroom_teacher_inactive_teacher(staffed_registry):
    staffed_registry.deactivate_person(H, "t002")

    response = staffed_registry.change_homeroom_teacher(H, "7A", "t002")

    assert response.error is ErrorCode.INACTIVE_TEACHER


def test_legacy_homeroom_guard_only_accepts_current_teacher():
    registry = Registry(H, legacy_homeroom_guard=True)
    registry.register_new_teacher(H, "t001", "Ada")
    registry.register_new_teacher(H, "t002", "Grace")
    registry.register_new_class(H, "7A", "t001")

    response = registry.change_homeroom_teacher(H, "7A", "t002")
    assert response.error is ErrorCode.NO_OP

    response = registry.change_homeroom_teacher(H, "7A", "t001")
    assert response.success
    assert response.data["record"].homeroom_teacher == "t001"


# --- register_new_subject / update_subject ---


def test_register_subject_keeps_order_and_duplicates(staffed_registry):
    response = staffed_registry.register_new_subject(
        H, "Art", ["t002", "t001", "t002"]
    )

    assert response.success
    assert response.data["record"].teachers == ["t002", "t001", "t002"]


def test_register_subject_accepts_inactive_teacher(staffed_registry):
    staffed_registry.deactivate_person(H, "t002")

    assert staffed_registry.register_new_subject(H, "Art", ["t002"]).success


def test_register_subject_with_no_teachers(staffed_registry):
    assert staffed_registry.register_new_subject(H, "Art", []).success


def test_register_subject_requires_headmaster(staffed_registry):
    response = staffed_registry.register_new_subject("t001", "Art", ["t001"])

    assert response.error is ErrorCode.UNAUTHORIZED


def test_register_duplicate_subject(staffed_registry):
    response = staffed_registry.register_new_subject(H, "Math", ["t002"])

    assert response.error is ErrorCode.DUPLICATE_SUBJECT


def test_register_subject_with_unregistered_teacher(staffed_registry):
    response = staffed_registry.register_new_subject(H, "Art", ["t001", "s001"])

    assert response.error is ErrorCode.UNREGISTERED_TEACHER
    assert staffed_registry.find_subject_by_name("Art").error is ErrorCode.NOT_FOUND


def test_update_subject_replaces_teachers(staffed_registry):
    response = staffed_registry.update_subject(H, "Math", ["t002"])

    assert response.success
    subject = staffed_registry.find_subject_by_name("Math").data["record"]
    assert subject.teachers == ["t002"]


def test_update_unknown_subject(staffed_registry):
    response = staffed_registry.update_subject(H, "Latin", ["t001"])

    assert response.error is ErrorCode.NOT_FOUND


def test_update_subject_with_unregistered_teacher(staffed_registry):
    response = staffed_registry.update_subject(H, "Math", ["t404"])

    assert response.error is ErrorCode.UNREGISTERED_TEACHER
    subject = staffed_registry.find_subject_by_name("Math").data["record"]
    assert subject.teachers == ["t001"]


def test_update_subject_requires_headmaster(staffed_registry):
    response = staffed_registry.update_subject("t001", "Math", ["t001", "t002"])

    assert response.error is ErrorCode.UNAUTHORIZED



def test_subject_teachers_accept_one_shot_iterables(staffed_registry):
    response = staffed_registry.register_new_subject(
        H, "Art", (t for t in ["t002", "t001"])
    )
    assert response.success

    staffed_registry.update_subject(H, "Math", iter(["t002"]))

    subjects = staffed_registry.list_subjects().data["records"]
    assert [s.teachers for s in subjects] == [["t002"], ["t002", "t001"]]


@pytest.mark.parametrize("teacher_ids", [None, "t001", 42, ["t001", 7]])
def test_subject_teachers_must_be_list_of_ids(staffed_registry, teacher_ids):
    before = state_of(staffed_registry)

    register_response = staffed_registry.register_new_subject(H, "Art", teacher_ids)
    update_response = staffed_registry.update_subject(H, "Math", teacher_ids)

    assert register_response.error is ErrorCode.INVALID_FIELD_VALUE
    assert update_response.error is ErrorCode.INVALID_FIELD_VALUE
    assert state_of(staffed_registry) == before

# === students and records ===

# --- register_new_student ---


def test_headmaster_registers_active_student(staffed_registry):
    response = staffed_registry.register_new_student(H, "s002", "Paul", "7A")

    assert response.success
    assert response.data["record"].status is PersonStatus.ACTIVE
    assert response.data["record"].class_name == "7A"


def test_self_registered_student_is_inactive(staffed_registry):
    response = staffed_registry.register_new_student("s002", "s002", "Paul")

    assert response.success
    assert response.data["record"].status is PersonStatus.INACTIVE
    assert response.data["record"].class_name == ""


@pytest.mark.parametrize("caller", [H, "s001"])
def test_duplicate_student_id_rejected(staffed_registry, caller):
    response = staffed_registry.register_new_student(caller, "s001", "Again")

    assert response.error is ErrorCode.DUPLICATE_ID


def test_student_id_cannot_be_teacher(staffed_registry):
    response = staffed_registry.register_new_student(H, "t001", "Ada")

    assert response.error is ErrorCode.ROLE_CONFLICT


@pytest.mark.parametrize("name", ["", "   "])
def test_student_name_required(staffed_registry, name):
    response = staffed_registry.register_new_student(H, "s002", name)

    assert response.error is ErrorCode.INVALID_NAME


def test_student_unknown_class(staffed_registry):
    response = staffed_registry.register_new_student(H, "s002", "Paul", "9Z")

    assert response.error is ErrorCode.NOT_FOUND
    assert staffed_registry.find_student_by_id("s002").error is ErrorCode.NOT_FOUND


def test_register_person_rejects_empty_identity(registry):
    assert registry.register_new_teacher(H, "", "Nobody").error is ErrorCode.INVALID_TARGET
    assert registry.register_new_student(H, "", "Nobody").error is ErrorCode.INVALID_TARGET



@pytest.mark.parametrize("class_name", [None, 7])
def test_register_student_rejects_non_string_class(staffed_registry, class_name):
    response = staffed_registry.register_new_student(H, "s002", "Paul", class_name)

    assert response.error is ErrorCode.INVALID_FIELD_VALUE
    assert staffed_registry.find_student_by_id("s002").error is ErrorCode.NOT_FOUND

# --- update_student ---


def test_update_student_with_blanks_changes_nothing(staffed_registry):
    before = state_of(staffed_registry)

    response = staffed_registry.update_student(H, "s001", "", "")

    assert response.success
    assert state_of(staffed_registry) == before


def test_update_student_name_only(staffed_registry):
    staffed_registry.update_student(H, "s001", name="Paul")

    student = staffed_registry.find_student_by_id("s001").data["record"]

    assert student.name == "Paul"
    assert student.class_name == "7A"


def test_update_student_class_only(staffed_registry):
    staffed_registry.register_new_class(H, "8B", "t002")

    staffed_registry.update_student(H, "s001", class_name="8B")

    student = staffed_registry.find_student_by_id("s001").data["record"]

    assert student.name == "Sean"
    assert student.class_name == "8B"


def test_update_student_requires_headmaster(staffed_registry):
    response = staffed_registry.update_student("s001", "s001", "Paul")

    assert response.error is ErrorCode.UNAUTHORIZED


def test_update_unknown_student(staffed_registry):
    assert staffed_registry.update_student(H, "s404", "Paul").error is ErrorCode.NOT_FOUND


def test_update_student_unknown_class_changes_nothing(staffed_registry):
    before = state_of(staffed_registry)

    response = staffed_registry.update_student(H, "s001", "Paul", "9Z")

    assert response.error is ErrorCode.NOT_FOUND
    assert state_of(staffed_registry) == before



@pytest.mark.parametrize("class_name", [None, 7])
def test_update_student_rejects_non_string_class(staffed_registry, class_name):
    before = state_of(staffed_registry)

    response = staffed_registry.update_student(H, "s001", "Paul", class_name)

    assert response.error is ErrorCode.INVALID_FIELD_VALUE
    assert state_of(staffed_registry) == before

# --- activate_student ---


def test_activate_student(staffed_registry):
    staffed_registry.register_new_student("s002", "s002", "Paul")

    response = staffed_registry.activate_student(H, "s002")

    assert response.success
    assert staffed_registry.find_student_by_id("s002").data["record"].is_active


def test_activate_student_requires_headmaster(staffed_registry):
    response = staffed_registry.activate_student("t001", "s001")

    assert response.error is ErrorCode.UNAUTHORIZED


def test_activate_unknown_student(staffed_registry):
    assert staffed_registry.activate_student(H, "s404").error is ErrorCode.NOT_FOUND


# --- set_report ---


def test_set_report(staffed_registry):
    response = staffed_registry.set_report("t001", "s001", "Math", 85)

    assert response.success
    reports = staffed_registry.list_reports().data["records"]
    assert [r.to_dict() for r in reports] == [
        {"student_id": "s001", "subject_name": "Math", "score": 85}
    ]


def test_set_report_appends_history(staffed_registry):
    staffed_registry.set_report("t001", "s001", "Math", 70)
    staffed_registry.set_report("t001", "s001", "Math", 90)

    scores = [r.score for r in staffed_registry.list_reports().data["records"]]

    assert scores == [70, 90]


def test_set_report_not_teaching_subject(staffed_registry):
    response = staffed_registry.set_report("t002", "s001", "Math", 85)

    assert response.error is ErrorCode.NOT_TEACHING_SUBJECT


def test_set_report_after_deactivation(staffed_registry):
    staffed_registry.deactivate_person("t001", "t001")

    response = staffed_registry.set_report("t001", "s001", "Math", 85)

    assert response.error is ErrorCode.UNAUTHORIZED


@pytest.mark.parametrize("caller", [H, "s001", "stranger"])
def test_set_report_requires_active_teacher(staffed_registry, caller):
    response = staffed_registry.set_report(caller, "s001", "Math", 85)

    assert response.error is ErrorCode.UNAUTHORIZED


def test_set_report_unknown_student_and_subject(staffed_registry):
    assert staffed_registry.set_report("t001", "s404", "Math", 85).error is (
        ErrorCode.NOT_FOUND
    )
    assert staffed_registry.set_report("t001", "s001", "Latin", 85).error is (
        ErrorCode.NOT_FOUND
    )


@pytest.mark.parametrize("score", [0, 100])
def test_set_report_score_bounds(staffed_registry, score):
    assert staffed_registry.set_report("t001", "s001", "Math", score).success


@pytest.mark.parametrize("score", [-1, 101])
def test_set_report_out_of_range(staffed_registry, score):
    response = staffed_registry.set_report("t001", "s001", "Math", score)

    assert response.error is ErrorCode.OUT_OF_RANGE
    assert staffed_registry.list_reports().data["records"] == []


def test_set_report_score_type(staffed_registry):
    response = staffed_registry.set_report("t001", "s001", "Math", "85")

    assert response.error is ErrorCode.INVALID_FIELD_VALUE


def test_out_of_range_checked_before_subject_membership(staffed_registry):
    response = staffed_registry.set_report("t002", "s001", "Math", 101)

    assert response.error is ErrorCode.OUT_OF_RANGE


def test_get_reports_for_student(staffed_registry):
    staffed_registry.register_new_student(H, "s002", "Paul", "7A")
    staffed_registry.set_report("t001", "s001", "Math", 60)
    staffed_registry.set_report("t001", "s002", "Math", 70)

    response = staffed_registry.get_reports_for_student("s002")

    assert [r.score for r in response.data["records"]] == [70]
    assert staffed_registry.get_reports_for_student("s404").error is (
        ErrorCode.NOT_FOUND
    )


# === read accessors ===


def test_accessors_return_creation_order(staffed_registry):
    staffed_registry.register_new_student(H, "s003", "Zed")
    staffed_registry.register_new_student(H, "s002", "Amy")
    staffed_registry.update_student(H, "s001", "Sean Renamed")
    staffed_registry.deactivate_person(H, "s003")

    ids = [s.id for s in staffed_registry.list_students().data["records"]]

    assert ids == ["s001", "s003", "s002"]


def test_accessors_return_copies(staffed_registry):
    teachers = staffed_registry.list_teachers().data["records"]
    teachers[0].deactivate()
    teachers.clear()

    assert len(staffed_registry.list_teachers().data["records"]) == 2
    assert staffed_registry.find_teacher_by_id("t001").data["record"].is_active


def test_find_returns_copy(staffed_registry):
    subject = staffed_registry.find_subject_by_name("Math").data["record"]
    subject.teachers = ["t002"]

    assert staffed_registry.find_subject_by_name("Math").data["record"].teachers == [
        "t001"
    ]


def test_role_of(staffed_registry):
    assert staffed_registry.role_of(H) == "headmaster"
    assert staffed_registry.role_of("t001") == "teacher"
    assert staffed_registry.role_of("s001") == "student"
    assert staffed_registry.role_of("nobody") is None



def test_record_counts(staffed_registry):
    staffed_registry.set_report("t001", "s001", "Math", 85)

    assert staffed_registry.record_counts() == {
        "teachers": 2,
        "classes": 1,
        "subjects": 1,
        "students": 1,
        "reports": 1,
    }

# === invariants ===


def test_teacher_and_student_ids_stay_disjoint(staffed_registry):
    attempts = [
        lambda: staffed_registry.register_new_teacher(H, "s001", "x"),
        lambda: staffed_registry.register_new_student(H, "t002", "x"),
        lambda: staffed_registry.register_new_teacher("s001", "s001", "x"),
        lambda: staffed_registry.register_new_student("t001", "t001", "x"),
        lambda: staffed_registry.register_new_teacher(H, "p001", "x"),
        lambda: staffed_registry.register_new_student(H, "p001", "x"),
    ]

    for attempt in attempts:
        attempt()

    teacher_ids = {t.id for t in staffed_registry.list_teachers().data["records"]}
    student_ids = {s.id for s in staffed_registry.list_students().data["records"]}

    assert teacher_ids.isdisjoint(student_ids)
    assert "p001" in teacher_ids


def test_rejections_leave_state_unchanged(staffed_registry):
    before = state_of(staffed_registry)

    rejected = [
        staffed_registry.change_headmaster("t001", "t001"),
        staffed_registry.register_new_teacher(H, "t001", "x"),
        staffed_registry.activate_teacher("t001", "t002"),
        staffed_registry.deactivate_person("t002", "s001"),
        staffed_registry.register_new_class(H, "8B", "t404"),
        staffed_registry.change_homeroom_teacher(H, "7A", "t001"),
        staffed_registry.register_new_subject(H, "Art", ["t404"]),
        staffed_registry.update_subject(H, "Math", ["t404"]),
        staffed_registry.register_new_student(H, "s002", ""),
        staffed_registry.update_student("s001", "s001", "x"),
        staffed_registry.activate_student("s001", "s001"),
        staffed_registry.set_report("t002", "s001", "Math", 50),
    ]

    assert not any(response.success for response in rejected)
    assert state_of(staffed_registry) == before


def test_rejection_is_logged(staffed_registry, caplog):
    with caplog.at_level(logging.WARNING, logger="models.registry"):
        staffed_registry.set_report("t002", "s001", "Math", 50)

    assert "set_report rejected" in caplog.text
    assert "NOT_TEACHING_SUBJECT" in caplog.text


# === concurrency ===


def test_concurrent_registrations_are_serialized(registry):
    def register_batch(batch):
        for i in range(25):
            registry.register_new_teacher(H, f"t{batch}-{i}", "Teacher")
            registry.list_teachers()

    threads = [threading.Thread(target=register_batch, args=(b,)) for b in range(8)]

    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(registry.list_teachers().data["records"]) == 200


def test_concurrent_duplicate_registration_succeeds_once(registry):
    results = []
    barrier = threading.Barrier(8)

    def register():
        barrier.wait()
        results.append(registry.register_new_teacher(H, "t001", "Ada"))

    threads = [threading.Thread(target=register) for _ in range(8)]

    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sum(response.success for response in results) == 1
    assert all(
        response.error is ErrorCode.DUPLICATE_ID
        for response in results
        if not response.success
    )


# === persistence ===


def test_create_saves_to_disk():
    with tempfile.TemporaryDirectory() as temp_dir:
        response = Registry.create(H, temp_dir)

        assert response.success
        assert not response.data["registry"].has_unsaved_changes

        for filename in (
            "metadata.json",
            "teachers.json",
            "classes.json",
            "subjects.json",
            "students.json",
            "reports.json",
        ):
            assert os.path.exists(os.path.join(temp_dir, filename))


def test_save_without_path_fails(registry):
    response = registry.save()

    assert response.error is ErrorCode.MISSING_REQUIRED_FIELD


def test_save_and_load(staffed_registry):
    staffed_registry.register_new_student(H, "s002", "Paul")
    staffed_registry.set_report("t001", "s001", "Math", 85)
    staffed_registry.set_report("t001", "s001", "Math", 85)
    staffed_registry.deactivate_person(H, "t001")

    with tempfile.TemporaryDirectory() as temp_dir:
        save_response = staffed_registry.save(temp_dir)

        assert save_response.success
        assert not staffed_registry.has_unsaved_changes

        load_response = Registry.load(temp_dir)

    assert load_response.success
    loaded = load_response.data["registry"]

    assert state_of(loaded) == state_of(staffed_registry)
    assert loaded.created_at == staffed_registry.created_at
    assert not loaded.has_unsaved_changes


def test_save_and_load_keeps_legacy_guard():
    with tempfile.TemporaryDirectory() as temp_dir:
        Registry.create(H, temp_dir, legacy_homeroom_guard=True)

        loaded = Registry.load(temp_dir).data["registry"]

    assert loaded.legacy_homeroom_guard


def test_saved_students_file(staffed_registry):
    with tempfile.TemporaryDirectory() as temp_dir:
        staffed_registry.save(temp_dir)

        with open(os.path.join(temp_dir, "students.json")) as f:
            data = json.load(f)

    assert data == [
        {"id": "s001", "name": "Sean", "class_name": "7A", "status": "Active"}
    ]


def test_load_rejects_broken_reference(staffed_registry):
    with tempfile.TemporaryDirectory() as temp_dir:
        staffed_registry.save(temp_dir)

        with open(os.path.join(temp_dir, "students.json"), "w") as f:
            json.dump(
                [{"id": "s009", "name": "Ghost", "class_name": "9Z", "status": "Active"}],
                f,
            )

        response = Registry.load(temp_dir)

    assert response.error is ErrorCode.INVALID_FIELD_VALUE
    assert "9Z" in response.detail


def test_load_rejects_overlapping_ids(staffed_registry):
    with tempfile.TemporaryDirectory() as temp_dir:
        staffed_registry.save(temp_dir)

        with open(os.path.join(temp_dir, "students.json"), "w") as f:
            json.dump([{"id": "t001", "name": "Ada", "status": "Active"}], f)

        response = Registry.load(temp_dir)

    assert response.error is ErrorCode.INVALID_FIELD_VALUE


def test_load_rejects_malformed_json(staffed_registry):
    with tempfile.TemporaryDirectory() as temp_dir:
        staffed_registry.save(temp_dir)

        with open(os.path.join(temp_dir, "reports.json"), "w") as f:
            f.write("[{not json")

        response = Registry.load(temp_dir)

    assert response.error is ErrorCode.INVALID_INPUT


def test_load_rejects_missing_headmaster(staffed_registry):
    with tempfile.TemporaryDirectory() as temp_dir:
        staffed_registry.save(temp_dir)

        with open(os.path.join(temp_dir, "metadata.json"), "w") as f:
            json.dump({"legacy_homeroom_guard": False}, f)

        response = Registry.load(temp_dir)

    assert response.error is ErrorCode.MISSING_REQUIRED_FIELD


def test_load_rejects_non_list_collection(staffed_registry):
    with tempfile.TemporaryDirectory() as temp_dir:
        staffed_registry.save(temp_dir)

        with open(os.path.join(temp_dir, "teachers.json"), "w") as f:
            json.dump({"t001": "Ada"}, f)

        response = Registry.load(temp_dir)

    assert response.error is ErrorCode.INVALID_FIELD_VALUE


def test_load_rejects_non_boolean_legacy_guard(staffed_registry):
    with tempfile.TemporaryDirectory() as temp_dir:
        staffed_registry.save(temp_dir)

        with open(os.path.join(temp_dir, "metadata.json"), "w") as f:
            json.dump({"headmaster": H, "legacy_homeroom_guard": "false"}, f)

        response = Registry.load(temp_dir)

    assert response.error is ErrorCode.INVALID_FIELD_VALUE
    assert "legacy_homeroom_guard" in response.detail


def test_rejected_class_name_keeps_registry_loadable(staffed_registry):
    staffed_registry.register_new_student(H, "s002", "Paul", None)
    staffed_registry.update_student(H, "s001", class_name=None)

    with tempfile.TemporaryDirectory() as temp_dir:
        staffed_registry.save(temp_dir)

        response = Registry.load(temp_dir)

    assert response.success
    assert state_of(response.data["registry"]) == state_of(staffed_registry)
