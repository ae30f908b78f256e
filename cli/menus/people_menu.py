# cli/menus/people_menu.py

"""
Manage People menu for the School Registry CLI.

This module defines the interface for teacher and student records, including:
- Registering new teachers and students
- Activating and deactivating people
- Updating a student's name or class
- Viewing teachers and students

All operations are routed through the `Registry` on behalf of the session's acting identity,
so authorization failures are reported exactly as the registry returns them.
"""

from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.session import Session


def run(session: Session) -> None:
    """
    Top-level loop with dispatch for the Manage People menu.

    Notes:
        - The finally block guarantees a check for unsaved changes before returning.
    """
    title = formatters.format_banner_text("Manage People")
    options = [
        ("Register Teacher", lambda: register_teacher(session)),
        ("Activate Teacher", lambda: activate_teacher(session)),
        ("Register Student", lambda: register_student(session)),
        ("Update Student", lambda: update_student(session)),
        ("Activate Student", lambda: activate_student(session)),
        ("Deactivate Teacher or Student", lambda: deactivate_person(session)),
        ("View Teachers", lambda: view_teachers(session)),
        ("View Students", lambda: view_students(session)),
    ]
    zero_option = "Return to Registry menu"

    try:
        helpers.run_menu_loop(title, options, zero_option)

    finally:
        helpers.prompt_if_dirty(session.registry)

    helpers.returning_to("Registry menu")


# === teachers ===


def register_teacher(session: Session) -> None:
    id = helpers.prompt_user_input_or_cancel(
        "Enter the new teacher's id (leave blank to cancel):"
    )

    if id is MenuSignal.CANCEL:
        return helpers.returning_without_changes()
    id = cast(str, id)

    name = helpers.prompt_user_input_or_cancel(
        "Enter the teacher's name (leave blank to cancel):"
    )

    if name is MenuSignal.CANCEL:
        return helpers.returning_without_changes()
    name = cast(str, name)

    helpers.display_response(
        session.registry.register_new_teacher(session.caller, id, name)
    )


def activate_teacher(session: Session) -> None:
    id = helpers.prompt_user_input_or_cancel(
        "Enter the id of the teacher to activate (leave blank to cancel):"
    )

    if id is MenuSignal.CANCEL:
        return helpers.returning_without_changes()

    helpers.display_response(
        session.registry.activate_teacher(session.caller, cast(str, id))
    )


def view_teachers(session: Session) -> None:
    helpers.display_record_listing(
        "Teachers",
        session.registry.list_teachers(),
        model_formatters.format_teacher_oneline,
    )


# === students ===


def register_student(session: Session) -> None:
    """
    Prompts for a new student's id, name, and optional class, then registers them.

    Notes:
        - A blank class name registers the student without a class.
        - The registry decides the initial status from the acting identity.
    """
    id = helpers.prompt_user_input_or_cancel(
        "Enter the new student's id (leave blank to cancel):"
    )

    if id is MenuSignal.CANCEL:
        return helpers.returning_without_changes()
    id = cast(str, id)

    name = helpers.prompt_user_input_or_cancel(
        "Enter the student's name (leave blank to cancel):"
    )

    if name is MenuSignal.CANCEL:
        return helpers.returning_without_changes()
    name = cast(str, name)

    class_name = helpers.prompt_user_input_or_blank(
        "Enter the student's class (leave blank for none):"
    )

    helpers.display_response(
        session.registry.register_new_student(session.caller, id, name, class_name)
    )


def update_student(session: Session) -> None:
    """
    Prompts for a student id and the fields to change, then updates the student.

    Notes:
        - Blank name or class input leaves that field unchanged.
    """
    id = helpers.prompt_user_input_or_cancel(
        "Enter the id of the student to update (leave blank to cancel):"
    )

    if id is MenuSignal.CANCEL:
        return helpers.returning_without_changes()
    id = cast(str, id)

    find_response = session.registry.find_student_by_id(id)

    if not find_response.success:
        return helpers.display_response_failure(find_response)

    print("\nYou are editing the following student:")
    print(model_formatters.format_student_oneline(find_response.data["record"]))

    name = helpers.prompt_user_input_or_blank(
        "Enter the new name (leave blank to keep the current name):"
    )
    class_name = helpers.prompt_user_input_or_blank(
        "Enter the new class (leave blank to keep the current class):"
    )

    if not name and not class_name:
        return helpers.returning_without_changes()

    helpers.display_response(
        session.registry.update_student(session.caller, id, name, class_name)
    )


def activate_student(session: Session) -> None:
    id = helpers.prompt_user_input_or_cancel(
        "Enter the id of the student to activate (leave blank to cancel):"
    )

    if id is MenuSignal.CANCEL:
        return helpers.returning_without_changes()

    helpers.display_response(
        session.registry.activate_student(session.caller, cast(str, id))
    )


def view_students(session: Session) -> None:
    helpers.display_record_listing(
        "Students",
        session.registry.list_students(),
        model_formatters.format_student_oneline,
    )


# === either role ===


def deactivate_person(session: Session) -> None:
    id = helpers.prompt_user_input_or_cancel(
        "Enter the id of the teacher or student to deactivate (leave blank to cancel):"
    )

    if id is MenuSignal.CANCEL:
        return helpers.returning_without_changes()
    id = cast(str, id)

    if not helpers.confirm_action(f"Deactivate {id}?"):
        return helpers.returning_without_changes()

    helpers.display_response(session.registry.deactivate_person(session.caller, id))
