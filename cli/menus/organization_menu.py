# cli/menus/organization_menu.py

"""
Manage Organization menu for the School Registry CLI.

Covers the headmaster-only structure of the school: classes and their homeroom teachers,
subjects and the teachers assigned to them, and handing over the headmaster role itself.
"""

from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.session import Session


def run(session: Session) -> None:
    title = formatters.format_banner_text("Manage Organization")
    options = [
        ("Register Class", lambda: register_class(session)),
        ("Change Homeroom Teacher", lambda: change_homeroom_teacher(session)),
        ("Register Subject", lambda: register_subject(session)),
        ("Update Subject Teachers", lambda: update_subject(session)),
        ("Change Headmaster", lambda: change_headmaster(session)),
        ("View Classes", lambda: view_classes(session)),
        ("View Subjects", lambda: view_subjects(session)),
    ]
    zero_option = "Return to Registry menu"

    try:
        helpers.run_menu_loop(title, options, zero_option)

    finally:
        helpers.prompt_if_dirty(session.registry)

    helpers.returning_to("Registry menu")


# === classes ===


def register_class(session: Session) -> None:
    name = helpers.prompt_user_input_or_cancel(
        "Enter the class name (leave blank to cancel):"
    )

    if name is MenuSignal.CANCEL:
        return helpers.returning_without_changes()
    name = cast(str, name)

    homeroom_id = helpers.prompt_user_input_or_cancel(
        "Enter the homeroom teacher's id (leave blank to cancel):"
    )

    if homeroom_id is MenuSignal.CANCEL:
        return helpers.returning_without_changes()

    helpers.display_response(
        session.registry.register_new_class(
            session.caller, name, cast(str, homeroom_id)
        )
    )


def change_homeroom_teacher(session: Session) -> None:
    name = helpers.prompt_user_input_or_cancel(
        "Enter the class name (leave blank to cancel):"
    )

    if name is MenuSignal.CANCEL:
        return helpers.returning_without_changes()
    name = cast(str, name)

    teacher_id = helpers.prompt_user_input_or_cancel(
        "Enter the new homeroom teacher's id (leave blank to cancel):"
    )

    if teacher_id is MenuSignal.CANCEL:
        return helpers.returning_without_changes()

    helpers.display_response(
        session.registry.change_homeroom_teacher(
            session.caller, name, cast(str, teacher_id)
        )
    )


def view_classes(session: Session) -> None:
    helpers.display_record_listing(
        "Classes",
        session.registry.list_classes(),
        model_formatters.format_class_oneline,
    )


# === subjects ===


def prompt_teacher_ids() -> list[str]:
    raw = helpers.prompt_user_input_or_blank(
        "Enter the teacher ids, separated by commas (leave blank for none):"
    )
    return formatters.parse_id_list(raw)


def register_subject(session: Session) -> None:
    name = helpers.prompt_user_input_or_cancel(
        "Enter the subject name (leave blank to cancel):"
    )

    if name is MenuSignal.CANCEL:
        return helpers.returning_without_changes()

    teacher_ids = prompt_teacher_ids()

    helpers.display_response(
        session.registry.register_new_subject(
            session.caller, cast(str, name), teacher_ids
        )
    )


def update_subject(session: Session) -> None:
    """
    Prompts for a subject and its complete new teacher list.

    Notes:
        - The new list replaces the old one entirely, so every teacher who should remain must be re-entered.
    """
    name = helpers.prompt_user_input_or_cancel(
        "Enter the subject name (leave blank to cancel):"
    )

    if name is MenuSignal.CANCEL:
        return helpers.returning_without_changes()
    name = cast(str, name)

    find_response = session.registry.find_subject_by_name(name)

    if not find_response.success:
        return helpers.display_response_failure(find_response)

    print("\nCurrent teachers:")
    print(model_formatters.format_subject_oneline(find_response.data["record"]))

    teacher_ids = prompt_teacher_ids()

    if not helpers.confirm_action("Replace the teacher list?"):
        return helpers.returning_without_changes()

    helpers.display_response(
        session.registry.update_subject(session.caller, name, teacher_ids)
    )


def view_subjects(session: Session) -> None:
    helpers.display_record_listing(
        "Subjects",
        session.registry.list_subjects(),
        model_formatters.format_subject_oneline,
    )


# === headmaster ===


def change_headmaster(session: Session) -> None:
    new_id = helpers.prompt_user_input_or_cancel(
        "Enter the new headmaster's id (leave blank to cancel):"
    )

    if new_id is MenuSignal.CANCEL:
        return helpers.returning_without_changes()
    new_id = cast(str, new_id)

    print(
        f"\n{formatters.format_banner_text('CAUTION!')}\n"
        "You will no longer be able to perform headmaster actions as this identity."
    )

    if not helpers.confirm_action(f"Hand the headmaster role to {new_id}?"):
        return helpers.returning_without_changes()

    helpers.display_response(
        session.registry.change_headmaster(session.caller, new_id)
    )
