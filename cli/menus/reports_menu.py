# cli/menus/reports_menu.py

"""
Reports menu for the School Registry CLI.

Recording a report requires the acting identity to be an active teacher of the subject;
viewing reports is open to anyone.
"""

from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.session import Session


def run(session: Session) -> None:
    title = formatters.format_banner_text("Reports")
    options = [
        ("Record Report", lambda: record_report(session)),
        ("View All Reports", lambda: view_reports(session)),
        ("View Reports for Student", lambda: view_reports_for_student(session)),
    ]
    zero_option = "Return to Registry menu"

    try:
        helpers.run_menu_loop(title, options, zero_option)

    finally:
        helpers.prompt_if_dirty(session.registry)

    helpers.returning_to("Registry menu")


def record_report(session: Session) -> None:
    """
    Prompts for a student, subject, and score, then records a report as the acting identity.

    Notes:
        - Each call appends a new report; earlier reports for the same student and subject are kept.
    """
    student_id = helpers.prompt_user_input_or_cancel(
        "Enter the student's id (leave blank to cancel):"
    )

    if student_id is MenuSignal.CANCEL:
        return helpers.returning_without_changes()
    student_id = cast(str, student_id)

    subject_name = helpers.prompt_user_input_or_cancel(
        "Enter the subject name (leave blank to cancel):"
    )

    if subject_name is MenuSignal.CANCEL:
        return helpers.returning_without_changes()
    subject_name = cast(str, subject_name)

    score = helpers.prompt_score_or_cancel()

    if score is MenuSignal.CANCEL:
        return helpers.returning_without_changes()

    helpers.display_response(
        session.registry.set_report(
            session.caller, student_id, subject_name, cast(int, score)
        )
    )


def view_reports(session: Session) -> None:
    helpers.display_record_listing(
        "Reports",
        session.registry.list_reports(),
        model_formatters.format_report_oneline,
    )


def view_reports_for_student(session: Session) -> None:
    student_id = helpers.prompt_user_input_or_cancel(
        "Enter the student's id (leave blank to cancel):"
    )

    if student_id is MenuSignal.CANCEL:
        return

    helpers.display_record_listing(
        f"Reports for {student_id}",
        session.registry.get_reports_for_student(cast(str, student_id)),
        model_formatters.format_report_oneline,
    )
