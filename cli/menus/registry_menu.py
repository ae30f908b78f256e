# cli/menus/registry_menu.py

"""
Registry menu for the School Registry CLI.

Provides calls to the People, Organization, and Reports menus, as well as options to
switch the acting identity, view a summary, and save the registry.
"""

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.menus import organization_menu, people_menu, reports_menu
from cli.session import Session


def run(session: Session) -> None:
    """
    Top-level loop with dispatch for the Registry menu.

    Args:
        session (Session): The active registry and acting identity.

    Raises:
        RuntimeError: If the menu response is unrecognized.

    Notes:
        - The title is rebuilt on every pass so it reflects the current acting identity.
        - The finally block guarantees a check for unsaved changes before returning.
    """
    options = [
        ("Manage People", lambda: people_menu.run(session)),
        ("Manage Organization", lambda: organization_menu.run(session)),
        ("Reports", lambda: reports_menu.run(session)),
        ("View Registry Summary", lambda: view_summary(session)),
        ("Switch Acting Identity", lambda: switch_caller(session)),
        ("Save Registry", lambda: helpers.display_response(session.registry.save())),
    ]
    zero_option = "Return to Start Menu"

    try:
        while True:
            title = formatters.format_banner_text(
                f"Acting as {session.caller_label}", width=50
            )
            menu_response = helpers.display_menu(title, options, zero_option)

            if menu_response is MenuSignal.EXIT:
                break

            elif callable(menu_response):
                menu_response()

            else:
                raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")

    finally:
        helpers.prompt_if_dirty(session.registry)

    helpers.returning_to("Start Menu")


def view_summary(session: Session) -> None:
    print(f"\n{model_formatters.format_registry_summary(session.registry)}")


def switch_caller(session: Session) -> None:
    caller = helpers.prompt_user_input_or_cancel(
        "Enter the identity to act as (leave blank to cancel):"
    )

    if caller is MenuSignal.CANCEL:
        return helpers.returning_without_changes()

    session.caller = str(caller)
    print(f"\nNow acting as {session.caller_label}.")
