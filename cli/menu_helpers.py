# cli/menu_helpers.py

"""
Helper functions for CLI menus and user interaction in the School Registry application.

This module provides utilities for:
- Displaying interactive menus and record lists
- Prompting for and validating user input
- Handling confirmation flows
- Displaying standard system messages and `Response` feedback

These functions are shared across all menu modules to maintain consistent behavior and reduce duplication.
"""

from enum import Enum
from typing import Any, Callable, Iterable

import core.formatters as formatters
from core.response import Response
from models.registry import Registry


class MenuSignal(Enum):
    CANCEL = "CANCEL"
    EXIT = "EXIT"


# === display methods ===


def display_menu(
    title: str,
    options: list[tuple[str, Callable[..., Any]]],
    zero_option: str = "Return",
) -> MenuSignal | Callable[..., Any]:
    """
    Displays a numbered CLI menu and returns the selected action.

    Args:
        title (str): The heading displayed above the menu options.
        options (list[tuple[str, Callable[..., Any]]]): A list of (label, action) pairs to present.
        zero_option (str, optional): The label for the "cancel" or "exit" option. Defaults to "Return".

    Returns:
        MenuSignal.EXIT if the user selects the zero option.
        Callable[..., Any]: The function associated with the selected menu item.

    Notes:
        - Menu selection is repeated until a valid choice is made.
        - User input is matched by menu index, not by label.
    """
    while True:
        print(f"\n{title}")

        for i, (label, _) in enumerate(options, 1):
            print(f"{i}. {label}")

        print(f"0. {zero_option}")

        choice = prompt_user_input("\nSelect an option: ")

        if choice == "0":
            return MenuSignal.EXIT

        try:
            # casts choice to int and adjusts for zero-index, retrieves action from tuple
            return options[int(choice) - 1][1]

        except (ValueError, IndexError):
            print("Invalid selection. Please try again.")


def run_menu_loop(
    title: str,
    options: list[tuple[str, Callable[[], Any]]],
    zero_option: str,
) -> None:
    """
    Repeats `display_menu()` and calls the chosen action until the user selects the zero option.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    while True:
        menu_response = display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            break

        elif callable(menu_response):
            menu_response()

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")


def display_results(
    results: Iterable[Any],
    show_index: bool = False,
    formatter: Callable[[Any], str] = lambda x: str(x),
) -> None:
    for i, result in enumerate(results, 1):
        prefix = f"{i:>2}. " if show_index else ""
        print(f"{prefix}{formatter(result)}")


def display_record_listing(
    title: str,
    response: Response,
    formatter: Callable[[Any], str] = lambda x: str(x),
) -> None:
    """
    Prints the records carried by a listing `Response` under a banner, in creation order.

    Args:
        title (str): The banner heading, e.g. "Teachers".
        response (Response): The result of a `Registry.list_*()` call.
        formatter (Callable[[Any], str], optional): Formats each record for output. Defaults to str().
    """
    if not response.success:
        display_response_failure(response)
        return

    records = response.data["records"]

    print(f"\n{formatters.format_banner_text(title)}")

    if not records:
        print(f"\nThere are no {title.lower()}.")
        return

    display_results(records, True, formatter)


# === prompt user input methods ===


# Prompt Helpers
#
# These functions provide a consistent way to handle user input and confirmation prompts.
#
# Conventions:
# - `prompt_user_input()` is the base function, used by all others to standardize the UI format.
# - Empty string responses are overloaded for control signals:
#     - `prompt_user_input_or_cancel()` returns `MenuSignal.CANCEL` on blank input.
#     - `prompt_user_input_or_none()` returns `None`.
#     - `prompt_user_input_or_blank()` returns "" (the registry's "leave unchanged" sentinel).
# - `confirm_action()` and its variants loop until the user enters a valid yes/no response.


def confirm_action(prompt: str) -> bool:
    while True:
        choice = prompt_user_input(f"{prompt} (y/n): ").lower()

        if choice == "y" or choice == "yes":
            return True

        elif choice == "n" or choice == "no":
            return False

        else:
            print("Invalid selection. Please try again.")


def confirm_unsaved_changes() -> bool:
    return confirm_action(
        "There are unsaved changes to the Registry. Do you want to save now?"
    )


def prompt_if_dirty(registry: Registry) -> None:
    if registry.has_unsaved_changes and confirm_unsaved_changes():
        display_response(registry.save())


def prompt_user_input(prompt: str) -> str:
    return input(f"\n{prompt}\n  >> ").strip()


def prompt_user_input_or_cancel(prompt: str) -> str | MenuSignal:
    response = prompt_user_input(prompt)
    return MenuSignal.CANCEL if response == "" else response


def prompt_user_input_or_none(prompt: str) -> str | None:
    response = prompt_user_input(prompt)
    return None if response == "" else response


def prompt_user_input_or_blank(prompt: str) -> str:
    return prompt_user_input(prompt)


def prompt_score_or_cancel() -> int | MenuSignal:
    while True:
        score_input = prompt_user_input_or_cancel(
            "Enter the score from 0 to 100 (leave blank to cancel):"
        )

        if isinstance(score_input, MenuSignal):
            return score_input

        try:
            return int(score_input)

        except ValueError:
            print("\n[ERROR] The score must be a whole number. Please try again.")


# === often used messages ===


def returning_without_changes() -> None:
    print("\nReturning without changes.")


def returning_to(destination: str) -> None:
    print(f"\nReturning to {destination}.")


def display_response(response: Response) -> None:
    """
    Prints the detail of a successful `Response`, or delegates to `display_response_failure()`.
    """
    if response.success:
        print(f"\n{response.detail or 'Done.'}")
    else:
        display_response_failure(response)


def display_response_failure(response: Response) -> None:
    """
    Displays a formatted error message based on a failed `Response`.

    Args:
        response (Response): The response object to inspect.

    Notes:
        - Does nothing if the response was successful.
        - Enum error codes are printed by name; string errors are printed as-is.
    """
    if response.success:
        return

    error_label = (
        response.error.name if isinstance(response.error, Enum) else str(response.error)
    )

    print(f"\n[ERROR: {error_label}] {response.detail}")
