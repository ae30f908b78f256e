# cli/main.py

"""
Start Menu for the School Registry CLI.

Provides functions for creating or loading a Registry and choosing the identity to act as.
"""

import logging
import os
from textwrap import dedent
from typing import cast

import cli.menu_helpers as helpers
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.menus import registry_menu
from cli.path_utils import dir_is_empty, resolve_save_dir
from cli.session import Session
from models.registry import Registry

LOG_LEVEL_ENV_VAR = "SCHOOL_REGISTRY_LOG_LEVEL"


def configure_logging() -> None:
    """
    Configures root logging once for the CLI process.

    Notes:
        - The level is read from `SCHOOL_REGISTRY_LOG_LEVEL` and defaults to WARNING,
          so routine INFO records from the registry stay out of the menus.
        - Unknown level names fall back to WARNING.
    """
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper()
    level = logging.getLevelName(level_name)

    if not isinstance(level, int):
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_cli() -> None:
    """
    Top-level loop with dispatch for the Start menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    configure_logging()

    title = formatters.format_banner_text("SCHOOL REGISTRY")
    options = [
        ("Create a new Registry", create_registry),
        ("Load an existing Registry", load_registry),
    ]
    zero_option = "Exit Program"

    while True:
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            exit_program()

        elif callable(menu_response):
            registry = menu_response()

            if registry is None:
                continue

            registry_menu.run(Session(registry, prompt_caller(registry)))

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")


def create_registry() -> Registry | None:
    """
    Prompts the user to create a new `Registry` by collecting a school name, the headmaster identity, and an optional save directory.

    Returns:
        Registry: A new `Registry` instance if successfully created.
        None: If the user cancels during input.

    Notes:
        - If the save directory input is left blank, the `Registry` will be stored in `~/Documents/SchoolRegistry/<school>`.
        - If the resolved directory exists and is not empty, the user must explicitly confirm before continuing.
        - Registry instantiation and the initial save are delegated to `Registry.create()`, which returns a structured `Response`.
    """
    while True:
        school = helpers.prompt_user_input_or_cancel(
            "Enter the school name (leave blank to cancel):"
        )

        if school is MenuSignal.CANCEL:
            return None
        school = cast(str, school)

        headmaster = helpers.prompt_user_input_or_cancel(
            "Enter the headmaster's identity (leave blank to cancel):"
        )

        if headmaster is MenuSignal.CANCEL:
            return None
        headmaster = cast(str, headmaster)

        legacy_guard = helpers.confirm_action(
            "Use the legacy homeroom guard (only re-assigning the current homeroom teacher is allowed)?"
        )

        dir_input = helpers.prompt_user_input_or_none(
            "Enter directory to save the Registry (leave blank to use default):"
        )

        dir_path = resolve_save_dir(school, dir_input)

        if not dir_is_empty(dir_path):
            warning_banner = formatters.format_banner_text("WARNING!")
            print(f"\n{warning_banner}")
            print(
                dedent(
                    """\
                    The selected directory is not empty and may contain existing data.
                    It is recommended to store new Registries in an empty directory.
                    Writing to this directory may result in the loss of existing data."""
                )
            )

            if not helpers.confirm_action("\nDo you wish to continue?"):
                continue

        print("\nCreating Registry ...")

        registry_response = Registry.create(
            headmaster, dir_path, legacy_homeroom_guard=legacy_guard
        )

        if not registry_response.success:
            helpers.display_response_failure(registry_response)
            continue

        print("... Registry created successfully.")

        return registry_response.data["registry"]


def load_registry() -> Registry | None:
    """
    Prompts the user to load a `Registry` from a specified directory path.

    Returns:
        Registry: A `Registry` instance if loading succeeds.
        None: If the user cancels.

    Notes:
        - Relative paths and `~` are expanded to absolute paths.
        - The target path must be an existing directory; otherwise, the user will be prompted again.
    """
    while True:
        dir_path = helpers.prompt_user_input_or_cancel(
            "Enter path to Registry directory (leave blank to cancel):"
        )

        if dir_path is MenuSignal.CANCEL:
            return None
        dir_path = cast(str, dir_path)

        dir_path = os.path.abspath(os.path.expanduser(dir_path))

        if not os.path.isdir(dir_path):
            print(f"\nDirectory not found: {dir_path}. Please try again.")
            continue

        print("\nLoading Registry ...")

        registry_response = Registry.load(dir_path)

        if not registry_response.success:
            helpers.display_response_failure(registry_response)
            continue

        print("... Registry loaded successfully.")

        return registry_response.data["registry"]


def prompt_caller(registry: Registry) -> str:
    caller = helpers.prompt_user_input_or_none(
        f"Enter the identity to act as (leave blank for the headmaster, {registry.headmaster}):"
    )

    return registry.headmaster if caller is None else caller


def exit_program():
    """
    Displays an exit banner and terminates the CLI program.

    Raises:
        SystemExit: Always raised to immediately terminate execution.
    """
    exit_banner = formatters.format_banner_text("Exiting Program")
    print(f"\n{exit_banner}\n")

    raise SystemExit


if __name__ == "__main__":
    run_cli()
