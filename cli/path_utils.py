# cli/path_utils.py

import os


def sanitize_name(name: str) -> str:
    """
    Sanitizes a school name for use in file paths.

    Args:
        name (str): The input string to sanitize.

    Returns:
        A string with leading and trailing whitespace removed and internal spaces replaced with underscores.
    """
    return name.strip().replace(" ", "_")


def get_save_dir(school_name: str, user_input: str | None) -> str:
    """
    Resolves a save directory path for a new `Registry` based on user input or default location.

    Args:
        school_name (str): The school name string (sanitized).
        user_input (str | None): An optional user-specified directory path. If None or blank, the default path is used.

    Returns:
        A resolved path string. If user input is provided, it is expanded and returned directly.
        Otherwise, defaults to: `~/Documents/SchoolRegistry/<school_name>`.
    """
    if user_input is not None and user_input.strip():
        return os.path.abspath(os.path.expanduser(user_input.strip()))
    else:
        documents = os.path.join(os.path.expanduser("~"), "Documents")
        return os.path.join(documents, "SchoolRegistry", school_name)


def resolve_save_dir(school_name: str, dir_input: str | None) -> str:
    """
    Produces and ensures a valid save directory path for a new `Registry`.

    Notes:
        - Creates the directory path on disk (including parent directories) if it does not exist.
    """
    save_dir = get_save_dir(sanitize_name(school_name), dir_input)

    os.makedirs(save_dir, exist_ok=True)

    return save_dir


def dir_is_empty(dir_path: str) -> bool:
    return os.path.isdir(dir_path) and not os.listdir(dir_path)
