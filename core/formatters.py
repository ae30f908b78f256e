# core/formatters.py

# all pure text utilities
# must never import from models!

from typing import Any

# === generic text formatters ===


def format_banner_text(title: str, width: int = 40) -> str:
    line = "=" * width
    centered_title = f"{title:^{width}}"

    return f"{line}\n{centered_title}\n{line}"


def format_list_with_and(items: list[Any]) -> str:
    items = [str(item) for item in items]

    if not items:
        return ""

    if len(items) == 1:
        return items[0]

    if len(items) == 2:
        return " and ".join(items)

    return ", ".join(items[:-1]) + ", and " + items[-1]


def format_status_tag(is_active: bool) -> str:
    return "" if is_active else " [INACTIVE]"


def parse_id_list(raw: str) -> list[str]:
    """
    Splits comma-separated input into a list of ids, dropping blank entries.

    Order and duplicates are preserved.
    """
    return [part.strip() for part in raw.split(",") if part.strip()]
