# core/formatters.py

# all pure utilities & date helpers
# must never import from models!

import datetime

DATE_INPUT_FORMAT = "%d-%m-%Y"

# === generic text formatters ===


def format_banner_text(title: str, width: int = 40) -> str:
    line = "=" * width
    centered_title = f"{title:^{width}}"

    return f"{line}\n{centered_title}\n{line}"


def format_tags(tags) -> str:
    return "".join(f"[{tag}]" for tag in sorted(tags)) or "[NO TAGS]"


def format_score(score: float | None) -> str:
    return "[UNGRADED]" if score is None else f"{score:.2f}"


# === date formatters ===


def parse_date_input(date_str: str) -> datetime.date:
    """
    Parses a command-line date in DD-MM-YYYY format.

    Raises:
        ValueError: If the string does not match the expected format.
    """
    try:
        return datetime.datetime.strptime(date_str.strip(), DATE_INPUT_FORMAT).date()

    except ValueError:
        raise ValueError(
            f"Invalid date '{date_str}'. Dates must be formatted as DD-MM-YYYY."
        ) from None


def format_deadline(deadline: datetime.date) -> str:
    return deadline.strftime(DATE_INPUT_FORMAT)

