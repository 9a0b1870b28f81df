# cli/parser.py

"""
Tokenizes prefixed command arguments such as `n/CS2103T T12 t/CS t/Tutorial`.

A prefix is only recognized at the start of the argument string or after whitespace, so
values may contain slashes (e.g. an address like `Blk 30/2`). Text before the first prefix
is the preamble.
"""

from __future__ import annotations

import datetime
import re

import core.formatters as formatters
from core.exceptions import ValidationError

PREFIX_NAME = "n/"
PREFIX_PHONE = "p/"
PREFIX_EMAIL = "e/"
PREFIX_ADDRESS = "a/"
PREFIX_TAG = "t/"
PREFIX_GROUP = "g/"
PREFIX_PERSON = "P/"
PREFIX_WEEK = "w/"
PREFIX_ASSIGNMENT = "A/"
PREFIX_SCORE = "s/"
PREFIX_DATE = "d/"
PREFIX_NEW_NAME = "N/"
PREFIX_LATE_PENALTY = "l/"
PREFIX_ROLE = "r/"

ALL_PREFIXES = (
    PREFIX_NAME,
    PREFIX_PHONE,
    PREFIX_EMAIL,
    PREFIX_ADDRESS,
    PREFIX_TAG,
    PREFIX_GROUP,
    PREFIX_PERSON,
    PREFIX_WEEK,
    PREFIX_ASSIGNMENT,
    PREFIX_SCORE,
    PREFIX_DATE,
    PREFIX_NEW_NAME,
    PREFIX_LATE_PENALTY,
    PREFIX_ROLE,
)

_PREFIX_PATTERN = re.compile(
    r"(?:^|(?<=\s))(" + "|".join(re.escape(p) for p in ALL_PREFIXES) + ")"
)


class ParseError(ValueError):
    """Raised when command text cannot be turned into a command."""


class ArgumentMap:

    def __init__(self, preamble: str, values: dict[str, list[str]]):
        self._preamble = preamble
        self._values = values

    @property
    def preamble(self) -> str:
        return self._preamble

    def has(self, prefix: str) -> bool:
        return prefix in self._values

    def get_value(self, prefix: str) -> str | None:
        values = self._values.get(prefix)
        return values[-1] if values else None

    def get_all_values(self, prefix: str) -> list[str]:
        return list(self._values.get(prefix, []))

    def require(self, *prefixes: str) -> None:
        missing = [p for p in prefixes if p not in self._values]
        if missing:
            raise ParseError(f"Missing required field(s): {' '.join(missing)}")

    def verify_no_duplicates(self, *prefixes: str) -> None:
        duplicated = [p for p in prefixes if len(self._values.get(p, [])) > 1]
        if duplicated:
            raise ParseError(
                "Multiple values specified for the following single-valued field(s): "
                + " ".join(duplicated)
            )

    def verify_no_preamble(self) -> None:
        if self._preamble:
            raise ParseError(f"Unexpected text before the first field: '{self._preamble}'")


def split_command(command_text: str) -> tuple[str, str]:
    """Splits user input into the command word and the remaining argument text."""
    command_text = command_text.strip()
    if not command_text:
        raise ParseError("Empty command.")

    command_word, _, args = command_text.partition(" ")

    return command_word, args.strip()


def tokenize(args: str) -> ArgumentMap:
    """
    Splits argument text into a preamble and a mapping of prefix -> values, in order of appearance.

    Values are stripped of surrounding whitespace; an empty value (e.g. a bare `t/`) is kept as "".
    """
    matches = list(_PREFIX_PATTERN.finditer(args))

    preamble_end = matches[0].start() if matches else len(args)
    preamble = args[:preamble_end].strip()

    values: dict[str, list[str]] = {}

    for i, match in enumerate(matches):
        value_end = matches[i + 1].start() if i + 1 < len(matches) else len(args)
        value = args[match.end() : value_end].strip()
        values.setdefault(match.group(1), []).append(value)

    return ArgumentMap(preamble, values)


# === value parsers ===


def parse_week(value: str) -> int:
    try:
        return int(value.strip())

    except ValueError:
        raise ParseError(f"Week must be a whole number: '{value}'") from None


def parse_float(value: str, field: str) -> float:
    try:
        return float(value.strip())

    except ValueError:
        raise ParseError(f"{field} must be a number: '{value}'") from None


def parse_date(value: str) -> datetime.date:
    try:
        return formatters.parse_date_input(value)

    except ValueError as e:
        raise ParseError(str(e)) from None


def parse_tags(values: list[str]) -> list[str] | None:
    """
    Turns repeated `t/` values into a tag list.

    A single bare `t/` clears all tags (returns an empty list); no `t/` at all returns None.
    """
    if not values:
        return None

    if values == [""]:
        return []

    if "" in values:
        raise ValidationError("Tags cannot be blank.")

    return values
