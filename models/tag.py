# models/tag.py

"""
Tags are short alphanumeric labels attached to Persons and Groups (e.g. "friends", "CS").

They carry no behavior of their own, so they are stored as plain strings and validated here.
"""

from __future__ import annotations

import re
from typing import Iterable

from core.exceptions import ValidationError

TAG_CONSTRAINTS = "Tag names should be alphanumeric."


def validate_tag_input(tag: str) -> str:
    tag = tag.strip()
    if not re.fullmatch(r"[A-Za-z0-9]+", tag):
        raise ValidationError(f"Invalid tag '{tag}'. {TAG_CONSTRAINTS}")
    return tag


def validate_tags_input(tags: Iterable[str] | None) -> set[str]:
    """
    Validates every tag in an iterable and returns them as a set.

    Raises:
        ValidationError: If any tag is not alphanumeric.
    """
    if tags is None:
        return set()

    if isinstance(tags, str):
        raise ValidationError("Tags must be supplied as a collection, not a string.")

    return {validate_tag_input(tag) for tag in tags}
