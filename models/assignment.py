# models/assignment.py

"""
The Assignment model represents a gradable task scoped to a single Group.

Each assignment has a name (unique within its group), a deadline date, and a late penalty
multiplier applied to scores recorded after the deadline. Assignments compare by identity:
the owning Group enforces name uniqueness, and member grade maps are keyed by the object itself
so renaming an assignment never orphans its grades.
"""

from __future__ import annotations

import datetime
import math
import re
from typing import Any

from core.exceptions import ValidationError

DEFAULT_PENALTY = 1.0


class Assignment:

    def __init__(
        self,
        name: str,
        deadline: datetime.date,
        penalty: float = DEFAULT_PENALTY,
    ):
        # fields use setter methods for validation
        self.name = name
        self.deadline = deadline
        self.penalty = penalty

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._name = Assignment.validate_name_input(name)

    @property
    def deadline(self) -> datetime.date:
        return self._deadline

    @deadline.setter
    def deadline(self, deadline: datetime.date) -> None:
        self._deadline = Assignment.validate_deadline_input(deadline)

    @property
    def deadline_iso(self) -> str:
        return self._deadline.isoformat()

    @property
    def penalty(self) -> float:
        return self._penalty

    @penalty.setter
    def penalty(self, penalty: Any) -> None:
        self._penalty = Assignment.validate_penalty_input(penalty)

    def is_overdue(self, today: datetime.date | None = None) -> bool:
        today = today or datetime.date.today()
        return today > self._deadline

    def to_dict(self) -> dict:
        return {
            "name": self._name,
            "deadline": self.deadline_iso,
            "penalty": self._penalty,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Assignment:
        return cls(
            name=data["name"],
            deadline=datetime.date.fromisoformat(data["deadline"]),
            penalty=data.get("penalty", DEFAULT_PENALTY),
        )

    def __repr__(self) -> str:
        return f"Assignment({self._name}, {self.deadline_iso}, {self._penalty})"

    def __str__(self) -> str:
        return f"ASSIGNMENT: name: {self._name}, deadline: {self.deadline_iso}, penalty: {self._penalty}"

    # === data validators ===

    @staticmethod
    def validate_name_input(name: str) -> str:
        name = name.strip()
        if not re.fullmatch(r"[A-Za-z0-9][A-Za-z0-9 ]*", name):
            raise ValidationError(
                "Invalid assignment name. Names should be alphanumeric and may contain spaces."
            )
        return name

    @staticmethod
    def validate_deadline_input(deadline: Any) -> datetime.date:
        # datetime is a subclass of date; keep only the calendar day
        if isinstance(deadline, datetime.datetime):
            return deadline.date()

        if not isinstance(deadline, datetime.date):
            raise ValidationError("Invalid deadline. Deadline must be a date.")

        return deadline

    @staticmethod
    def validate_penalty_input(penalty: Any) -> float:
        """
        Validates and normalizes input for an `Assignment` late penalty multiplier.

        Accepts any input, and then:
            - Casts to float.
            - Ensures the number is finite.
            - Ensures it is non-negative.

        Args:
            penalty (Any): The input value to validate.

        Returns:
            The normalized penalty value (float).

        Raises:
            ValidationError: If the input cannot be cast to float, is non-finite, or is less than zero.
        """
        try:
            penalty = float(penalty)

        except (TypeError, ValueError):
            raise ValidationError("Invalid input. Penalty must be a number.") from None

        if not math.isfinite(penalty):
            raise ValidationError("Invalid input. Penalty must be a finite number.")

        if penalty < 0:
            raise ValidationError("Invalid input. Penalty cannot be less than zero.")

        return penalty
