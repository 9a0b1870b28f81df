# models/group_member_detail.py

"""
Represents one Person's participation in one Group.

Each `GroupMemberDetail` records:
- the member's `Role` within the group (Student by default)
- a fixed 13-week attendance record, indexed from week 1
- the member's score for each of the group's assignments

Includes functionality for:
- Marking and unmarking attendance with week bounds checking
- Grading assignments with a flat late penalty
- Serializing to and from JSON-compatible dictionaries

Notes:
- The detail holds a weak reference back to its owning Group; the Group owns the detail.
- Late grading multiplies the raw score by the assignment penalty once the deadline has passed.
  How late the grade is recorded does not matter.
"""

from __future__ import annotations

import datetime
import math
import weakref
from enum import Enum
from typing import TYPE_CHECKING, Any

from core.exceptions import ValidationError
from models.assignment import Assignment
from models.person import Person

if TYPE_CHECKING:
    from models.group import Group

WEEKS_PER_SEMESTER = 13
WEEK_CONSTRAINTS = f"Week number must be between 1 and {WEEKS_PER_SEMESTER} (inclusive)!"


class Role(str, Enum):
    STUDENT = "Student"
    TEACHING_ASSISTANT = "TA"
    LECTURER = "Lecturer"

    @classmethod
    def from_input(cls, value: str) -> Role:
        normalized = value.strip().lower()
        for role in cls:
            if normalized in (role.value.lower(), role.name.lower()):
                return role
        raise ValidationError(
            f"Invalid role '{value}'. Role must be one of: Student, TA, Lecturer."
        )


class GroupMemberDetail:

    def __init__(
        self,
        person: Person,
        group: Group | None = None,
        role: Role = Role.STUDENT,
        attendance: list[bool] | None = None,
    ):
        self._person = person
        self._group_ref: weakref.ref[Group] | None = (
            weakref.ref(group) if group is not None else None
        )
        self._role = role
        self._attendance: list[bool] = GroupMemberDetail.validate_attendance_input(
            attendance
        )
        self._grades: dict[Assignment, float] = {}

    # === properties ===

    @property
    def person(self) -> Person:
        return self._person

    @property
    def group(self) -> Group | None:
        return self._group_ref() if self._group_ref is not None else None

    @group.setter
    def group(self, group: Group | None) -> None:
        self._group_ref = weakref.ref(group) if group is not None else None

    @property
    def role(self) -> Role:
        return self._role

    @role.setter
    def role(self, role: Role) -> None:
        if not isinstance(role, Role):
            raise ValidationError(f"Invalid role: {role}.")
        self._role = role

    @property
    def attendance(self) -> tuple[bool, ...]:
        return tuple(self._attendance)

    @property
    def attendance_count(self) -> int:
        return sum(1 for present in self._attendance if present)

    @property
    def grades(self) -> dict[Assignment, float]:
        return self._grades.copy()

    # === attendance ===

    @staticmethod
    def is_valid_week(week: Any) -> bool:
        return isinstance(week, int) and not isinstance(week, bool) and 1 <= week <= WEEKS_PER_SEMESTER

    def was_present_in(self, week: int) -> bool:
        self._require_valid_week(week)
        return self._attendance[week - 1]

    def mark_attendance(self, week: int) -> None:
        self._require_valid_week(week)
        self._attendance[week - 1] = True

    def unmark_attendance(self, week: int) -> None:
        self._require_valid_week(week)
        self._attendance[week - 1] = False

    def _require_valid_week(self, week: Any) -> None:
        if not GroupMemberDetail.is_valid_week(week):
            raise ValidationError(WEEK_CONSTRAINTS)

    # === grades ===

    def grade_assignment(
        self,
        assignment: Assignment,
        score: Any,
        today: datetime.date | None = None,
    ) -> float:
        """
        Records a score for an assignment, applying the late penalty if the deadline has passed.

        Args:
            assignment (Assignment): The graded assignment.
            score (Any): The raw score; cast to float and validated.
            today (datetime.date | None): The grading date. Defaults to `datetime.date.today()`.

        Returns:
            The score actually stored.

        Raises:
            ValidationError: If the score is not a finite, non-negative number.

        Notes:
            - Regrading overwrites the previous score.
        """
        score = GroupMemberDetail.validate_score_input(score)

        if assignment.is_overdue(today):
            score = score * assignment.penalty

        self._grades[assignment] = score

        return score

    def get_assignment_grade(self, assignment: Assignment) -> float | None:
        return self._grades.get(assignment)

    def remove_grade(self, assignment: Assignment) -> None:
        self._grades.pop(assignment, None)

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "person": self._person.name,
            "role": self._role.value,
            "attendance": list(self._attendance),
            "grades": {
                assignment.name: score for assignment, score in self._grades.items()
            },
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        person: Person,
        assignments: dict[str, Assignment],
        group: Group | None = None,
    ) -> GroupMemberDetail:
        """
        Rebuilds a detail from its serialized form.

        Args:
            data (dict): The serialized detail.
            person (Person): The already-resolved member.
            assignments (dict[str, Assignment]): The owning group's assignments keyed by name.
            group (Group | None): The owning group.

        Raises:
            ValidationError: If the role, attendance, or any grade is malformed, or a grade names an unknown assignment.
        """
        try:
            role = Role(data.get("role", Role.STUDENT.value))
        except ValueError:
            raise ValidationError(f"Invalid role: {data.get('role')}.") from None

        detail = cls(person, group, role, data.get("attendance"))

        for assignment_name, score in data.get("grades", {}).items():
            assignment = assignments.get(assignment_name)
            if assignment is None:
                raise ValidationError(
                    f"Grade recorded for unknown assignment: {assignment_name}."
                )
            detail._grades[assignment] = GroupMemberDetail.validate_score_input(score)

        return detail

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True

        if not isinstance(other, GroupMemberDetail):
            return NotImplemented

        return self.group is other.group and self._person == other._person

    # mutable, so not usable as a set member or dict key
    __hash__ = None

    def __repr__(self) -> str:
        group_name = self.group.name if self.group is not None else None
        return f"GroupMemberDetail({self._person.name}, {group_name}, {self._role.value}, {self._attendance})"

    # === data validators ===

    @staticmethod
    def validate_attendance_input(attendance: Any) -> list[bool]:
        if attendance is None:
            return [False] * WEEKS_PER_SEMESTER

        if not isinstance(attendance, (list, tuple)) or not all(
            isinstance(present, bool) for present in attendance
        ):
            raise ValidationError("Attendance must be a list of true/false values.")

        if len(attendance) != WEEKS_PER_SEMESTER:
            raise ValidationError(
                f"Attendance must have exactly {WEEKS_PER_SEMESTER} entries."
            )

        return list(attendance)

    @staticmethod
    def validate_score_input(score: Any) -> float:
        """
        Validates and normalizes a raw assignment score.

        Raises:
            ValidationError: If the input is a bool, cannot be cast to float, is non-finite, or is less than zero.
        """
        if isinstance(score, bool):
            raise ValidationError("Invalid input. Score must be a number.")

        try:
            score = float(score)

        except (TypeError, ValueError):
            raise ValidationError("Invalid input. Score must be a number.") from None

        if not math.isfinite(score):
            raise ValidationError("Invalid input. Score must be a finite number.")

        if score < 0:
            raise ValidationError("Invalid input. Score cannot be less than zero.")

        return score
