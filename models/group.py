# models/group.py

"""
Represents a Group: a named roster of members such as a tutorial section.

A `Group` owns:
- a `GroupMemberDetail` per member `Person`, in insertion order
- a list of `Assignment` records, unique by exact (case-sensitive) name
- a set of tags

Key behaviors:
- `add()` / `remove()`: membership changes, guarded against duplicates and missing members.
- `add_assignment()` / `edit_assignment()` / `remove_assignment()`: assignment lifecycle;
  removing an assignment also drops every member's grade for it.
- `mark_attendance()` / `unmark_attendance()` / `grade_assignment()`: name- and person-keyed
  wrappers that resolve the member's detail and delegate.

Notes:
- Two groups are equal when both name and tags match.
- Members are looked up by `Person` equality with a linear scan; persons are edited in place
  and are not hashable.
"""

from __future__ import annotations

import datetime
import re
from typing import Any, Iterable

from core.exceptions import (
    AssignmentNotFoundError,
    DuplicateAssignmentError,
    DuplicateMemberError,
    MemberNotFoundError,
    ValidationError,
)
from core.logging_config import get_logger
from models.assignment import DEFAULT_PENALTY, Assignment
from models.group_member_detail import GroupMemberDetail, Role
from models.person import Person
from models.tag import validate_tags_input

logger = get_logger(__name__)

GROUP_NAME_CONSTRAINTS = (
    "Group names should start with an alphanumeric character and may only contain "
    "alphanumerics, spaces, hyphens (-) and apostrophes (')."
)


class Group:

    def __init__(self, name: str, tags: Iterable[str] | None = None):
        # fields use setter methods for validation
        self.name = name
        self.tags = tags
        self._members: list[GroupMemberDetail] = []
        self._assignments: list[Assignment] = []

    # === properties ===

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._name = Group.validate_name_input(name)

    @property
    def tags(self) -> frozenset[str]:
        return frozenset(self._tags)

    @tags.setter
    def tags(self, tags: Iterable[str] | None) -> None:
        self._tags = validate_tags_input(tags)

    @property
    def members(self) -> list[Person]:
        return [detail.person for detail in self._members]

    @property
    def member_details(self) -> list[GroupMemberDetail]:
        return list(self._members)

    @property
    def assignments(self) -> list[Assignment]:
        return list(self._assignments)

    @property
    def size(self) -> int:
        return len(self._members)

    def is_same_group(self, other: Group | None) -> bool:
        if other is self:
            return True

        return other is not None and other.name == self.name

    def edit(self, name: str | None = None, tags: Iterable[str] | None = None) -> None:
        """
        Renames and/or retags the group in place; `None` leaves a field unchanged.

        Raises:
            ValidationError: If the new name or any tag is invalid. Nothing is changed in that case.
        """
        new_name = Group.validate_name_input(name) if name is not None else self._name
        new_tags = validate_tags_input(tags) if tags is not None else self._tags

        self._name = new_name
        self._tags = set(new_tags)

    # === membership ===

    def contains(self, person: Person) -> bool:
        return self._find_detail(person) is not None

    def add(self, person: Person) -> GroupMemberDetail:
        """
        Adds a person to the group as a Student with no attendance marked.

        Returns:
            The newly created `GroupMemberDetail`.

        Raises:
            DuplicateMemberError: If the person is already a member.
        """
        if self.contains(person):
            raise DuplicateMemberError(person.name, self._name)

        detail = GroupMemberDetail(person, self)
        self._members.append(detail)

        logger.info("Added %s to group %s.", person.name, self._name)

        return detail

    def remove(self, person: Person) -> None:
        detail = self.get_member_detail(person)
        self._members.remove(detail)

        logger.info("Removed %s from group %s.", person.name, self._name)

    def get_member_detail(self, person: Person) -> GroupMemberDetail:
        detail = self._find_detail(person)
        if detail is None:
            raise MemberNotFoundError(person.name, self._name)
        return detail

    def set_member_role(self, person: Person, role: Role) -> GroupMemberDetail:
        detail = self.get_member_detail(person)
        detail.role = role
        return detail

    def _find_detail(self, person: Person) -> GroupMemberDetail | None:
        for detail in self._members:
            if detail.person == person:
                return detail
        return None

    # === attendance ===

    def mark_attendance(self, person: Person, week: int) -> None:
        self.get_member_detail(person).mark_attendance(week)

    def unmark_attendance(self, person: Person, week: int) -> None:
        self.get_member_detail(person).unmark_attendance(week)

    # === assignments ===

    def has_assignment(self, name: str) -> bool:
        return self._find_assignment(name) is not None

    def get_assignment(self, name: str) -> Assignment:
        assignment = self._find_assignment(name)
        if assignment is None:
            raise AssignmentNotFoundError(name)
        return assignment

    def add_assignment(
        self,
        name: str,
        deadline: datetime.date,
        penalty: float | None = None,
    ) -> Assignment:
        """
        Creates a new assignment in this group.

        Args:
            name (str): The assignment name; must not match an existing name exactly.
            deadline (datetime.date): The due date.
            penalty (float | None): The late penalty multiplier. Defaults to 1.0 (no penalty).

        Returns:
            The new `Assignment`.

        Raises:
            DuplicateAssignmentError: If an assignment with the same name already exists.
            ValidationError: If the name, deadline, or penalty is invalid.
        """
        assignment = Assignment(
            name, deadline, DEFAULT_PENALTY if penalty is None else penalty
        )

        if self.has_assignment(assignment.name):
            raise DuplicateAssignmentError(assignment.name)

        self._assignments.append(assignment)

        logger.info("Added assignment %s to group %s.", assignment.name, self._name)

        return assignment

    def edit_assignment(
        self,
        name: str,
        new_name: str | None = None,
        deadline: datetime.date | None = None,
        penalty: float | None = None,
    ) -> Assignment:
        """
        Edits an existing assignment in place. Any `None` argument leaves that field unchanged.

        Raises:
            AssignmentNotFoundError: If no assignment is named `name`.
            DuplicateAssignmentError: If `new_name` belongs to a different assignment.
            ValidationError: If any new value is invalid. Nothing is changed in that case.
        """
        assignment = self.get_assignment(name)

        if new_name is not None:
            new_name = Assignment.validate_name_input(new_name)
            existing = self._find_assignment(new_name)
            if existing is not None and existing is not assignment:
                raise DuplicateAssignmentError(new_name)

        new_deadline = (
            Assignment.validate_deadline_input(deadline)
            if deadline is not None
            else assignment.deadline
        )
        new_penalty = (
            Assignment.validate_penalty_input(penalty)
            if penalty is not None
            else assignment.penalty
        )

        if new_name is not None:
            assignment.name = new_name
        assignment.deadline = new_deadline
        assignment.penalty = new_penalty

        logger.info("Edited assignment %s in group %s.", assignment.name, self._name)

        return assignment

    def remove_assignment(self, name: str) -> Assignment:
        assignment = self.get_assignment(name)

        for detail in self._members:
            detail.remove_grade(assignment)

        self._assignments.remove(assignment)

        logger.info("Removed assignment %s from group %s.", assignment.name, self._name)

        return assignment

    def grade_assignment(
        self,
        person: Person,
        assignment_name: str,
        score: Any,
        today: datetime.date | None = None,
    ) -> float:
        detail = self.get_member_detail(person)
        assignment = self.get_assignment(assignment_name)
        return detail.grade_assignment(assignment, score, today)

    def get_grade(self, person: Person, assignment_name: str) -> float | None:
        detail = self.get_member_detail(person)
        assignment = self.get_assignment(assignment_name)
        return detail.get_assignment_grade(assignment)

    def _find_assignment(self, name: str) -> Assignment | None:
        for assignment in self._assignments:
            if assignment.name == name:
                return assignment
        return None

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "name": self._name,
            "tags": sorted(self._tags),
            "assignments": [a.to_dict() for a in self._assignments],
            "members": [d.to_dict() for d in self._members],
        }

    @classmethod
    def from_dict(cls, data: dict, persons: dict[str, Person]) -> Group:
        """
        Rebuilds a group, resolving members against already-loaded persons by name.

        Args:
            data (dict): The serialized group.
            persons (dict[str, Person]): Loaded persons keyed by name.

        Returns:
            The rebuilt `Group`.

        Raises:
            ValidationError: If the group name, a tag, or an assignment is malformed, or
                two assignments share a name.

        Notes:
            - Member entries naming a person that does not exist are dropped with a warning.
            - Duplicate member entries are dropped with a warning.
        """
        group = cls(data["name"], data.get("tags", []))

        for assignment_data in data.get("assignments", []):
            try:
                assignment = Assignment.from_dict(assignment_data)
            except (KeyError, TypeError, ValueError) as e:
                raise ValidationError(
                    f"Malformed assignment in group {group.name}: {assignment_data} - {e}"
                ) from e
            if group.has_assignment(assignment.name):
                raise ValidationError(
                    f"Duplicate assignment '{assignment.name}' in group {group.name}."
                )
            group._assignments.append(assignment)

        assignments_by_name = {a.name: a for a in group._assignments}

        for member_data in data.get("members", []):
            person_name = member_data.get("person")
            person = persons.get(person_name)

            if person is None:
                logger.warning(
                    "Dropping unknown member '%s' from group %s.", person_name, group.name
                )
                continue

            if group.contains(person):
                logger.warning(
                    "Dropping duplicate member '%s' from group %s.", person_name, group.name
                )
                continue

            group._members.append(
                GroupMemberDetail.from_dict(member_data, person, assignments_by_name, group)
            )

        return group

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True

        if not isinstance(other, Group):
            return NotImplemented

        return self._name == other._name and self._tags == other._tags

    # renamed in place, so not usable as a set member or dict key
    __hash__ = None

    def __repr__(self) -> str:
        return f"Group({self._name}, {sorted(self._tags)}, members={len(self._members)}, assignments={len(self._assignments)})"

    def __str__(self) -> str:
        return f"GROUP: {self._name}, members: {len(self._members)}"

    # === data validators ===

    @staticmethod
    def validate_name_input(name: str) -> str:
        name = name.strip()
        if not re.fullmatch(r"[A-Za-z0-9][A-Za-z0-9 '\-]*", name):
            raise ValidationError(f"Invalid group name '{name}'. {GROUP_NAME_CONSTRAINTS}")
        return name
