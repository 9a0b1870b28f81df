# models/address_book.py

"""
The AddressBook is the aggregate root of the roster data model.

It holds the two top-level unique collections, persons and groups, and exposes name-keyed
lookup and mutation methods that the `Roster` facade drives. Every method either completes
or raises a typed `RosterError` before changing any state.

Key rules:
- No two persons share a name (`Person.is_same_person`).
- No two groups share a name (`Group.is_same_group`).
- Removing a person cascades: they are removed from every group they belong to.

Registered listeners are called with `(event, payload)` after each successful mutation,
so views can refresh without observing the collections directly.
"""

from __future__ import annotations

import datetime
from typing import Any, Callable, Iterable

from core.exceptions import (
    DuplicateGroupError,
    DuplicatePersonError,
    GroupNotFoundError,
    PersonNotFoundError,
    ValidationError,
)
from core.logging_config import get_logger
from models.assignment import Assignment
from models.group import Group
from models.group_member_detail import GroupMemberDetail, Role
from models.person import Person

logger = get_logger(__name__)

Listener = Callable[[str, dict[str, Any]], None]


class AddressBook:

    def __init__(self):
        self._persons: list[Person] = []
        self._groups: list[Group] = []
        self._listeners: list[Listener] = []

    # === properties ===

    @property
    def persons(self) -> list[Person]:
        return list(self._persons)

    @property
    def groups(self) -> list[Group]:
        return list(self._groups)

    # === change listeners ===

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def _notify(self, event: str, **payload: Any) -> None:
        for listener in list(self._listeners):
            listener(event, payload)

    # === person operations ===

    def has_person(self, person: Person) -> bool:
        return any(p.is_same_person(person) for p in self._persons)

    def get_person(self, name: str) -> Person:
        for person in self._persons:
            if person.name == name:
                return person
        raise PersonNotFoundError(name)

    def add_person(self, person: Person) -> None:
        if self.has_person(person):
            raise DuplicatePersonError(person.name)

        self._persons.append(person)

        logger.info("Added person %s.", person.name)
        self._notify("person_added", person=person)

    def set_person(
        self,
        target: Person,
        name: str | None = None,
        phone: str | None = None,
        email: str | None = None,
        address: str | None = None,
        tags: Iterable[str] | None = None,
    ) -> Person:
        """
        Edits a person in place, so every group holding them sees the change.

        Raises:
            PersonNotFoundError: If `target` is not in the address book.
            DuplicatePersonError: If `name` belongs to a different person.
            ValidationError: If any supplied field is invalid.
        """
        self._require_tracked_person(target)

        if name is not None:
            new_name = Person.validate_name_input(name)
            if any(p.name == new_name and p is not target for p in self._persons):
                raise DuplicatePersonError(new_name)

        target.edit(name=name, phone=phone, email=email, address=address, tags=tags)

        logger.info("Edited person %s.", target.name)
        self._notify("person_edited", person=target)

        return target

    def remove_person(self, person: Person) -> None:
        self._require_tracked_person(person)

        self.delete_person_from_all_groups(person)
        self._persons.remove(person)

        logger.info("Removed person %s.", person.name)
        self._notify("person_removed", person=person)

    def find_persons(self, keywords: Iterable[str]) -> list[Person]:
        return _filter_by_keywords(self._persons, keywords, lambda p: p.name)

    def _require_tracked_person(self, person: Person) -> None:
        if not any(p is person for p in self._persons):
            raise PersonNotFoundError(person.name)

    # === group operations ===

    def has_group(self, group: Group) -> bool:
        return any(g.is_same_group(group) for g in self._groups)

    def get_group(self, name: str) -> Group:
        for group in self._groups:
            if group.name == name:
                return group
        raise GroupNotFoundError(name)

    def add_group(self, group: Group) -> None:
        if self.has_group(group):
            raise DuplicateGroupError(group.name)

        self._groups.append(group)

        logger.info("Added group %s.", group.name)
        self._notify("group_added", group=group)

    def edit_group(
        self,
        group: Group,
        name: str | None = None,
        tags: Iterable[str] | None = None,
    ) -> Group:
        """
        Renames and/or retags a group in place.

        Raises:
            GroupNotFoundError: If `group` is not in the address book.
            DuplicateGroupError: If `name` belongs to a different group. Renaming a group to its own name is allowed.
            ValidationError: If the name or tags are invalid.
        """
        self._require_tracked_group(group)

        if name is not None:
            new_name = Group.validate_name_input(name)
            if any(g.name == new_name and g is not group for g in self._groups):
                raise DuplicateGroupError(new_name)

        group.edit(name=name, tags=tags)

        logger.info("Edited group %s.", group.name)
        self._notify("group_edited", group=group)

        return group

    def remove_group(self, group: Group) -> None:
        self._require_tracked_group(group)

        self._groups.remove(group)

        logger.info("Removed group %s with %d members.", group.name, group.size)
        self._notify("group_removed", group=group)

    def find_groups(self, keywords: Iterable[str]) -> list[Group]:
        return _filter_by_keywords(self._groups, keywords, lambda g: g.name)

    def _require_tracked_group(self, group: Group) -> None:
        if not any(g is group for g in self._groups):
            raise GroupNotFoundError(group.name)

    # === membership operations ===

    def add_person_to_group(self, person: Person, group: Group) -> GroupMemberDetail:
        detail = group.add(person)
        self._notify("member_added", person=person, group=group)
        return detail

    def delete_person_from_group(self, person: Person, group: Group) -> None:
        group.remove(person)
        self._notify("member_removed", person=person, group=group)

    def delete_person_from_all_groups(self, person: Person) -> list[Group]:
        """
        Removes a person from every group they belong to.

        Returns:
            The groups the person was removed from (possibly empty).
        """
        removed_from = []

        for group in self._groups:
            if group.contains(person):
                self.delete_person_from_group(person, group)
                removed_from.append(group)

        return removed_from

    def set_member_role(self, person: Person, group: Group, role: Role) -> None:
        group.set_member_role(person, role)
        self._notify("member_edited", person=person, group=group)

    # === assignment operations ===

    def is_assignment_in_group(self, assignment_name: str, group: Group) -> bool:
        return group.has_assignment(assignment_name)

    def add_assignment_to_group(
        self,
        assignment_name: str,
        deadline: datetime.date,
        group: Group,
        penalty: float | None = None,
    ) -> Assignment:
        assignment = group.add_assignment(assignment_name, deadline, penalty)
        self._notify("assignment_added", assignment=assignment, group=group)
        return assignment

    def edit_assignment(
        self,
        assignment_name: str,
        new_name: str | None,
        deadline: datetime.date | None,
        group: Group,
        penalty: float | None = None,
    ) -> Assignment:
        assignment = group.edit_assignment(assignment_name, new_name, deadline, penalty)
        self._notify("assignment_edited", assignment=assignment, group=group)
        return assignment

    def remove_assignment_from_group(self, assignment_name: str, group: Group) -> Assignment:
        assignment = group.remove_assignment(assignment_name)
        self._notify("assignment_removed", assignment=assignment, group=group)
        return assignment

    def grade_assignment(
        self,
        person: Person,
        group: Group,
        assignment_name: str,
        score: Any,
        today: datetime.date | None = None,
    ) -> float:
        stored = group.grade_assignment(person, assignment_name, score, today)
        self._notify("member_edited", person=person, group=group)
        return stored

    def get_grade(self, person: Person, group: Group, assignment_name: str) -> float | None:
        return group.get_grade(person, assignment_name)

    # === attendance operations ===

    def mark_attendance(self, person: Person, group: Group, week: int) -> None:
        group.mark_attendance(person, week)
        self._notify("member_edited", person=person, group=group)

    def unmark_attendance(self, person: Person, group: Group, week: int) -> None:
        group.unmark_attendance(person, week)
        self._notify("member_edited", person=person, group=group)

    # === persistence and import ===

    def reset_data(self, other: AddressBook) -> None:
        self._persons = other.persons
        self._groups = other.groups
        self._notify("reset")

    def to_dict(self) -> dict:
        return {
            "persons": [p.to_dict() for p in self._persons],
            "groups": [g.to_dict() for g in self._groups],
        }

    @classmethod
    def from_dict(cls, data: dict) -> AddressBook:
        """
        Rebuilds an address book from its serialized form.

        Raises:
            ValidationError: If `persons` or `groups` is not a list, a record is malformed,
                or persons or groups repeat a name.

        Notes:
            - Group members are resolved by person name; unresolved names are dropped with a warning.
        """
        address_book = cls()

        persons_data = data.get("persons", [])
        groups_data = data.get("groups", [])

        for key, records in (("persons", persons_data), ("groups", groups_data)):
            if not isinstance(records, list):
                raise ValidationError(
                    f"Expected '{key}' to be a list, got {type(records).__name__}."
                )

        for person_data in persons_data:
            try:
                person = Person.from_dict(person_data)
            except (KeyError, TypeError, AttributeError) as e:
                raise ValidationError(f"Malformed person: {person_data} - {e}") from e

            if address_book.has_person(person):
                raise ValidationError(f"Duplicate person in saved data: {person.name}.")
            address_book._persons.append(person)

        persons_by_name = {p.name: p for p in address_book._persons}

        for group_data in groups_data:
            try:
                group = Group.from_dict(group_data, persons_by_name)
            except (KeyError, TypeError, AttributeError) as e:
                raise ValidationError(f"Malformed group: {group_data} - {e}") from e

            if address_book.has_group(group):
                raise ValidationError(f"Duplicate group in saved data: {group.name}.")
            address_book._groups.append(group)

        return address_book

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True

        if not isinstance(other, AddressBook):
            return NotImplemented

        return self._persons == other._persons and self._groups == other._groups

    def __repr__(self) -> str:
        return f"AddressBook(persons={len(self._persons)}, groups={len(self._groups)})"


def _filter_by_keywords(records: list, keywords: Iterable[str], key: Callable[[Any], str]) -> list:
    """Returns records whose name contains any keyword as a whole word, ignoring case."""
    wanted = {k.strip().lower() for k in keywords if k.strip()}

    if not wanted:
        return []

    return [r for r in records if wanted & set(key(r).lower().split())]
