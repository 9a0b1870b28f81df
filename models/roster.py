# models/roster.py

"""
The Roster is the facade the command shell talks to, and the "source of truth" for a session.

It owns an `AddressBook` plus session-scoped state: the save path and whether there are
unsaved changes. Every public operation takes names (as typed in commands), resolves them
against the address book, performs the mutation, and returns a structured `Response`.
Model failures never escape: typed errors are converted with `Response.from_exception()`
and the state is left as it was.

The whole address book is written to a single JSON file on save, with `persons` and
`groups` arrays. Groups reference their members by person name.
"""

from __future__ import annotations

import datetime
import json
import os
from typing import Any, Callable, Iterable

from core.exceptions import RosterError
from core.logging_config import get_logger
from core.response import ErrorCode, Response
from models.address_book import AddressBook
from models.group import Group
from models.group_member_detail import WEEKS_PER_SEMESTER, Role
from models.person import Person

logger = get_logger(__name__)


class Roster:

    def __init__(self, save_path: str, address_book: AddressBook | None = None):
        self._address_book = address_book or AddressBook()
        self._address_book.subscribe(self._on_change)
        self._path = save_path
        self._unsaved_changes = False

    # === properties ===

    @property
    def address_book(self) -> AddressBook:
        return self._address_book

    @property
    def persons(self) -> list[Person]:
        return self._address_book.persons

    @property
    def groups(self) -> list[Group]:
        return self._address_book.groups

    @property
    def path(self) -> str:
        return self._path

    @path.setter
    def path(self, save_path: str) -> None:
        self._path = save_path

    @property
    def has_unsaved_changes(self) -> bool:
        return self._unsaved_changes

    def _on_change(self, event: str, payload: dict[str, Any]) -> None:
        logger.debug("Address book event: %s %s", event, payload)
        self._unsaved_changes = True

    # === public classmethods ===

    @classmethod
    def create(cls, save_path: str) -> Response:
        """
        Creates, saves, and returns a new, empty `Roster`.

        Args:
            save_path (str): The JSON file used for reading and writing roster data.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if the roster was created and written to disk.
                - detail (str | None): On failure, a human-readable description of the error.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INTERNAL_ERROR` if the file could not be written.
                - status_code (int | None): 200 on success, 500 on failure.
                - data (dict | None):
                    - On success: "roster" (Roster): the new roster.

        Notes:
            - This method writes to disk with `roster.save()` before returning.
        """
        roster = cls(save_path)
        save_response = roster.save()

        if not save_response.success:
            return save_response

        return Response.succeed(data={"roster": roster})

    @classmethod
    def load(cls, save_path: str) -> Response:
        """
        Loads a `Roster` from a JSON file.

        Args:
            save_path (str): The JSON file to read.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the file was read, or does not exist yet.
                    - False for JSON parse errors or invalid records.
                - detail (str | None): A human-readable note or error description.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_INPUT` if the file is not valid JSON or not an object.
                    - `ErrorCode.VALIDATION_FAILED` if a record is invalid.
                    - `ErrorCode.INTERNAL_ERROR` if the file cannot be read.
                - status_code (int | None): 200 on success, 400 or 500 on failure.
                - data (dict | None):
                    - On success: "roster" (Roster): the loaded roster.

        Notes:
            - A missing file yields an empty roster that will be created on first save.
            - Group members that name unknown persons are dropped with a logged warning.
        """
        if not os.path.exists(save_path):
            logger.info("No roster found at %s; starting empty.", save_path)
            return Response.succeed(
                detail=f"No roster file found at {save_path}. Starting with an empty roster.",
                data={"roster": cls(save_path)},
            )

        try:
            with open(save_path, "r") as f:
                raw = json.load(f)

            if not isinstance(raw, dict):
                return Response.fail(
                    detail=f"Expected {save_path} to contain a JSON object.",
                    error=ErrorCode.INVALID_INPUT,
                )

            address_book = AddressBook.from_dict(raw)

        except json.JSONDecodeError as e:
            return Response.fail(
                detail=f"Failed to parse JSON data: {e}",
                error=ErrorCode.INVALID_INPUT,
            )

        except (RosterError, ValueError) as e:
            return Response.fail(
                detail=f"Invalid roster data: {e}",
                error=ErrorCode.VALIDATION_FAILED,
            )

        except OSError as e:
            logger.error("Failed to read %s: %s", save_path, e)
            return Response.fail(
                detail=f"Failed to read data from disk: {e}",
                error=ErrorCode.INTERNAL_ERROR,
                status_code=500,
            )

        logger.info(
            "Loaded %d persons and %d groups from %s.",
            len(address_book.persons),
            len(address_book.groups),
            save_path,
        )

        return Response.succeed(data={"roster": cls(save_path, address_book)})

    # === persistence ===

    def save(self, save_path: str | None = None) -> Response:
        """
        Serializes the whole roster and overwrites the save file.

        Args:
            save_path (str | None): Target file. Defaults to `self.path`.

        Returns:
            Response: Success with a confirmation detail, or `ErrorCode.INTERNAL_ERROR` (500)
            if the file could not be written or serialized.

        Notes:
            - Parent directories are created as needed.
            - The unsaved-changes flag is cleared only on success.
        """
        save_path = save_path or self._path

        try:
            parent = os.path.dirname(save_path)
            if parent:
                os.makedirs(parent, exist_ok=True)

            with open(save_path, "w") as f:
                json.dump(self._address_book.to_dict(), f, indent=2, sort_keys=True)

        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to save roster to %s: %s", save_path, e)
            return Response.fail(
                detail=f"Failed to write data to disk: {e}",
                error=ErrorCode.INTERNAL_ERROR,
                status_code=500,
            )

        self._unsaved_changes = False
        logger.info("Saved roster to %s.", save_path)

        return Response.succeed(detail=f"Roster successfully saved to {save_path}.")

    # === generalized operation runner ===

    def _attempt(self, operation: Callable[[], dict], detail: Callable[[dict], str]) -> Response:
        """
        Runs a model operation and wraps its outcome in a `Response`.

        Args:
            operation (Callable[[], dict]): Performs the work and returns the response payload.
            detail (Callable[[dict], str]): Builds the success message from the payload.

        Notes:
            - `RosterError` and `ValueError` become failures via `Response.from_exception()`.
            - Anything else is logged with its traceback and reported as `ErrorCode.INTERNAL_ERROR`.
        """
        try:
            data = operation()

        except (RosterError, ValueError) as e:
            logger.info("Operation failed: %s", e)
            return Response.from_exception(e)

        except Exception as e:
            logger.exception("Unexpected error during roster operation.")
            return Response.from_exception(e)

        return Response.succeed(detail=detail(data), data=data)

    # === person operations ===

    def add_person(
        self,
        name: str,
        phone: str,
        email: str,
        address: str,
        tags: Iterable[str] | None = None,
    ) -> Response:
        """
        Adds a new person to the address book.

        Returns:
            Response: On success, data has "record" (Person). Fails with
            `ErrorCode.DUPLICATE_RECORD` if the name is taken, or `ErrorCode.VALIDATION_FAILED`
            if any field is invalid.
        """

        def operation() -> dict:
            person = Person(name, phone, email, address, tags)
            self._address_book.add_person(person)
            return {"record": person}

        return self._attempt(operation, lambda d: f"New person added: {d['record'].name}")

    def edit_person(
        self,
        name: str,
        new_name: str | None = None,
        phone: str | None = None,
        email: str | None = None,
        address: str | None = None,
        tags: Iterable[str] | None = None,
    ) -> Response:
        def operation() -> dict:
            person = self._address_book.get_person(name)
            self._address_book.set_person(person, new_name, phone, email, address, tags)
            return {"record": person}

        return self._attempt(operation, lambda d: f"Edited person: {d['record'].name}")

    def delete_person(self, name: str) -> Response:
        """
        Deletes a person and removes them from every group they belong to.

        Returns:
            Response: On success, data has "record" (Person) and "groups" (list[str]), the names
            of the groups the person was removed from. `ErrorCode.NOT_FOUND` if no such person.
        """

        def operation() -> dict:
            person = self._address_book.get_person(name)
            groups = [g.name for g in self._address_book.groups if g.contains(person)]
            self._address_book.remove_person(person)
            return {"record": person, "groups": groups}

        return self._attempt(operation, lambda d: f"Deleted person: {d['record'].name}")

    def list_persons(self) -> Response:
        persons = self._address_book.persons
        return Response.succeed(
            detail=f"{len(persons)} persons listed!", data={"records": persons}
        )

    def find_persons(self, keywords: Iterable[str]) -> Response:
        persons = self._address_book.find_persons(keywords)
        return Response.succeed(
            detail=f"{len(persons)} persons listed!", data={"records": persons}
        )

    # === group operations ===

    def add_group(self, name: str, tags: Iterable[str] | None = None) -> Response:
        def operation() -> dict:
            group = Group(name, tags)
            self._address_book.add_group(group)
            return {"record": group}

        return self._attempt(operation, lambda d: f"New group added: {d['record'].name}")

    def edit_group(
        self,
        name: str,
        new_name: str | None = None,
        tags: Iterable[str] | None = None,
    ) -> Response:
        """
        Renames and/or retags a group.

        Returns:
            Response: On success, data has "record" (Group). Fails with `ErrorCode.NOT_FOUND`
            if the group does not exist, or `ErrorCode.DUPLICATE_RECORD` if `new_name` belongs
            to another group.
        """

        def operation() -> dict:
            group = self._address_book.get_group(name)
            self._address_book.edit_group(group, new_name, tags)
            return {"record": group}

        return self._attempt(operation, lambda d: f"Edited group: {d['record'].name}")

    def delete_group(self, name: str) -> Response:
        def operation() -> dict:
            group = self._address_book.get_group(name)
            self._address_book.remove_group(group)
            return {"record": group}

        return self._attempt(operation, lambda d: f"Deleted group: {d['record'].name}")

    def list_groups(self) -> Response:
        groups = self._address_book.groups
        return Response.succeed(
            detail=f"{len(groups)} groups listed!", data={"records": groups}
        )

    def find_groups(self, keywords: Iterable[str]) -> Response:
        groups = self._address_book.find_groups(keywords)
        return Response.succeed(
            detail=f"{len(groups)} groups listed!", data={"records": groups}
        )

    def show_group_details(self, name: str) -> Response:
        """
        Collects a group's members, roles, attendance totals, and assignments for display.

        Returns:
            Response: On success, data has "record" (Group), "details" (list[GroupMemberDetail])
            and "assignments" (list[Assignment]). `ErrorCode.NOT_FOUND` if no such group.

        Notes:
            - This method is read-only.
        """

        def operation() -> dict:
            group = self._address_book.get_group(name)
            return {
                "record": group,
                "details": group.member_details,
                "assignments": group.assignments,
            }

        return self._attempt(
            operation, lambda d: f"Showing details of group: {d['record'].name}"
        )

    # === membership operations ===

    def add_person_to_group(self, person_name: str, group_name: str) -> Response:
        def operation() -> dict:
            person = self._address_book.get_person(person_name)
            group = self._address_book.get_group(group_name)
            detail = self._address_book.add_person_to_group(person, group)
            return {"record": detail}

        return self._attempt(
            operation, lambda d: f"Added {person_name} to group {group_name}."
        )

    def delete_person_from_group(self, person_name: str, group_name: str) -> Response:
        def operation() -> dict:
            person = self._address_book.get_person(person_name)
            group = self._address_book.get_group(group_name)
            self._address_book.delete_person_from_group(person, group)
            return {"person": person, "group": group}

        return self._attempt(
            operation, lambda d: f"Removed {person_name} from group {group_name}."
        )

    def set_member_role(self, person_name: str, group_name: str, role: Role | str) -> Response:
        def operation() -> dict:
            person = self._address_book.get_person(person_name)
            group = self._address_book.get_group(group_name)
            new_role = role if isinstance(role, Role) else Role.from_input(role)
            self._address_book.set_member_role(person, group, new_role)
            return {"record": group.get_member_detail(person)}

        return self._attempt(
            operation,
            lambda d: f"{person_name} is now a {d['record'].role.value} in {group_name}.",
        )

    # === assignment operations ===

    def add_assignment(
        self,
        name: str,
        group_name: str,
        deadline: datetime.date,
        penalty: float | None = None,
    ) -> Response:
        """
        Adds a new assignment to a group.

        Returns:
            Response: On success, data has "record" (Assignment). Fails with `ErrorCode.NOT_FOUND`
            if the group does not exist, or `ErrorCode.DUPLICATE_RECORD` if the name is taken
            within the group.
        """

        def operation() -> dict:
            group = self._address_book.get_group(group_name)
            assignment = self._address_book.add_assignment_to_group(
                name, deadline, group, penalty
            )
            return {"record": assignment}

        return self._attempt(
            operation,
            lambda d: f"Added new assignment to group {group_name}: {d['record'].name}",
        )

    def edit_assignment(
        self,
        name: str,
        group_name: str,
        new_name: str | None = None,
        deadline: datetime.date | None = None,
        penalty: float | None = None,
    ) -> Response:
        def operation() -> dict:
            group = self._address_book.get_group(group_name)
            assignment = self._address_book.edit_assignment(
                name, new_name, deadline, group, penalty
            )
            return {"record": assignment}

        return self._attempt(
            operation,
            lambda d: f"Assignment in group {group_name} has been edited: {d['record'].name}",
        )

    def delete_assignment(self, name: str, group_name: str) -> Response:
        def operation() -> dict:
            group = self._address_book.get_group(group_name)
            assignment = self._address_book.remove_assignment_from_group(name, group)
            return {"record": assignment}

        return self._attempt(
            operation, lambda d: f"Assignment {name} deleted from group {group_name}."
        )

    def grade_assignment(
        self,
        person_name: str,
        group_name: str,
        assignment_name: str,
        score: Any,
        today: datetime.date | None = None,
    ) -> Response:
        """
        Records a member's score for an assignment, applying the late penalty when overdue.

        Args:
            person_name (str): The member's name.
            group_name (str): The group's name.
            assignment_name (str): The assignment's name within the group.
            score (Any): The raw score.
            today (datetime.date | None): Grading date, defaults to today.

        Returns:
            Response: On success, data has "score" (float), the stored score after any penalty.
            Fails with `ErrorCode.NOT_FOUND` if the person, group, membership, or assignment is
            missing, or `ErrorCode.VALIDATION_FAILED` for an invalid score.
        """

        def operation() -> dict:
            person = self._address_book.get_person(person_name)
            group = self._address_book.get_group(group_name)
            score_stored = self._address_book.grade_assignment(
                person, group, assignment_name, score, today
            )
            return {"score": score_stored}

        return self._attempt(
            operation,
            lambda d: f"Graded assignment {assignment_name} for {person_name}, {group_name} with {d['score']:.2f} score",
        )

    # === attendance operations ===

    def mark_attendance(self, person_name: str, group_name: str, week: int) -> Response:
        def operation() -> dict:
            person = self._address_book.get_person(person_name)
            group = self._address_book.get_group(group_name)
            self._address_book.mark_attendance(person, group, week)
            return {"week": week}

        return self._attempt(
            operation,
            lambda d: f"Marked attendance for {person_name}!\nGroup: {group_name}\nWeek {week}",
        )

    def unmark_attendance(self, person_name: str, group_name: str, week: int) -> Response:
        def operation() -> dict:
            person = self._address_book.get_person(person_name)
            group = self._address_book.get_group(group_name)
            self._address_book.unmark_attendance(person, group, week)
            return {"week": week}

        return self._attempt(
            operation,
            lambda d: f"Unmarked attendance for {person_name}!\nGroup: {group_name}\nWeek {week}",
        )

    def show_attendance(self, person_name: str, group_name: str) -> Response:
        """
        Generates a member's week-by-week attendance report for one group.

        Returns:
            Response: On success, data has "attendance" (dict[int, bool]) mapping week number to
            presence, and "present" (int), the number of weeks attended.

        Notes:
            - This method is read-only.
        """

        def operation() -> dict:
            person = self._address_book.get_person(person_name)
            group = self._address_book.get_group(group_name)
            detail = group.get_member_detail(person)
            return {
                "attendance": {
                    week: detail.attendance[week - 1]
                    for week in range(1, WEEKS_PER_SEMESTER + 1)
                },
                "present": detail.attendance_count,
            }

        return self._attempt(
            operation,
            lambda d: f"Attendance for {person_name} in {group_name}: {d['present']}/{WEEKS_PER_SEMESTER} weeks",
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Roster({self._path}, {self._address_book!r})"
