# core/exceptions.py

"""
Typed failures raised by the roster data model.

The model layer raises these; the `Roster` facade catches them and converts them into
`Response` objects carrying the matching `ErrorCode`.
"""


class RosterError(Exception):
    """Base exception for roster rule violations."""


# === not found ===


class NotFoundError(RosterError, LookupError):
    """Raised when a named record cannot be found."""


class PersonNotFoundError(NotFoundError):
    def __init__(self, name: str = ""):
        super().__init__(f"This person does not exist: {name}" if name else "This person does not exist!")


class GroupNotFoundError(NotFoundError):
    def __init__(self, name: str = ""):
        super().__init__(f"This group does not exist: {name}" if name else "This group does not exist!")


class AssignmentNotFoundError(NotFoundError):
    def __init__(self, name: str = ""):
        super().__init__(f"Assignment not found: {name}" if name else "Assignment not found!")


class MemberNotFoundError(NotFoundError):
    def __init__(self, person_name: str = "", group_name: str = ""):
        if person_name and group_name:
            message = f"{person_name} is not a member of {group_name}."
        else:
            message = "This person does not exist in the group!"
        super().__init__(message)


# === duplicates ===


class DuplicateError(RosterError, ValueError):
    """Raised when a record would break a uniqueness rule."""


class DuplicatePersonError(DuplicateError):
    def __init__(self, name: str):
        super().__init__(f"A person named '{name}' already exists.")


class DuplicateGroupError(DuplicateError):
    def __init__(self, name: str):
        super().__init__(f"A group named '{name}' already exists.")


class DuplicateAssignmentError(DuplicateError):
    def __init__(self, name: str):
        super().__init__(f"Another assignment named '{name}' already exists in the group.")


class DuplicateMemberError(DuplicateError):
    def __init__(self, person_name: str, group_name: str):
        super().__init__(f"{person_name} is already a member of {group_name}.")


# === validation ===


class ValidationError(RosterError, ValueError):
    """Raised when input data is invalid or violates field constraints."""
