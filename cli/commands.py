# cli/commands.py

"""
Text commands for the roster shell.

Each command word maps to a `Command` that parses its argument text, calls the matching
`Roster` operation, and returns the resulting `Response`. Commands that display records
also carry a renderer that turns a successful response's data into console text.

Parse failures are returned as `ErrorCode.INVALID_INPUT` responses; model failures come back
from the `Roster` as typed error codes. Either way the roster is left unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import cli.model_formatters as model_formatters
from cli.parser import (
    PREFIX_ADDRESS,
    PREFIX_ASSIGNMENT,
    PREFIX_DATE,
    PREFIX_EMAIL,
    PREFIX_GROUP,
    PREFIX_LATE_PENALTY,
    PREFIX_NAME,
    PREFIX_NEW_NAME,
    PREFIX_PERSON,
    PREFIX_PHONE,
    PREFIX_ROLE,
    PREFIX_SCORE,
    PREFIX_TAG,
    PREFIX_WEEK,
    ArgumentMap,
    ParseError,
    parse_date,
    parse_float,
    parse_tags,
    parse_week,
    split_command,
    tokenize,
)
from cli.path_utils import file_is_writable, resolve_save_path
from core.exceptions import RosterError
from core.logging_config import get_logger
from core.response import ErrorCode, Response
from models.roster import Roster

logger = get_logger(__name__)


@dataclass(frozen=True)
class Command:
    word: str
    usage: str
    run: Callable[[Roster, ArgumentMap], Response]
    render: Callable[[Response], str] | None = None


# === person commands ===


def _add_person(roster: Roster, args: ArgumentMap) -> Response:
    args.verify_no_preamble()
    args.require(PREFIX_NAME, PREFIX_PHONE, PREFIX_EMAIL, PREFIX_ADDRESS)
    args.verify_no_duplicates(PREFIX_NAME, PREFIX_PHONE, PREFIX_EMAIL, PREFIX_ADDRESS)

    return roster.add_person(
        args.get_value(PREFIX_NAME),
        args.get_value(PREFIX_PHONE),
        args.get_value(PREFIX_EMAIL),
        args.get_value(PREFIX_ADDRESS),
        parse_tags(args.get_all_values(PREFIX_TAG)),
    )


def _edit_person(roster: Roster, args: ArgumentMap) -> Response:
    args.require(PREFIX_PERSON)
    args.verify_no_duplicates(PREFIX_PERSON, PREFIX_NAME, PREFIX_PHONE, PREFIX_EMAIL, PREFIX_ADDRESS)

    new_name = args.get_value(PREFIX_NAME)
    phone = args.get_value(PREFIX_PHONE)
    email = args.get_value(PREFIX_EMAIL)
    address = args.get_value(PREFIX_ADDRESS)
    tags = parse_tags(args.get_all_values(PREFIX_TAG))

    if all(v is None for v in (new_name, phone, email, address, tags)):
        raise ParseError("At least one field to edit must be provided.")

    return roster.edit_person(args.get_value(PREFIX_PERSON), new_name, phone, email, address, tags)


def _render_person_record(response: Response) -> str:
    return f"{response.detail}\n{model_formatters.format_person_multiline(response.data['record'])}"


def _delete_person(roster: Roster, args: ArgumentMap) -> Response:
    args.require(PREFIX_PERSON)
    args.verify_no_duplicates(PREFIX_PERSON)
    return roster.delete_person(args.get_value(PREFIX_PERSON))


def _list_persons(roster: Roster, args: ArgumentMap) -> Response:
    return roster.list_persons()


def _find_persons(roster: Roster, args: ArgumentMap) -> Response:
    keywords = args.preamble.split()
    if not keywords:
        raise ParseError("At least one keyword must be provided.")
    return roster.find_persons(keywords)


def _render_persons(response: Response) -> str:
    lines = [response.detail or ""]
    lines += [
        f"{i:>2}. {model_formatters.format_person_oneline(p)}"
        for i, p in enumerate(response.data["records"], 1)
    ]
    return "\n".join(lines)


# === group commands ===


def _add_group(roster: Roster, args: ArgumentMap) -> Response:
    args.verify_no_preamble()
    args.require(PREFIX_NAME)
    args.verify_no_duplicates(PREFIX_NAME)
    return roster.add_group(
        args.get_value(PREFIX_NAME), parse_tags(args.get_all_values(PREFIX_TAG))
    )


def _edit_group(roster: Roster, args: ArgumentMap) -> Response:
    args.require(PREFIX_GROUP)
    args.verify_no_duplicates(PREFIX_GROUP, PREFIX_NAME)

    new_name = args.get_value(PREFIX_NAME)
    tags = parse_tags(args.get_all_values(PREFIX_TAG))

    if new_name is None and tags is None:
        raise ParseError("At least one field to edit must be provided.")

    return roster.edit_group(args.get_value(PREFIX_GROUP), new_name, tags)


def _delete_group(roster: Roster, args: ArgumentMap) -> Response:
    args.require(PREFIX_GROUP)
    args.verify_no_duplicates(PREFIX_GROUP)
    return roster.delete_group(args.get_value(PREFIX_GROUP))


def _list_groups(roster: Roster, args: ArgumentMap) -> Response:
    return roster.list_groups()


def _find_groups(roster: Roster, args: ArgumentMap) -> Response:
    keywords = args.preamble.split()
    if not keywords:
        raise ParseError("At least one keyword must be provided.")
    return roster.find_groups(keywords)


def _show_group_details(roster: Roster, args: ArgumentMap) -> Response:
    args.require(PREFIX_GROUP)
    args.verify_no_duplicates(PREFIX_GROUP)
    return roster.show_group_details(args.get_value(PREFIX_GROUP))


def _render_groups(response: Response) -> str:
    lines = [response.detail or ""]
    lines += [
        f"{i:>2}. {model_formatters.format_group_oneline(g)}"
        for i, g in enumerate(response.data["records"], 1)
    ]
    return "\n".join(lines)


def _render_group_details(response: Response) -> str:
    return model_formatters.format_group_multiline(response.data["record"])


# === membership commands ===


def _add_to_group(roster: Roster, args: ArgumentMap) -> Response:
    args.require(PREFIX_PERSON, PREFIX_GROUP)
    args.verify_no_duplicates(PREFIX_PERSON, PREFIX_GROUP)
    return roster.add_person_to_group(
        args.get_value(PREFIX_PERSON), args.get_value(PREFIX_GROUP)
    )


def _delete_from_group(roster: Roster, args: ArgumentMap) -> Response:
    args.require(PREFIX_PERSON, PREFIX_GROUP)
    args.verify_no_duplicates(PREFIX_PERSON, PREFIX_GROUP)
    return roster.delete_person_from_group(
        args.get_value(PREFIX_PERSON), args.get_value(PREFIX_GROUP)
    )


def _set_role(roster: Roster, args: ArgumentMap) -> Response:
    args.require(PREFIX_PERSON, PREFIX_GROUP, PREFIX_ROLE)
    args.verify_no_duplicates(PREFIX_PERSON, PREFIX_GROUP, PREFIX_ROLE)
    return roster.set_member_role(
        args.get_value(PREFIX_PERSON),
        args.get_value(PREFIX_GROUP),
        args.get_value(PREFIX_ROLE),
    )


# === assignment commands ===


def _add_assignment(roster: Roster, args: ArgumentMap) -> Response:
    args.require(PREFIX_NAME, PREFIX_GROUP, PREFIX_DATE)
    args.verify_no_duplicates(PREFIX_NAME, PREFIX_GROUP, PREFIX_DATE, PREFIX_LATE_PENALTY)

    penalty = args.get_value(PREFIX_LATE_PENALTY)

    return roster.add_assignment(
        args.get_value(PREFIX_NAME),
        args.get_value(PREFIX_GROUP),
        parse_date(args.get_value(PREFIX_DATE)),
        parse_float(penalty, "Penalty") if penalty is not None else None,
    )


def _edit_assignment(roster: Roster, args: ArgumentMap) -> Response:
    args.require(PREFIX_NAME, PREFIX_GROUP)
    args.verify_no_duplicates(
        PREFIX_NAME, PREFIX_GROUP, PREFIX_NEW_NAME, PREFIX_DATE, PREFIX_LATE_PENALTY
    )

    name = args.get_value(PREFIX_NAME)
    new_name = args.get_value(PREFIX_NEW_NAME)
    date = args.get_value(PREFIX_DATE)
    penalty = args.get_value(PREFIX_LATE_PENALTY)

    if new_name is None and date is None and penalty is None:
        raise ParseError("At least one field to edit must be provided.")

    return roster.edit_assignment(
        name,
        args.get_value(PREFIX_GROUP),
        None if new_name == name else new_name,
        parse_date(date) if date is not None else None,
        parse_float(penalty, "Penalty") if penalty is not None else None,
    )


def _delete_assignment(roster: Roster, args: ArgumentMap) -> Response:
    args.require(PREFIX_NAME, PREFIX_GROUP)
    args.verify_no_duplicates(PREFIX_NAME, PREFIX_GROUP)
    return roster.delete_assignment(
        args.get_value(PREFIX_NAME), args.get_value(PREFIX_GROUP)
    )


def _grade_assignment(roster: Roster, args: ArgumentMap) -> Response:
    args.require(PREFIX_PERSON, PREFIX_GROUP, PREFIX_ASSIGNMENT, PREFIX_SCORE)
    args.verify_no_duplicates(PREFIX_PERSON, PREFIX_GROUP, PREFIX_ASSIGNMENT, PREFIX_SCORE)
    return roster.grade_assignment(
        args.get_value(PREFIX_PERSON),
        args.get_value(PREFIX_GROUP),
        args.get_value(PREFIX_ASSIGNMENT),
        parse_float(args.get_value(PREFIX_SCORE), "Score"),
    )


# === attendance commands ===


def _mark_attendance(roster: Roster, args: ArgumentMap) -> Response:
    args.require(PREFIX_PERSON, PREFIX_GROUP, PREFIX_WEEK)
    args.verify_no_duplicates(PREFIX_PERSON, PREFIX_GROUP, PREFIX_WEEK)
    return roster.mark_attendance(
        args.get_value(PREFIX_PERSON),
        args.get_value(PREFIX_GROUP),
        parse_week(args.get_value(PREFIX_WEEK)),
    )


def _unmark_attendance(roster: Roster, args: ArgumentMap) -> Response:
    args.require(PREFIX_PERSON, PREFIX_GROUP, PREFIX_WEEK)
    args.verify_no_duplicates(PREFIX_PERSON, PREFIX_GROUP, PREFIX_WEEK)
    return roster.unmark_attendance(
        args.get_value(PREFIX_PERSON),
        args.get_value(PREFIX_GROUP),
        parse_week(args.get_value(PREFIX_WEEK)),
    )


def _show_attendance(roster: Roster, args: ArgumentMap) -> Response:
    args.require(PREFIX_PERSON, PREFIX_GROUP)
    args.verify_no_duplicates(PREFIX_PERSON, PREFIX_GROUP)

    response = roster.show_attendance(
        args.get_value(PREFIX_PERSON), args.get_value(PREFIX_GROUP)
    )

    if response.success:
        response.data["person"] = args.get_value(PREFIX_PERSON)
        response.data["group"] = args.get_value(PREFIX_GROUP)

    return response


def _render_attendance(response: Response) -> str:
    data = response.data
    return model_formatters.format_attendance_report(
        data["person"], data["group"], data["attendance"], data["present"]
    )


# === session commands ===


def _save(roster: Roster, args: ArgumentMap) -> Response:
    if not args.preamble:
        return roster.save()

    save_path = resolve_save_path(args.preamble)

    if not file_is_writable(save_path):
        return Response.fail(
            detail=f"Cannot write to {save_path}.", error=ErrorCode.INVALID_INPUT
        )

    response = roster.save(save_path)
    if response.success:
        roster.path = save_path

    return response


def _help(roster: Roster, args: ArgumentMap) -> Response:
    usages = [c.usage for c in COMMANDS.values()] + [EXIT_WORD]
    return Response.succeed(detail="\n".join(usages))


COMMANDS: dict[str, Command] = {
    c.word: c
    for c in (
        Command("add", "add n/NAME p/PHONE e/EMAIL a/ADDRESS [t/TAG]...", _add_person, _render_person_record),
        Command("edit", "edit P/NAME [n/NEW_NAME] [p/PHONE] [e/EMAIL] [a/ADDRESS] [t/TAG]...", _edit_person, _render_person_record),
        Command("delete", "delete P/NAME", _delete_person),
        Command("list", "list", _list_persons, _render_persons),
        Command("find", "find KEYWORD [MORE_KEYWORDS]...", _find_persons, _render_persons),
        Command("add-group", "add-group n/GROUP_NAME [t/TAG]...", _add_group),
        Command("edit-group", "edit-group g/GROUP_NAME [n/NEW_NAME] [t/TAG]...", _edit_group),
        Command("delete-group", "delete-group g/GROUP_NAME", _delete_group),
        Command("list-group", "list-group", _list_groups, _render_groups),
        Command("find-group", "find-group KEYWORD [MORE_KEYWORDS]...", _find_groups, _render_groups),
        Command("show-group-details", "show-group-details g/GROUP_NAME", _show_group_details, _render_group_details),
        Command("add-to-group", "add-to-group P/PERSON_NAME g/GROUP_NAME", _add_to_group),
        Command("delete-from-group", "delete-from-group P/PERSON_NAME g/GROUP_NAME", _delete_from_group),
        Command("set-role", "set-role P/PERSON_NAME g/GROUP_NAME r/Student|TA|Lecturer", _set_role),
        Command("add-assignment", "add-assignment n/ASSIGNMENT_NAME g/GROUP_NAME d/DD-MM-YYYY [l/PENALTY]", _add_assignment),
        Command("edit-assignment", "edit-assignment n/ASSIGNMENT_NAME g/GROUP_NAME [N/NEW_NAME] [d/DD-MM-YYYY] [l/PENALTY]", _edit_assignment),
        Command("delete-assignment", "delete-assignment n/ASSIGNMENT_NAME g/GROUP_NAME", _delete_assignment),
        Command("grade-assignment", "grade-assignment P/PERSON_NAME g/GROUP_NAME A/ASSIGNMENT_NAME s/SCORE", _grade_assignment),
        Command("mark-attendance", "mark-attendance P/PERSON_NAME g/GROUP_NAME w/WEEK", _mark_attendance),
        Command("unmark-attendance", "unmark-attendance P/PERSON_NAME g/GROUP_NAME w/WEEK", _unmark_attendance),
        Command("show-attendance", "show-attendance P/PERSON_NAME g/GROUP_NAME", _show_attendance, _render_attendance),
        Command("save", "save [FILE_PATH]", _save),
        Command("help", "help", _help),
    )
}

EXIT_WORD = "exit"


def is_exit_command(command_text: str) -> bool:
    return command_text.strip() == EXIT_WORD


def execute(roster: Roster, command_text: str) -> tuple[Response, str]:
    """
    Parses and runs one line of command text.

    Args:
        roster (Roster): The active roster.
        command_text (str): The raw line typed by the user.

    Returns:
        tuple[Response, str]: The operation's response and the text to display for it.

    Notes:
        - Unknown commands and malformed arguments produce `ErrorCode.INVALID_INPUT` responses.
        - Invalid field values raised while parsing (e.g. a blank tag) produce `ErrorCode.VALIDATION_FAILED`.
    """
    try:
        command_word, arg_text = split_command(command_text)

        if command_word == EXIT_WORD:
            raise ParseError(f'"{EXIT_WORD}" takes no arguments.')

        command = COMMANDS.get(command_word)
        if command is None:
            raise ParseError(f'Unknown command "{command_word}". Type "help" to see the list of commands.')

        response = command.run(roster, tokenize(arg_text))

    except ParseError as e:
        response = Response.fail(detail=str(e), error=ErrorCode.INVALID_INPUT)
        return response, f"[ERROR: {ErrorCode.INVALID_INPUT.name}] {e}"

    except RosterError as e:
        response = Response.from_exception(e)
        return response, f"[ERROR: {response.error.name}] {response.detail}"

    logger.debug("Executed %s: %s", command_word, response)

    if not response.success:
        error_label = response.error.name if isinstance(response.error, ErrorCode) else response.error
        return response, f"[ERROR: {error_label}] {response.detail}"

    if command.render is not None:
        return response, command.render(response)

    return response, response.detail or ""
