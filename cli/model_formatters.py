# cli/model_formatters.py

# anything that renders domain objects for the shell
from textwrap import dedent

import core.formatters as formatters
from models.assignment import Assignment
from models.group import Group
from models.group_member_detail import WEEKS_PER_SEMESTER, GroupMemberDetail
from models.person import Person

# === person formatters ===


def format_person_oneline(person: Person) -> str:
    return f"{person.name:<20} | {person.phone:<12} | {person.email}"


def format_person_multiline(person: Person) -> str:
    return dedent(
        f"""\
        {person.name}
        ... Phone: {person.phone}
        ... Email: {person.email}
        ... Address: {person.address}
        ... Tags: {formatters.format_tags(person.tags)}"""
    )


# === group formatters ===


def format_group_oneline(group: Group) -> str:
    return f"{group.name:<20} | {group.size:>3} members | {formatters.format_tags(group.tags)}"


def format_group_multiline(group: Group) -> str:
    lines = [
        formatters.format_banner_text(group.name),
        f"Tags: {formatters.format_tags(group.tags)}",
        f"Members ({group.size}):",
    ]
    lines += [f"  {format_member_detail(d)}" for d in group.member_details] or ["  [NO MEMBERS]"]
    lines.append(f"Assignments ({len(group.assignments)}):")
    lines += [f"  {format_assignment_oneline(a)}" for a in group.assignments] or ["  [NO ASSIGNMENTS]"]

    if group.assignments and group.member_details:
        lines.append("Grades:")
        lines += [f"  {format_member_grades(d, group.assignments)}" for d in group.member_details]

    return "\n".join(lines)


# === member formatters ===


def format_attendance_strip(detail: GroupMemberDetail) -> str:
    return "".join("X" if present else "." for present in detail.attendance)


def format_member_detail(detail: GroupMemberDetail) -> str:
    return (
        f"{detail.person.name:<20} | {detail.role.value:<8} | "
        f"{format_attendance_strip(detail)} ({detail.attendance_count}/{WEEKS_PER_SEMESTER})"
    )


def format_member_grades(detail: GroupMemberDetail, assignments: list[Assignment]) -> str:
    scores = ", ".join(
        f"{a.name} {formatters.format_score(detail.get_assignment_grade(a))}"
        for a in assignments
    )
    return f"{detail.person.name}: {scores}"


def format_attendance_report(person_name: str, group_name: str, attendance: dict[int, bool], present: int) -> str:
    lines = [
        f"Attendance for {person_name} in {group_name}:",
        f"Total attendance: {present}/{len(attendance)} weeks",
        "",
    ]
    lines += [
        f"Week {week}: {'Present' if was_present else 'Absent'}"
        for week, was_present in attendance.items()
    ]

    return "\n".join(lines)


# === assignment formatters ===


def format_assignment_oneline(assignment: Assignment) -> str:
    return (
        f"{assignment.name:<20} | due {formatters.format_deadline(assignment.deadline)}"
        f" | late penalty x{assignment.penalty:g}"
    )
