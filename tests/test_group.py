# tests/test_group.py

import datetime
import logging

import pytest

from core.exceptions import (
    AssignmentNotFoundError,
    DuplicateAssignmentError,
    DuplicateError,
    MemberNotFoundError,
    ValidationError,
)
from models.group import Group
from models.group_member_detail import Role
from models.person import Person


def test_group_init(sample_group):
    assert sample_group.name == "CS2103T"
    assert sample_group.tags == {"CS"}
    assert sample_group.size == 0
    assert sample_group.members == []
    assert sample_group.assignments == []


@pytest.mark.parametrize("name", ["CS2103T T12", "O'Brien's Tutorial", "Group-A"])
def test_valid_names(name):
    assert Group(name).name == name


@pytest.mark.parametrize("name", ["", "  ", "-Group", "CS/2103", "Group!"])
def test_invalid_names_raise(name):
    with pytest.raises(ValidationError):
        Group(name)


def test_equality_uses_name_and_tags():
    assert Group("CS2103T", ["CS"]) == Group("CS2103T", ["CS"])
    assert Group("CS2103T", ["CS"]) != Group("CS2103T")
    assert Group("CS2103T", ["CS"]).is_same_group(Group("CS2103T"))


def test_edit(sample_group):
    sample_group.edit(name="CS2103T T12")
    assert sample_group.name == "CS2103T T12"
    assert sample_group.tags == {"CS"}

    sample_group.edit(tags=[])
    assert sample_group.tags == frozenset()


def test_failed_edit_leaves_group_unchanged(sample_group):
    with pytest.raises(ValidationError):
        sample_group.edit(name="Renamed", tags=["not valid"])

    assert sample_group.name == "CS2103T"


# === membership ===


def test_add_then_contains(sample_group, sample_person):
    detail = sample_group.add(sample_person)

    assert sample_group.contains(sample_person)
    assert sample_group.members == [sample_person]
    assert detail.group is sample_group
    assert detail.role is Role.STUDENT


def test_add_twice_raises_duplicate(sample_group, sample_person):
    sample_group.add(sample_person)

    with pytest.raises(DuplicateError):
        sample_group.add(sample_person)

    assert sample_group.size == 1


def test_members_keep_insertion_order(sample_group, sample_person, sample_other_person):
    sample_group.add(sample_other_person)
    sample_group.add(sample_person)

    assert sample_group.members == [sample_other_person, sample_person]


def test_remove(sample_group, sample_person):
    sample_group.add(sample_person)
    sample_group.remove(sample_person)

    assert not sample_group.contains(sample_person)

    with pytest.raises(MemberNotFoundError):
        sample_group.remove(sample_person)


def test_member_found_after_person_is_edited(sample_group, sample_person):
    sample_group.add(sample_person)
    sample_person.edit(name="Alex Tan")

    assert sample_group.contains(sample_person)
    assert sample_group.get_member_detail(sample_person).person.name == "Alex Tan"


def test_set_member_role(sample_group, sample_person):
    sample_group.add(sample_person)
    sample_group.set_member_role(sample_person, Role.LECTURER)

    assert sample_group.get_member_detail(sample_person).role is Role.LECTURER


def test_attendance_for_non_member_raises(sample_group, sample_person):
    with pytest.raises(MemberNotFoundError):
        sample_group.mark_attendance(sample_person, 1)


def test_mark_and_unmark_attendance(sample_group, sample_person):
    sample_group.add(sample_person)

    sample_group.mark_attendance(sample_person, 13)
    assert sample_group.get_member_detail(sample_person).was_present_in(13)

    sample_group.unmark_attendance(sample_person, 13)
    assert not sample_group.get_member_detail(sample_person).was_present_in(13)


# === assignments ===


def test_add_assignment(sample_group, sample_deadline):
    assignment = sample_group.add_assignment("Lab 1", sample_deadline)

    assert sample_group.has_assignment("Lab 1")
    assert sample_group.get_assignment("Lab 1") is assignment
    assert assignment.penalty == 1.0


def test_assignment_names_are_case_sensitive(sample_group, sample_deadline):
    sample_group.add_assignment("Lab 1", sample_deadline)
    sample_group.add_assignment("lab 1", sample_deadline)

    assert len(sample_group.assignments) == 2

    with pytest.raises(DuplicateAssignmentError):
        sample_group.add_assignment("Lab 1", sample_deadline)


def test_get_missing_assignment_raises(sample_group):
    with pytest.raises(AssignmentNotFoundError):
        sample_group.get_assignment("Lab 9")


def test_edit_assignment_keeps_grades(sample_group, sample_person, sample_deadline):
    sample_group.add(sample_person)
    sample_group.add_assignment("Lab 1", sample_deadline)
    sample_group.grade_assignment(sample_person, "Lab 1", 50)

    edited = sample_group.edit_assignment("Lab 1", "Lab One", datetime.date(2030, 1, 1), 0.8)

    assert edited.name == "Lab One"
    assert edited.deadline == datetime.date(2030, 1, 1)
    assert edited.penalty == 0.8
    assert not sample_group.has_assignment("Lab 1")
    assert sample_group.get_grade(sample_person, "Lab One") == 50.0


def test_edit_assignment_to_own_name(sample_group, sample_deadline):
    sample_group.add_assignment("Lab 1", sample_deadline)
    sample_group.edit_assignment("Lab 1", "Lab 1", penalty=0.5)

    assert sample_group.get_assignment("Lab 1").penalty == 0.5


def test_edit_assignment_to_taken_name_raises(sample_group, sample_deadline):
    sample_group.add_assignment("Lab 1", sample_deadline)
    sample_group.add_assignment("Lab 2", sample_deadline)

    with pytest.raises(DuplicateAssignmentError):
        sample_group.edit_assignment("Lab 2", "Lab 1")

    assert sample_group.has_assignment("Lab 2")


def test_failed_edit_assignment_changes_nothing(sample_group, sample_deadline):
    sample_group.add_assignment("Lab 1", sample_deadline)

    with pytest.raises(ValidationError):
        sample_group.edit_assignment("Lab 1", "Lab One", penalty=-1)

    assignment = sample_group.get_assignment("Lab 1")
    assert assignment.penalty == 1.0


def test_remove_assignment_drops_grades(sample_group, sample_person, sample_deadline):
    sample_group.add(sample_person)
    assignment = sample_group.add_assignment("Lab 1", sample_deadline)
    sample_group.grade_assignment(sample_person, "Lab 1", 50)

    removed = sample_group.remove_assignment("Lab 1")

    assert removed is assignment
    assert not sample_group.has_assignment("Lab 1")
    assert sample_group.get_member_detail(sample_person).grades == {}


def test_late_grade_stores_penalized_score(sample_group, sample_person):
    sample_group.add(sample_person)
    sample_group.add_assignment("Assignment 1", datetime.date(2020, 1, 1), 0.5)

    stored = sample_group.grade_assignment(sample_person, "Assignment 1", 80.0)

    assert stored == 40.0
    assert sample_group.get_grade(sample_person, "Assignment 1") == 40.0


def test_grade_non_member_raises(sample_group, sample_person, sample_deadline):
    sample_group.add_assignment("Lab 1", sample_deadline)

    with pytest.raises(MemberNotFoundError):
        sample_group.grade_assignment(sample_person, "Lab 1", 10)


# === persistence ===


def test_to_dict_and_from_dict(sample_group, sample_person, sample_deadline):
    sample_group.add(sample_person)
    sample_group.add_assignment("Lab 1", sample_deadline, 0.5)
    sample_group.grade_assignment(sample_person, "Lab 1", 10, today=datetime.date(2019, 1, 1))
    sample_group.mark_attendance(sample_person, 1)

    loaded = Group.from_dict(sample_group.to_dict(), {"Alex Yeoh": sample_person})

    assert loaded == sample_group
    assert loaded.members == [sample_person]
    assert loaded.get_grade(sample_person, "Lab 1") == 10.0
    assert loaded.get_member_detail(sample_person).was_present_in(1)
    assert loaded.get_member_detail(sample_person).group is loaded


def test_from_dict_drops_unknown_members(sample_person, caplog):
    data = {
        "name": "CS2103T",
        "tags": [],
        "assignments": [],
        "members": [{"person": "Ghost"}, {"person": "Alex Yeoh"}, {"person": "Alex Yeoh"}],
    }

    with caplog.at_level(logging.WARNING):
        loaded = Group.from_dict(data, {"Alex Yeoh": sample_person})

    assert loaded.members == [sample_person]
    assert "Ghost" in caplog.text


def test_from_dict_rejects_duplicate_assignments():
    data = {
        "name": "CS2103T",
        "assignments": [
            {"name": "Lab 1", "deadline": "2020-01-01"},
            {"name": "Lab 1", "deadline": "2020-02-01"},
        ],
    }

    with pytest.raises(ValidationError):
        Group.from_dict(data, {})


def test_from_dict_rejects_malformed_assignment():
    data = {"name": "CS2103T", "assignments": [{"name": "Lab 1", "deadline": "yesterday"}]}

    with pytest.raises(ValidationError):
        Group.from_dict(data, {})


def test_person_from_other_instance_is_member_when_equal(sample_group, sample_person):
    sample_group.add(sample_person)
    twin = Person.from_dict(sample_person.to_dict())

    assert sample_group.contains(twin)


def test_group_is_not_hashable(sample_group):
    with pytest.raises(TypeError):
        hash(sample_group)
