# tests/test_roster.py

import datetime
import json
import os

import pytest

from core.response import ErrorCode
from models.group_member_detail import Role
from models.roster import Roster


def test_create_new_roster(save_path):
    response = Roster.create(save_path)

    assert response.success
    assert os.path.exists(save_path)
    assert response.data["roster"].persons == []


def test_load_missing_file_starts_empty(save_path):
    response = Roster.load(save_path)

    assert response.success
    assert response.data["roster"].groups == []
    assert not os.path.exists(save_path)


def test_load_invalid_json(tmp_path):
    path = tmp_path / "roster.json"
    path.write_text("{not json")

    response = Roster.load(str(path))

    assert not response.success
    assert response.error is ErrorCode.INVALID_INPUT


def test_load_non_object_json(tmp_path):
    path = tmp_path / "roster.json"
    path.write_text("[]")

    response = Roster.load(str(path))

    assert not response.success
    assert response.error is ErrorCode.INVALID_INPUT


@pytest.mark.parametrize("data", [{"persons": None}, {"persons": [], "groups": 5}, {"persons": {"name": "Alex"}}])
def test_load_non_list_records(tmp_path, data):
    path = tmp_path / "roster.json"
    path.write_text(json.dumps(data))

    response = Roster.load(str(path))

    assert not response.success
    assert response.error is ErrorCode.VALIDATION_FAILED


def test_load_invalid_record(tmp_path):
    path = tmp_path / "roster.json"
    path.write_text(json.dumps({"persons": [{"name": "!", "phone": "1", "email": "x", "address": ""}]}))

    response = Roster.load(str(path))

    assert not response.success
    assert response.error is ErrorCode.VALIDATION_FAILED


def test_save_and_load(sample_roster, save_path):
    sample_roster.add_assignment("Lab 1", "CS2103T", datetime.date(2020, 1, 1), 0.5)
    sample_roster.grade_assignment("Alex Yeoh", "CS2103T", "Lab 1", 80.0)
    sample_roster.mark_attendance("Alex Yeoh", "CS2103T", 3)
    sample_roster.set_member_role("Alex Yeoh", "CS2103T", "TA")

    assert sample_roster.save().success
    assert not sample_roster.has_unsaved_changes

    with open(save_path) as f:
        raw = json.load(f)

    assert [p["name"] for p in raw["persons"]] == ["Alex Yeoh", "Bernice Yu"]
    assert raw["groups"][0]["members"][0]["grades"] == {"Lab 1": 40.0}

    loaded = Roster.load(save_path).data["roster"]
    group = loaded.address_book.get_group("CS2103T")
    person = loaded.address_book.get_person("Alex Yeoh")

    assert loaded.address_book == sample_roster.address_book
    assert group.get_grade(person, "Lab 1") == 40.0
    assert group.get_member_detail(person).role is Role.TEACHING_ASSISTANT
    assert group.get_member_detail(person).was_present_in(3)
    assert not loaded.has_unsaved_changes


def test_save_failure_keeps_dirty_flag(sample_roster, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("")

    response = sample_roster.save(str(blocker / "roster.json"))

    assert not response.success
    assert response.error is ErrorCode.INTERNAL_ERROR
    assert response.status_code == 500
    assert sample_roster.has_unsaved_changes


# === dirty flag ===


def test_new_roster_is_clean(save_path):
    assert not Roster(save_path).has_unsaved_changes


def test_successful_operation_marks_dirty(save_path):
    roster = Roster(save_path)
    roster.add_group("CS2103T")

    assert roster.has_unsaved_changes


def test_failed_operation_does_not_mark_dirty(save_path):
    roster = Roster(save_path)
    response = roster.add_group("Bad/Name")

    assert not response.success
    assert not roster.has_unsaved_changes


# === persons ===


def test_add_person(save_path):
    roster = Roster(save_path)
    response = roster.add_person("Alex Yeoh", "87438807", "alex@example.com", "Geylang", ["friends"])

    assert response.success
    assert response.data["record"].name == "Alex Yeoh"
    assert response.detail == "New person added: Alex Yeoh"


def test_add_duplicate_person(sample_roster):
    response = sample_roster.add_person("Alex Yeoh", "1234", "a@b.com", "Somewhere")

    assert not response.success
    assert response.error is ErrorCode.DUPLICATE_RECORD
    assert response.status_code == 409


def test_add_invalid_person(sample_roster):
    response = sample_roster.add_person("Alex Tan", "12", "a@b.com", "Somewhere")

    assert not response.success
    assert response.error is ErrorCode.VALIDATION_FAILED
    assert len(sample_roster.persons) == 2


def test_edit_person_is_visible_in_groups(sample_roster):
    response = sample_roster.edit_person("Alex Yeoh", new_name="Alex Tan")

    assert response.success
    assert sample_roster.address_book.get_group("CS2103T").members[0].name == "Alex Tan"


def test_delete_person_reports_groups(sample_roster):
    response = sample_roster.delete_person("Alex Yeoh")

    assert response.success
    assert response.data["groups"] == ["CS2103T"]
    assert sample_roster.address_book.get_group("CS2103T").size == 0

    again = sample_roster.delete_person("Alex Yeoh")
    assert again.error is ErrorCode.NOT_FOUND
    assert again.status_code == 404


def test_list_and_find_persons(sample_roster):
    assert sample_roster.list_persons().detail == "2 persons listed!"

    response = sample_roster.find_persons(["bernice"])
    assert [p.name for p in response.data["records"]] == ["Bernice Yu"]


# === groups ===


def test_edit_group_rename_collision(sample_roster):
    sample_roster.add_group("CS2101")

    response = sample_roster.edit_group("CS2101", new_name="CS2103T")

    assert response.error is ErrorCode.DUPLICATE_RECORD
    assert sample_roster.address_book.get_group("CS2101").name == "CS2101"


def test_delete_missing_group(sample_roster):
    response = sample_roster.delete_group("CS9999")

    assert not response.success
    assert response.error is ErrorCode.NOT_FOUND


def test_show_group_details(sample_roster):
    response = sample_roster.show_group_details("CS2103T")

    assert response.success
    assert [d.person.name for d in response.data["details"]] == ["Alex Yeoh"]
    assert response.data["assignments"] == []


# === membership ===


def test_add_person_to_group_twice(sample_roster):
    response = sample_roster.add_person_to_group("Alex Yeoh", "CS2103T")
    assert response.error is ErrorCode.DUPLICATE_RECORD


def test_delete_non_member_from_group(sample_roster):
    response = sample_roster.delete_person_from_group("Bernice Yu", "CS2103T")
    assert response.error is ErrorCode.NOT_FOUND


def test_set_invalid_role(sample_roster):
    response = sample_roster.set_member_role("Alex Yeoh", "CS2103T", "Dean")
    assert response.error is ErrorCode.VALIDATION_FAILED


# === assignments and attendance ===


def test_late_grading(sample_roster):
    sample_roster.add_assignment("Assignment 1", "CS2103T", datetime.date(2020, 1, 1), 0.5)

    response = sample_roster.grade_assignment("Alex Yeoh", "CS2103T", "Assignment 1", 80.0)

    assert response.success
    assert response.data["score"] == 40.0


def test_on_time_grading(sample_roster):
    sample_roster.add_assignment("Assignment 1", "CS2103T", datetime.date(2020, 1, 1), 0.5)

    response = sample_roster.grade_assignment(
        "Alex Yeoh", "CS2103T", "Assignment 1", 80.0, today=datetime.date(2019, 12, 31)
    )

    assert response.data["score"] == 80.0


def test_grade_missing_assignment(sample_roster):
    response = sample_roster.grade_assignment("Alex Yeoh", "CS2103T", "Ghost", 1)
    assert response.error is ErrorCode.NOT_FOUND


def test_edit_and_delete_assignment(sample_roster):
    sample_roster.add_assignment("Lab 1", "CS2103T", datetime.date(2020, 1, 1))

    edit_response = sample_roster.edit_assignment("Lab 1", "CS2103T", new_name="Lab A", penalty=0.9)
    assert edit_response.success
    assert edit_response.data["record"].penalty == 0.9

    assert sample_roster.delete_assignment("Lab A", "CS2103T").success
    assert sample_roster.delete_assignment("Lab A", "CS2103T").error is ErrorCode.NOT_FOUND


def test_attendance_round_trip(sample_roster):
    assert sample_roster.mark_attendance("Alex Yeoh", "CS2103T", 1).success
    assert sample_roster.mark_attendance("Alex Yeoh", "CS2103T", 13).success

    report = sample_roster.show_attendance("Alex Yeoh", "CS2103T")
    assert report.data["present"] == 2
    assert report.data["attendance"][1] is True
    assert report.data["attendance"][2] is False
    assert len(report.data["attendance"]) == 13

    assert sample_roster.unmark_attendance("Alex Yeoh", "CS2103T", 1).success
    assert sample_roster.show_attendance("Alex Yeoh", "CS2103T").data["present"] == 1


def test_mark_attendance_out_of_range(sample_roster):
    response = sample_roster.mark_attendance("Alex Yeoh", "CS2103T", 0)

    assert response.error is ErrorCode.VALIDATION_FAILED
    assert "between 1 and 13" in response.detail
