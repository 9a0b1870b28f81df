# tests/conftest.py

import datetime

import pytest

from models.address_book import AddressBook
from models.group import Group
from models.person import Person
from models.roster import Roster


@pytest.fixture
def sample_person():
    return Person("Alex Yeoh", "87438807", "alexyeoh@example.com", "Blk 30 Geylang Street 29", ["friends"])


@pytest.fixture
def sample_other_person():
    return Person("Bernice Yu", "99272758", "berniceyu@example.com", "Blk 30 Lorong 3 Serangoon Gardens", ["colleagues"])


@pytest.fixture
def sample_group():
    return Group("CS2103T", ["CS"])


@pytest.fixture
def sample_deadline():
    return datetime.date(2020, 1, 1)


@pytest.fixture
def sample_address_book(sample_person, sample_other_person, sample_group):
    address_book = AddressBook()
    address_book.add_person(sample_person)
    address_book.add_person(sample_other_person)
    address_book.add_group(sample_group)
    return address_book


@pytest.fixture
def save_path(tmp_path):
    return str(tmp_path / "data" / "roster.json")


@pytest.fixture
def sample_roster(save_path):
    roster = Roster(save_path)
    roster.add_person("Alex Yeoh", "87438807", "alexyeoh@example.com", "Blk 30 Geylang Street 29", ["friends"])
    roster.add_person("Bernice Yu", "99272758", "berniceyu@example.com", "Blk 30 Lorong 3", None)
    roster.add_group("CS2103T", ["CS"])
    roster.add_person_to_group("Alex Yeoh", "CS2103T")
    return roster
