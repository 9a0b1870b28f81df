# models/person.py

"""
Represents a Person (usually a student) in the address book.

Stores identifying contact information: name, phone, email, address, and a set of tags.

Two notions of sameness are supported:
- `is_same_person()`: the weaker identity check, true when both persons share a name.
  The address book uses it to keep names unique.
- `==`: the stronger check, true only when every field matches.

Persons are shared by reference between the address book and every Group they belong to,
so edits are applied in place with `edit()` and are visible everywhere at once.
"""

from __future__ import annotations

import re
from typing import Iterable

from core.exceptions import ValidationError
from models.tag import validate_tags_input


class Person:

    def __init__(
        self,
        name: str,
        phone: str,
        email: str,
        address: str,
        tags: Iterable[str] | None = None,
    ):
        # fields use setter methods for validation
        self.name = name
        self.phone = phone
        self.email = email
        self.address = address
        self.tags = tags

    # === properties ===

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._name = Person.validate_name_input(name)

    @property
    def phone(self) -> str:
        return self._phone

    @phone.setter
    def phone(self, phone: str) -> None:
        self._phone = Person.validate_phone_input(phone)

    @property
    def email(self) -> str:
        return self._email

    @email.setter
    def email(self, email: str) -> None:
        self._email = Person.validate_email_input(email)

    @property
    def address(self) -> str:
        return self._address

    @address.setter
    def address(self, address: str) -> None:
        self._address = Person.validate_address_input(address)

    @property
    def tags(self) -> frozenset[str]:
        return frozenset(self._tags)

    @tags.setter
    def tags(self, tags: Iterable[str] | None) -> None:
        self._tags = validate_tags_input(tags)

    # === identity ===

    def is_same_person(self, other: Person | None) -> bool:
        if other is self:
            return True

        return other is not None and other.name == self.name

    def edit(
        self,
        name: str | None = None,
        phone: str | None = None,
        email: str | None = None,
        address: str | None = None,
        tags: Iterable[str] | None = None,
    ) -> None:
        """
        Updates any supplied fields in place; `None` leaves a field unchanged.

        All values are validated before any field is written, so a failed edit leaves the person untouched.

        Raises:
            ValidationError: If any supplied value is invalid.
        """
        new_name = Person.validate_name_input(name) if name is not None else self._name
        new_phone = (
            Person.validate_phone_input(phone) if phone is not None else self._phone
        )
        new_email = (
            Person.validate_email_input(email) if email is not None else self._email
        )
        new_address = (
            Person.validate_address_input(address)
            if address is not None
            else self._address
        )
        new_tags = validate_tags_input(tags) if tags is not None else self._tags

        self._name = new_name
        self._phone = new_phone
        self._email = new_email
        self._address = new_address
        self._tags = set(new_tags)

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "name": self._name,
            "phone": self._phone,
            "email": self._email,
            "address": self._address,
            "tags": sorted(self._tags),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Person:
        return cls(
            name=data["name"],
            phone=data["phone"],
            email=data["email"],
            address=data["address"],
            tags=data.get("tags", []),
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True

        if not isinstance(other, Person):
            return NotImplemented

        return (
            self._name == other._name
            and self._phone == other._phone
            and self._email == other._email
            and self._address == other._address
            and self._tags == other._tags
        )

    # edited in place, so not usable as a set member or dict key
    __hash__ = None

    def __repr__(self) -> str:
        return f"Person({self._name}, {self._phone}, {self._email}, {self._address}, {sorted(self._tags)})"

    def __str__(self) -> str:
        return f"PERSON: {self._name}; Phone: {self._phone}; Email: {self._email}; Address: {self._address}"

    # === data validators ===

    @staticmethod
    def validate_name_input(name: str) -> str:
        """
        Validates and normalizes a Person name.

        Strips surrounding whitespace, then requires at least one alphanumeric character
        followed only by alphanumerics and spaces.

        Raises:
            ValidationError: If the name is blank or contains other characters.
        """
        name = name.strip()
        if not re.fullmatch(r"[A-Za-z0-9][A-Za-z0-9 ]*", name):
            raise ValidationError(
                "Invalid name. Names should only contain alphanumeric characters and spaces, and should not be blank."
            )
        return name

    @staticmethod
    def validate_phone_input(phone: str) -> str:
        phone = phone.strip()
        if not re.fullmatch(r"\d{3,}", phone):
            raise ValidationError(
                "Invalid phone number. Phone numbers should only contain digits and be at least 3 digits long."
            )
        return phone

    @staticmethod
    def validate_email_input(email: str) -> str:
        """
        Validates a Person email address.

        Ensures the email:
            - Contains exactly one '@' symbol
            - Has non-whitespace characters on both sides of the '@'
            - Contains at least one '.' after the '@' to separate the domain and TLD

        Raises:
            ValidationError: If the email does not conform to the expected format.
        """
        email = email.strip()
        if not re.fullmatch(r"^[^@\s]+@[^@\s]+\.[^@\s]+$", email):
            raise ValidationError(
                "Invalid email. Email must be a valid address with one @ and a domain."
            )
        return email

    @staticmethod
    def validate_address_input(address: str) -> str:
        address = address.strip()
        if not address:
            raise ValidationError("Invalid address. Addresses can take any value, but should not be blank.")
        return address
