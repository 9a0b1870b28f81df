# cli/menu_helpers.py

"""
Helper functions for console interaction in the roster shell.

This module provides utilities for:
- Prompting for and confirming user input
- Displaying standard system messages and error feedback
"""

from enum import Enum

from core.response import Response
from models.roster import Roster

# === display methods ===


def display_response_failure(response: Response) -> None:
    """
    Displays a formatted error message based on a failed `Response`.

    Notes:
        - Does nothing if the response was successful.
        - Enum error codes are printed by name; string errors are printed as-is.
    """
    if response.success:
        return

    error_label = (
        response.error.name if isinstance(response.error, Enum) else str(response.error)
    )

    print(f"\n[ERROR: {error_label}] {response.detail}")


# === user input ===


def prompt_user_input(prompt: str) -> str:
    return input(f"{prompt}").strip()


def confirm_action(prompt: str) -> bool:
    while True:
        choice = prompt_user_input(f"{prompt} (y/n): ").lower()

        if choice == "y" or choice == "yes":
            return True

        elif choice == "n" or choice == "no":
            return False

        else:
            print("Invalid selection. Please try again.")


def confirm_unsaved_changes() -> bool:
    caution_banner()
    return confirm_action("You have unsaved changes. Would you like to save before exiting?")


def prompt_if_dirty(roster: Roster) -> None:
    if roster.has_unsaved_changes and confirm_unsaved_changes():
        response = roster.save()
        if not response.success:
            display_response_failure(response)


def caution_banner() -> None:
    print("\n" + "!" * 40)
    print(f"{'CAUTION':^40}")
    print("!" * 40)
