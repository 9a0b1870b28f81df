# cli/main.py

"""
Entry point for the roster shell.

Loads the roster named by the runtime settings, then reads commands until `exit`.
"""

import cli.commands as commands
import cli.menu_helpers as helpers
import core.formatters as formatters
from cli.path_utils import resolve_save_path
from core.config import Settings
from core.logging_config import get_logger, setup_logging
from models.roster import Roster

logger = get_logger(__name__)


def run_cli(settings: Settings) -> None:
    """
    Loads the roster and runs the read-execute-print loop.

    Raises:
        SystemExit: If the roster file exists but cannot be loaded.

    Notes:
        - A missing save file is not an error; the roster starts empty and the file is created on save.
        - End of input (Ctrl-D) is treated the same as the `exit` command.
    """
    title = formatters.format_banner_text("ROSTER MANAGER")
    print(f"\n{title}\n")

    roster = load_roster(resolve_save_path(settings.data_file))

    while True:
        try:
            command_text = helpers.prompt_user_input("> ")

        except EOFError:
            print()
            break

        if not command_text:
            continue

        if commands.is_exit_command(command_text):
            break

        _, output = commands.execute(roster, command_text)
        print(output)

    exit_program(roster)


def load_roster(save_path: str) -> Roster:
    """
    Loads the roster stored at `save_path`.

    Raises:
        SystemExit: If loading fails, after displaying the error.
    """
    roster_response = Roster.load(save_path)

    if not roster_response.success:
        helpers.display_response_failure(roster_response)
        raise SystemExit(1)

    if roster_response.detail:
        print(roster_response.detail)

    roster = roster_response.data["roster"]
    print(
        f"Loaded {len(roster.persons)} persons and {len(roster.groups)} groups. "
        'Type "help" to see the list of commands.'
    )

    return roster


def exit_program(roster: Roster) -> None:
    """
    Offers to save unsaved changes, then displays an exit banner and terminates the program.

    Raises:
        SystemExit: Always raised to immediately terminate execution.
    """
    helpers.prompt_if_dirty(roster)

    exit_banner = formatters.format_banner_text("Exiting Program")
    print(f"\n{exit_banner}\n")

    raise SystemExit


def main() -> None:
    settings = Settings.from_env()
    setup_logging(settings.log_level, settings.log_file)
    logger.debug("Starting with %s", settings)

    run_cli(settings)


if __name__ == "__main__":
    main()
