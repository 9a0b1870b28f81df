# core/config.py

"""
Runtime settings for the roster application, read from environment variables.

    ROSTER_DATA_FILE   path of the JSON save file (default: ~/Documents/Rosters/roster.json)
    ROSTER_LOG_LEVEL   logging level name (default: WARNING)
    ROSTER_LOG_FILE    optional log file path (default: unset, console only)
"""

from __future__ import annotations

import os
from dataclasses import dataclass


def default_data_file() -> str:
    documents = os.path.join(os.path.expanduser("~"), "Documents")
    return os.path.join(documents, "Rosters", "roster.json")


@dataclass(frozen=True)
class Settings:
    data_file: str
    log_level: str = "WARNING"
    log_file: str | None = None

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        return cls(
            data_file=os.path.expanduser(
                env.get("ROSTER_DATA_FILE") or default_data_file()
            ),
            log_level=env.get("ROSTER_LOG_LEVEL", "WARNING").upper(),
            log_file=env.get("ROSTER_LOG_FILE") or None,
        )
