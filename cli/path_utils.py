# cli/path_utils.py

import os


def resolve_save_path(path_input: str) -> str:
    """
    Expands a user-entered save file path.

    Args:
        path_input (str): A file path, possibly relative or starting with `~`.

    Returns:
        An absolute path string. A path ending in a separator or naming an existing directory
        resolves to `roster.json` inside that directory.
    """
    save_path = os.path.abspath(os.path.expanduser(path_input.strip()))

    if path_input.strip().endswith(("/", os.sep)) or os.path.isdir(save_path):
        save_path = os.path.join(save_path, "roster.json")

    return save_path


def file_is_writable(save_path: str) -> bool:
    """
    Checks whether a save file can be written, either directly or by creating it.

    Returns:
        True if the file exists and is writable, or if the nearest existing ancestor directory is writable.
    """
    if os.path.exists(save_path):
        return os.path.isfile(save_path) and os.access(save_path, os.W_OK)

    parent = os.path.dirname(save_path) or "."
    while not os.path.exists(parent):
        parent = os.path.dirname(parent)

    return os.path.isdir(parent) and os.access(parent, os.W_OK)
