"""Exception classes for notemark.

Conversion itself never raises: malformed markdown degrades to simpler
structures. Exceptions exist only for the surfaces that accept structured
input, such as editor JSON loaded back into a tree.
"""

from __future__ import annotations


class NotemarkError(Exception):
    """Base exception for all notemark errors.

    Subclass this for specific error categories.
    """

    pass


class TreeError(NotemarkError, ValueError):
    """A document tree (or its JSON form) breaks a structural invariant.

    Raised by ``validate``, ``from_dict`` and ``from_json``.
    """

    def __init__(self, message: str, path: str = "") -> None:
        """Initialize tree error with an optional JSON path.

        Args:
            message: Error description
            path: Location of the offending node, e.g. ``content[2].content[0]``
        """
        self.message = message
        self.path = path
        location = f"{path}: " if path else ""
        super().__init__(f"{location}{message}")
