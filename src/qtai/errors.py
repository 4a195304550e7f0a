from __future__ import annotations


class QtaiError(Exception):
    """Base class for failures that end the current command."""

    exit_code = 1


class NotFound(QtaiError):
    pass


class DuplicateKey(QtaiError):
    pass


class StructureMismatch(QtaiError):
    pass


class IndexOutOfBounds(QtaiError):
    pass


class IOFailure(QtaiError):
    pass


class UserDeclined(QtaiError):
    """The user answered no. Not a failure as far as the exit status goes."""

    exit_code = 0
