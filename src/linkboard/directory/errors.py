# LinkBoard exception hierarchy.
# Created: 2026-03-02


class LinkBoardError(Exception):
    """Base class for errors surfaced to HTTP callers."""

    status_code = 500


class InvalidDirectoryPayload(LinkBoardError, ValueError):
    """A write payload was neither a list of links nor a directory object."""

    status_code = 400


class InvalidAdminSecret(LinkBoardError, ValueError):
    """A new admin secret was empty or not a string."""

    status_code = 400


class DirectoryWriteError(LinkBoardError):
    """Every attempt to persist the directory failed.

    The last underlying error is chained as ``__cause__`` and kept on
    ``last_error``.
    """

    def __init__(self, message: str, *, attempts: int, last_error: BaseException | None):
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error


class AdminSecretWriteError(LinkBoardError):
    """The store rejected a new admin secret. The store error is ``__cause__``."""
