"""Domain exceptions for revtree.

Every failure surfaced by a session is one of these. Errors coming from the
git client or the filesystem are chained (``raise ... from e``) so the
original cause stays available to the caller. They should be caught at the
application boundary (CLI) and converted to user-facing messages.
"""


class RevtreeError(Exception):
    """Base exception for all revtree errors.

    Attributes:
        message: User-facing error message.
        hint: Optional actionable suggestion.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class NotARepositoryError(RevtreeError):
    """Raised when a local path is not a working copy."""

    pass


class UnreachableError(RevtreeError):
    """Raised when the repository's remote cannot be reached."""

    pass


class CloneError(RevtreeError):
    """Raised when a remote repository cannot be cloned."""

    pass


class TagQueryError(RevtreeError):
    """Raised when the tag list cannot be read from the repository."""

    pass


class NoTagsError(RevtreeError):
    """Raised when the repository has no tags at all."""

    pass


class NoValidSemverTagError(RevtreeError):
    """Raised when the repository has tags but none is a semantic version."""

    pass


class VersionQueryError(RevtreeError):
    """Raised when the checked-out version cannot be determined."""

    pass


class CheckoutError(RevtreeError):
    """Raised when the working copy cannot be switched to a revision."""

    pass


class ReadError(RevtreeError):
    """Raised when a directory or file cannot be read.

    Attributes:
        revision: Revision the read was made against.
        path: Path that failed.
    """

    def __init__(self, message: str, revision: str, path: str, hint: str | None = None) -> None:
        super().__init__(message, hint=hint)
        self.revision = revision
        self.path = path
