class LibraryError(Exception):
    """Base exception for library inventory errors."""


class InvalidArgumentError(LibraryError, ValueError):
    """A required string is blank or a count is out of range."""


class BookNotFoundError(LibraryError, LookupError):
    """No book matches the requested ISBN or title/author."""


class CirculationError(LibraryError):
    """checkout/return violates the copy-count bounds."""


class NoCopiesAvailableError(CirculationError):
    """Every copy of the book is already checked out."""


class AllCopiesAlreadyCheckedInError(CirculationError):
    """No copy of the book is checked out, so nothing can be returned."""


class LibraryFileNotFoundError(LibraryError, FileNotFoundError):
    """The file given to load() does not exist."""


class MalformedDataError(LibraryError, ValueError):
    """A line of a library file cannot be turned into a book."""


class LibraryIOError(LibraryError, OSError):
    """A library file cannot be opened, read or written."""
