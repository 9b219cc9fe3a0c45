from __future__ import annotations

from library_inventory.exceptions import (
    AllCopiesAlreadyCheckedInError,
    InvalidArgumentError,
    NoCopiesAvailableError,
)


class Book:
    """A title held by the library together with its copy counts.

    Title, author, ISBN and publication year are fixed once created. The
    total number of copies only grows (through ``add_copies``), and the
    available copies move between 0 and the total through ``checkout`` and
    ``checkin``.
    """

    def __init__(self, title: str, author: str, isbn: str, publication_year: int, total_copies: int) -> None:
        if total_copies < 0:
            raise InvalidArgumentError(f"Number of copies cannot be negative: {total_copies}")
        self.title = title
        self.author = author
        self.isbn = isbn
        self.publication_year = publication_year
        self._total_copies = total_copies
        self._available_copies = total_copies

    @property
    def total_copies(self) -> int:
        return self._total_copies

    @property
    def available_copies(self) -> int:
        return self._available_copies

    @property
    def checked_out_copies(self) -> int:
        return self._total_copies - self._available_copies

    # ------------------------- Copy counts ------------------------- #
    def add_copies(self, count: int) -> None:
        """Add ``count`` copies; they are all available straight away."""
        if count < 0:
            raise InvalidArgumentError("Number of copies to add cannot be negative")
        self._total_copies += count
        self._available_copies += count

    def checkout(self) -> None:
        if self._available_copies <= 0:
            raise NoCopiesAvailableError(
                f"No copies available to checkout for book: '{self.title}' (ISBN: {self.isbn})"
            )
        self._available_copies -= 1

    def checkin(self) -> None:
        if self._available_copies >= self._total_copies:
            raise AllCopiesAlreadyCheckedInError(
                f"All copies of book: '{self.title}' (ISBN: {self.isbn}) are already checked in."
            )
        self._available_copies += 1

    def set_available_copies(self, count: int) -> None:
        """Set the available copies directly. Only meant for tests."""
        if count < 0 or count > self._total_copies:
            raise InvalidArgumentError(
                f"Invalid number of available copies: {count}. Must be between 0 and {self._total_copies}."
            )
        self._available_copies = count

    # ------------------------- Identity ------------------------- #
    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Book):
            return NotImplemented
        return (self.title, self.author, self.isbn) == (other.title, other.author, other.isbn)

    def __hash__(self) -> int:
        return hash((self.title, self.author, self.isbn))

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return (
            f"Title: '{self.title}', Author: '{self.author}', ISBN: '{self.isbn}', "
            f"Year: {self.publication_year}, Total Copies: {self._total_copies}, "
            f"Available Copies: {self._available_copies}"
        )

    def __repr__(self) -> str:
        return f"Book(isbn={self.isbn!r}, title={self.title!r}, available={self._available_copies}/{self._total_copies})"

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "author": self.author,
            "isbn": self.isbn,
            "publication_year": self.publication_year,
            "total_copies": self._total_copies,
            "available_copies": self._available_copies,
        }
