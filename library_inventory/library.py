import datetime
import logging
import os
from typing import Any, Callable, Dict, Iterator, List, Optional, Union

from library_inventory.book import Book
from library_inventory.exceptions import (
    BookNotFoundError,
    LibraryFileNotFoundError,
    LibraryIOError,
    MalformedDataError,
)
from library_inventory.validators import TextValidator

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

FIELD_SEPARATOR = ","
FIELD_COUNT = 5


def _system_year() -> int:
    return datetime.date.today().year


class Library:
    """Manages the collection of books and its flat-file persistence.

    Books are kept in a single dict keyed by ISBN. Dicts keep insertion
    order, so the same dict drives lookups, listing and the order of lines
    written by ``save``.
    """

    def __init__(self, current_year: Optional[Callable[[], int]] = None) -> None:
        self._books: Dict[str, Book] = {}
        self._current_year = current_year or _system_year

    def current_year(self) -> int:
        """Latest publication year accepted by load()."""
        return self._current_year()

    # ------------------------- Core operations ------------------------- #
    def count(self) -> int:
        """Number of distinct books, not copies."""
        return len(self._books)

    def add_book(self, book: Book) -> None:
        """Add a book. If the ISBN is already known, its copies are merged into the existing book."""
        existing = self._books.get(book.isbn)
        if existing is not None:
            existing.add_copies(book.total_copies)
            logger.debug(f"Merged {book.total_copies} copies into ISBN {book.isbn}")
            return
        self._books[book.isbn] = book

    def checkout(self, isbn: str) -> Book:
        """Check out one copy of the book with the given ISBN.

        Big-O: O(1) on average.
        Raises InvalidArgumentError for a blank ISBN, BookNotFoundError for an
        unknown one, and NoCopiesAvailableError when every copy is out.
        """
        book = self._get(isbn)
        book.checkout()
        logger.info(f"Checked out: {book.title} (Available copies: {book.available_copies})")
        return book

    def return_book(self, isbn: str) -> Book:
        """Return one copy of the book with the given ISBN.

        Big-O: O(1) on average.
        Raises AllCopiesAlreadyCheckedInError when no copy is checked out.
        """
        book = self._get(isbn)
        book.checkin()
        logger.info(f"Returned: {book.title} (Available copies: {book.available_copies})")
        return book

    def find_by_title_and_author(self, title: str, author: str) -> Book:
        """First book, in insertion order, whose title and author match ignoring case. O(n)."""
        TextValidator.require(title, "Title")
        TextValidator.require(author, "Author")
        wanted_title = title.casefold()
        wanted_author = author.casefold()
        for book in self._books.values():
            if book.title.casefold() == wanted_title and book.author.casefold() == wanted_author:
                return book
        raise BookNotFoundError(f"Book with title '{title}' and author '{author}' not found.")

    def find_by_isbn(self, isbn: str) -> Book:
        return self._get(isbn)

    def list_books(self) -> List[Book]:
        return list(self._books.values())

    def get_statistics(self) -> Dict[str, Any]:
        total_copies = sum(book.total_copies for book in self._books.values())
        available_copies = sum(book.available_copies for book in self._books.values())
        return {
            "total_books": len(self._books),
            "total_copies": total_copies,
            "available_copies": available_copies,
            "checked_out_copies": total_copies - available_copies,
            "unique_authors": len({book.author for book in self._books.values()}),
        }

    def __len__(self) -> int:
        return len(self._books)

    def __contains__(self, isbn: object) -> bool:
        return isbn in self._books

    def __iter__(self) -> Iterator[Book]:
        return iter(list(self._books.values()))

    # ------------------------- Persistence ------------------------- #
    def save(self, path: PathLike) -> None:
        """Write one ``title,author,isbn,year,total_copies`` line per book.

        Available copies are not written; a reload puts every copy back on
        the shelf. Commas inside a title or author are not escaped.
        """
        try:
            with open(path, "w", encoding="utf-8", newline="\n") as out:
                for book in self._books.values():
                    out.write(self._format_record(book))
        except OSError as exc:
            logger.error(f"Save unsuccessful. Output file unable to be opened: {path}. {exc}")
            raise LibraryIOError(f"Cannot write library file {path}: {exc}") from exc
        logger.info(f"Library successfully saved to {path}")

    def load(self, path: PathLike) -> None:
        """Replace the whole library with the contents of ``path``.

        The file is parsed into a fresh dict first; the current books are
        only swapped out once every line is valid. The last line for a given
        ISBN wins.
        """
        current_year = self.current_year()
        loaded: Dict[str, Book] = {}
        try:
            with open(path, "r", encoding="utf-8") as source:
                for line_number, line in enumerate(source, 1):
                    book = self._parse_record(line.rstrip("\r\n"), line_number, current_year)
                    loaded[book.isbn] = book
        except FileNotFoundError as exc:
            logger.error(f"Load unsuccessful. Cannot find file {path}.")
            raise LibraryFileNotFoundError(f"Cannot find library file {path}.") from exc
        except UnicodeDecodeError as exc:
            logger.error(f"Load unsuccessful. {path} is not valid UTF-8 text.")
            raise MalformedDataError(f"Library file {path} is not valid UTF-8 text.") from exc
        except MalformedDataError as exc:
            logger.error(f"Load unsuccessful due to file content error: {exc}")
            raise
        except OSError as exc:
            logger.error(f"Load unsuccessful. Cannot read {path}: {exc}")
            raise LibraryIOError(f"Cannot read library file {path}: {exc}") from exc

        self._books = loaded
        logger.info(f"Library successfully loaded from {path}")

    # ------------------------- Utilities ------------------------- #
    def _get(self, isbn: str) -> Book:
        TextValidator.require(isbn, "ISBN")
        book = self._books.get(isbn)
        if book is None:
            raise BookNotFoundError(f"Book with ISBN {isbn} not found in library.")
        return book

    @staticmethod
    def _format_record(book: Book) -> str:
        fields = [book.title, book.author, book.isbn, str(book.publication_year), str(book.total_copies)]
        return FIELD_SEPARATOR.join(fields) + "\n"

    @staticmethod
    def _parse_record(line: str, line_number: int, current_year: int) -> Book:
        raw_parts = line.split(FIELD_SEPARATOR)
        # Trailing empty fields are dropped, so "a,b,c,1,2," still has five
        while raw_parts and raw_parts[-1] == "":
            raw_parts.pop()
        parts = [part.strip() for part in raw_parts]
        if len(parts) != FIELD_COUNT:
            raise MalformedDataError(
                f"Line {line_number}: expected {FIELD_COUNT} fields, got {len(parts)}: '{line}'"
            )
        title, author, isbn, year_text, copies_text = parts
        try:
            publication_year = int(year_text)
            total_copies = int(copies_text)
        except ValueError as exc:
            raise MalformedDataError(f"Line {line_number}: non-integer values present: '{line}'") from exc

        if total_copies < 0:
            raise MalformedDataError(f"Line {line_number}: invalid number of copies for book with ISBN: {isbn}")
        if publication_year > current_year:
            raise MalformedDataError(f"Line {line_number}: invalid publication year for book with ISBN: {isbn}")
        return Book(title, author, isbn, publication_year, total_copies)
