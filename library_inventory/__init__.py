"""Library Inventory - core package

This package contains:
- Data model with copy-count rules (book.py)
- Inventory management and file persistence (library.py)
- Error kinds (exceptions.py)
- CLI interface (main.py)
"""

from library_inventory.book import Book
from library_inventory.exceptions import (
    AllCopiesAlreadyCheckedInError,
    BookNotFoundError,
    CirculationError,
    InvalidArgumentError,
    LibraryError,
    LibraryFileNotFoundError,
    LibraryIOError,
    MalformedDataError,
    NoCopiesAvailableError,
)
from library_inventory.library import Library

__all__ = [
    "AllCopiesAlreadyCheckedInError",
    "Book",
    "BookNotFoundError",
    "CirculationError",
    "InvalidArgumentError",
    "Library",
    "LibraryError",
    "LibraryFileNotFoundError",
    "LibraryIOError",
    "MalformedDataError",
    "NoCopiesAvailableError",
]
