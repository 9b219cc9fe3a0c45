import logging

import pytest

from library_inventory.book import Book
from library_inventory.exceptions import (
    AllCopiesAlreadyCheckedInError,
    BookNotFoundError,
    InvalidArgumentError,
    LibraryError,
    NoCopiesAvailableError,
)


def test_empty_library(lib):
    assert lib.count() == 0
    assert len(lib) == 0
    assert lib.list_books() == []


def test_add_and_find(lib):
    book = Book("Ulysses", "James Joyce", "9780199535675", 1922, 2)
    lib.add_book(book)

    assert lib.count() == 1
    assert lib.find_by_isbn("9780199535675") is book
    assert "9780199535675" in lib


def test_add_same_isbn_merges_copies(lib):
    lib.add_book(Book("Sapiens", "Yuval Noah Harari", "X", 2011, 2))
    lib.add_book(Book("Sapiens", "Yuval Noah Harari", "X", 2011, 3))

    assert lib.count() == 1
    book = lib.find_by_isbn("X")
    assert book.total_copies == 5
    assert book.available_copies == 5


def test_merge_keeps_checked_out_copies(lib):
    lib.add_book(Book("Sapiens", "Yuval Noah Harari", "X", 2011, 1))
    lib.checkout("X")
    lib.add_book(Book("Sapiens", "Yuval Noah Harari", "X", 2011, 2))

    book = lib.find_by_isbn("X")
    assert book.total_copies == 3
    assert book.available_copies == 2


def test_list_books_keeps_insertion_order(lib):
    for isbn in ["3", "1", "2"]:
        lib.add_book(Book(f"Title {isbn}", "Author", isbn, 2000, 1))
    lib.add_book(Book("Title 3", "Author", "3", 2000, 1))

    assert [b.isbn for b in lib.list_books()] == ["3", "1", "2"]
    assert [b.isbn for b in lib] == ["3", "1", "2"]


def test_checkout_and_return(lib, caplog):
    lib.add_book(Book("Dune", "Frank Herbert", "111", 1965, 1))

    with caplog.at_level(logging.INFO, logger="library_inventory.library"):
        book = lib.checkout("111")
    assert book.available_copies == 0
    assert "Checked out: Dune (Available copies: 0)" in caplog.text

    with pytest.raises(NoCopiesAvailableError):
        lib.checkout("111")

    with caplog.at_level(logging.INFO, logger="library_inventory.library"):
        lib.return_book("111")
    assert lib.find_by_isbn("111").available_copies == 1
    assert "Returned: Dune (Available copies: 1)" in caplog.text

    with pytest.raises(AllCopiesAlreadyCheckedInError):
        lib.return_book("111")


@pytest.mark.parametrize("isbn", ["", "   ", None])
def test_blank_isbn_rejected(lib, isbn):
    lib.add_book(Book("Dune", "Frank Herbert", "111", 1965, 1))
    with pytest.raises(InvalidArgumentError, match="ISBN cannot be null or empty"):
        lib.checkout(isbn)
    with pytest.raises(InvalidArgumentError):
        lib.return_book(isbn)
    with pytest.raises(InvalidArgumentError):
        lib.find_by_isbn(isbn)


def test_unknown_isbn(lib):
    lib.add_book(Book("Dune", "Frank Herbert", "111", 1965, 1))
    with pytest.raises(BookNotFoundError, match="unknown-isbn"):
        lib.find_by_isbn("unknown-isbn")
    with pytest.raises(BookNotFoundError):
        lib.checkout("unknown-isbn")
    with pytest.raises(BookNotFoundError):
        lib.return_book("unknown-isbn")


def test_error_kinds_are_builtin_compatible(lib):
    with pytest.raises(ValueError):
        lib.find_by_isbn("")
    with pytest.raises(LookupError):
        lib.find_by_isbn("nope")
    with pytest.raises(LibraryError):
        lib.find_by_isbn("nope")


def test_find_by_title_and_author_ignores_case(lib):
    lib.add_book(Book("The Hobbit", "J.R.R. Tolkien", "1", 1937, 1))
    lib.add_book(Book("the hobbit", "j.r.r. tolkien", "2", 1937, 1))

    book = lib.find_by_title_and_author("THE HOBBIT", "j.r.r. TOLKIEN")
    assert book.isbn == "1"


def test_find_by_title_and_author_is_exact(lib):
    lib.add_book(Book("The Hobbit", "J.R.R. Tolkien", "1", 1937, 1))
    with pytest.raises(BookNotFoundError):
        lib.find_by_title_and_author("Hobbit", "J.R.R. Tolkien")


@pytest.mark.parametrize("title,author", [("", "Author"), ("Title", " "), (None, "Author")])
def test_find_by_title_and_author_blank_arguments(lib, title, author):
    with pytest.raises(InvalidArgumentError):
        lib.find_by_title_and_author(title, author)


def test_statistics(lib):
    lib.add_book(Book("A", "Same Author", "1", 2000, 2))
    lib.add_book(Book("B", "Same Author", "2", 2001, 3))
    lib.add_book(Book("C", "Other", "3", 2002, 1))
    lib.checkout("2")

    assert lib.get_statistics() == {
        "total_books": 3,
        "total_copies": 6,
        "available_copies": 5,
        "checked_out_copies": 1,
        "unique_authors": 2,
    }
