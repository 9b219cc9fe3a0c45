import json
import os
from typing import Any, Dict, List

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from library_inventory.book import Book

# Environment variable controlling CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"

_console = Console()


def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in {"plain", "json", "rich"}:
        os.environ[OUTPUT_MODE_ENV] = mode


def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, "plain").lower()


def _copies(book: Book) -> str:
    return f"{book.available_copies}/{book.total_copies}"


def print_list_result(books: List[Book]) -> None:
    """Print the book list in the current output mode.
    - plain: 'ISBN - Title by Author (Year) [available/total]' lines, or 'No books in library.'
    - json: JSON array of book dicts
    - rich: Rich table
    """
    mode = get_output_mode()

    if not books:
        print("No books in library.")
        return

    if mode == "json":
        print(json.dumps([b.to_dict() for b in books], ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="📚 Books", show_lines=True, header_style="bold cyan")
        table.add_column("ISBN", style="magenta", no_wrap=True)
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        table.add_column("Year", justify="right")
        table.add_column("Available", justify="right", style="green")
        for b in books:
            table.add_row(escape(b.isbn), escape(b.title), escape(b.author), str(b.publication_year), _copies(b))
        _console.print(table)
    else:
        for b in books:
            print(f"{b.isbn} - {b.title} by {b.author} ({b.publication_year}) [{_copies(b)}]")


def print_book_result(book: Book) -> None:
    mode = get_output_mode()

    if mode == "json":
        print(json.dumps(book.to_dict(), ensure_ascii=False))
    elif mode == "rich":
        _console.print(Panel.fit(
            f"[bold]Title:[/] {escape(book.title)}\n"
            f"[bold]Author:[/] {escape(book.author)}\n"
            f"[bold]ISBN:[/] {escape(book.isbn)}\n"
            f"[bold]Year:[/] {book.publication_year}\n"
            f"[bold]Available:[/] {_copies(book)}",
            title="🔍 Book Found",
            border_style="green",
        ))
    else:
        print("Book Found")
        print(f"Title: {book.title}")
        print(f"Author: {book.author}")
        print(f"ISBN: {book.isbn}")
        print(f"Year: {book.publication_year}")
        print(f"Available Copies: {_copies(book)}")


STAT_LABELS = [
    ("total_books", "Total Books"),
    ("total_copies", "Total Copies"),
    ("available_copies", "Available Copies"),
    ("checked_out_copies", "Checked Out"),
    ("unique_authors", "Unique Authors"),
]


def print_stats_result(stats: Dict[str, Any]) -> None:
    """Print statistics in the current output mode."""
    mode = get_output_mode()
    rows = [(label, stats.get(key, 0)) for key, label in STAT_LABELS]

    if mode == "json":
        print(json.dumps({key: stats.get(key, 0) for key, _ in STAT_LABELS}, ensure_ascii=False))
    elif mode == "rich":
        content = "\n".join(f"[bold]{label}:[/] {value}" for label, value in rows)
        _console.print(Panel.fit(content, title="📊 Stats", border_style="blue"))
    else:
        for label, value in rows:
            print(f"{label}: {value}")
