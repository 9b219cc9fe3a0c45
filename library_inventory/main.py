import logging
import os
import sys
from functools import wraps
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import IntPrompt, Prompt
from rich.table import Table

from library_inventory.book import Book
from library_inventory.config import settings
from library_inventory.exceptions import InvalidArgumentError, LibraryError
from library_inventory.library import Library
from library_inventory.ui_helpers import (
    print_book_result,
    print_list_result,
    print_stats_result,
    set_output_mode,
)
from library_inventory.validators import TextValidator

logger = logging.getLogger(__name__)

console = Console()


class LibraryManager:
    """Holds the Library for the current CLI session, loaded from the data file."""

    _instance: Optional[Library] = None
    _data_file: Optional[str] = None

    @classmethod
    def configure(cls, data_file: Optional[str]) -> None:
        cls._data_file = data_file
        cls._instance = None

    @classmethod
    def data_file(cls) -> str:
        return cls._data_file or settings.data_file

    @classmethod
    def get_instance(cls) -> Library:
        if cls._instance is None:
            lib = Library()
            path = cls.data_file()
            if os.path.exists(path):
                lib.load(path)
            else:
                logger.debug(f"No data file at {path}, starting with an empty library")
            cls._instance = lib
        return cls._instance

    @classmethod
    def start_empty(cls) -> Library:
        cls._instance = Library()
        return cls._instance


def new_book(lib: Library, title: str, author: str, isbn: str, year: int, copies: int) -> Book:
    """Build a Book from user input, rejecting anything the library file could not load back."""
    title = TextValidator.require_record_field(title, "Title").strip()
    author = TextValidator.require_record_field(author, "Author").strip()
    isbn = TextValidator.require_record_field(isbn, "ISBN").strip()
    if year > lib.current_year():
        raise InvalidArgumentError(f"Publication year {year} is in the future.")
    return Book(title, author, isbn, year, copies)


def report_library_errors(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except LibraryError as e:
            print(f"Error: {e}")
    return wrapper


# --- Typer CLI application ---
app = typer.Typer(help="Library inventory CLI")


@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    ),
    data_file: Optional[str] = typer.Option(
        None,
        "--file",
        "-f",
        help="Library data file (default: LIBRARY_DATA_FILE or library.txt)",
    ),
):
    """Global CLI options."""
    if output:
        set_output_mode(output)
    LibraryManager.configure(data_file)


@app.command("list")
@report_library_errors
def cli_list():
    """List every book with its available/total copies."""
    print_list_result(LibraryManager.get_instance().list_books())


@app.command("add")
@report_library_errors
def cli_add(title: str, author: str, isbn: str, year: int, copies: int):
    """Add copies of a book and save the library file."""
    lib = LibraryManager.get_instance()
    added = new_book(lib, title, author, isbn, year, copies)
    lib.add_book(added)
    lib.save(LibraryManager.data_file())
    book = lib.find_by_isbn(added.isbn)
    print(f"Added: {book.title} by {book.author} (Total copies: {book.total_copies})")


@app.command("find")
@report_library_errors
def cli_find(isbn: str):
    """Find a book by ISBN and show its details."""
    print_book_result(LibraryManager.get_instance().find_by_isbn(isbn))


@app.command("find-title")
@report_library_errors
def cli_find_title(title: str, author: str):
    """Find a book by title and author (case-insensitive)."""
    print_book_result(LibraryManager.get_instance().find_by_title_and_author(title, author))


@app.command("stats")
@report_library_errors
def cli_stats():
    """Show library statistics."""
    print_stats_result(LibraryManager.get_instance().get_statistics())


@app.command("shell")
def cli_shell():
    """Start the interactive menu."""
    run_menu()


# --- Interactive menu ---
def _add(lib: Library) -> None:
    title = Prompt.ask("Title")
    author = Prompt.ask("Author")
    isbn = Prompt.ask("ISBN")
    year = IntPrompt.ask("Publication year")
    copies = IntPrompt.ask("Number of copies", default=1)
    added = new_book(lib, title, author, isbn, year, copies)
    lib.add_book(added)
    book = lib.find_by_isbn(added.isbn)
    console.print(f"[green]Added:[/] [bold]{escape(book.title)}[/] (Total copies: {book.total_copies})")


def _checkout(lib: Library) -> None:
    book = lib.checkout(Prompt.ask("ISBN to check out"))
    console.print(f"[green]Checked out:[/] {escape(book.title)} (Available copies: {book.available_copies})")


def _return(lib: Library) -> None:
    book = lib.return_book(Prompt.ask("ISBN to return"))
    console.print(f"[green]Returned:[/] {escape(book.title)} (Available copies: {book.available_copies})")


def _find_isbn(lib: Library) -> None:
    print_book_result(lib.find_by_isbn(Prompt.ask("ISBN to find")))


def _find_title(lib: Library) -> None:
    title = Prompt.ask("Title")
    author = Prompt.ask("Author")
    print_book_result(lib.find_by_title_and_author(title, author))


def _save(lib: Library) -> None:
    path = Prompt.ask("Save to", default=LibraryManager.data_file())
    lib.save(path)
    console.print(f"[green]Library saved to {escape(path)}[/]")


def _load(lib: Library) -> None:
    path = Prompt.ask("Load from", default=LibraryManager.data_file())
    lib.load(path)
    console.print(f"[green]Loaded {lib.count()} books from {escape(path)}[/]")


MENU_ITEMS = [
    ("1", "List all books", "📚", lambda lib: print_list_result(lib.list_books())),
    ("2", "Add a book", "➕", _add),
    ("3", "Check out a book", "📤", _checkout),
    ("4", "Return a book", "📥", _return),
    ("5", "Find by ISBN", "🔎", _find_isbn),
    ("6", "Find by title and author", "💡", _find_title),
    ("7", "Save to file", "💾", _save),
    ("8", "Load from file", "📂", _load),
    ("9", "Show statistics", "📊", lambda lib: print_stats_result(lib.get_statistics())),
]


def run_menu() -> None:
    """Simple interactive menu over one in-memory library session."""
    try:
        lib = LibraryManager.get_instance()
    except LibraryError as e:
        console.print(f"[bold red]Could not open library:[/] {escape(str(e))}")
        lib = LibraryManager.start_empty()

    actions = {key: action for key, _, _, action in MENU_ITEMS}

    def render_menu() -> None:
        table = Table.grid(padding=(0, 2))
        table.add_column(justify="right", style="bold cyan", width=4)
        table.add_column(justify="left", style="white")
        for key, label, icon, _ in MENU_ITEMS:
            table.add_row(f"[reverse]{key}[/]", f"{icon} {label}")
        table.add_row("[reverse]0[/]", "🚪 Exit")
        console.print(Panel(table, title=settings.app_name, border_style="cyan", box=box.HEAVY, padding=(1, 2)))

    while True:
        render_menu()
        choice = Prompt.ask("Choose an option", choices=list(actions) + ["0"], default="1").strip()
        if choice == "0":
            console.print("[green]Goodbye![/]")
            break
        try:
            actions[choice](lib)
        except LibraryError as e:
            console.print(f"[bold red]Error:[/] {escape(str(e))}")
        print()


def run() -> None:
    level = "DEBUG" if settings.debug else settings.log_level
    logging.basicConfig(level=level, format="[%(levelname)s] %(name)s: %(message)s")
    if len(sys.argv) > 1:
        app()
    else:
        run_menu()


if __name__ == "__main__":
    run()
