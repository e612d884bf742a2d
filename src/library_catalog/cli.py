"""Interactive text menu for the Library Catalog.

Translates menu choices into Catalog calls and prints the results. The
catalog is loaded once at start and saved when the user picks
"Save & Exit" (or input ends).
"""

import logging
from collections.abc import Callable

from pydantic import ValidationError

from .catalog import Catalog, LoanOutcome, LoanResult
from .config import configure_logging, get_config
from .storage import StorageException

logger = logging.getLogger(__name__)

MENU = """
Library Management System
1. Add Book
2. Add Member
3. Borrow Book
4. Return Book
5. Display All Books
6. Display All Members
7. Save & Exit"""


class CatalogShell:
    """Menu loop over one Catalog.

    ``read`` is called with a prompt and returns the user's line;
    ``write`` receives each line of output. Both default to the console.
    """

    def __init__(
        self,
        catalog: Catalog,
        read: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ):
        self.catalog = catalog
        self.read = read
        self.write = write
        self._actions: dict[str, Callable[[], None]] = {
            "1": self.add_book,
            "2": self.add_member,
            "3": self.borrow_book,
            "4": self.return_book,
            "5": self.display_books,
            "6": self.display_members,
        }

    def run(self) -> None:
        self.load()
        while True:
            self.write(MENU)
            try:
                choice = self.read("Choice: ").strip()
            except EOFError:
                choice = "7"
            if choice == "7":
                self.save()
                return
            action = self._actions.get(choice)
            if action is None:
                self.write("Invalid choice!")
                continue
            try:
                action()
            except EOFError:
                self.save()
                return

    def load(self) -> None:
        report = self.catalog.load_all()
        if report.ok:
            self.write("Libraries loaded successfully.")
        else:
            for label, error in report.errors.items():
                self.write(f"Error loading {label}: {error}")

    def save(self) -> None:
        try:
            report = self.catalog.save_all()
        except StorageException as e:
            self.write(f"Error saving libraries: {e}")
            return
        for label in report.skipped:
            self.write(f"Not saving {label}: its saved copy could not be loaded and was kept.")
        if report.saved:
            self.write("Libraries saved successfully.")

    def add_book(self) -> None:
        title = self.read("Enter title: ")
        author = self.read("Enter author: ")
        isbn = self.read("Enter ISBN: ")
        year = self.read("Enter publication year: ")
        try:
            self.catalog.add_book(title, author, isbn, int(year))
        except ValueError as e:
            # ValidationError is a ValueError, as is a non-numeric year
            self.write(f"Invalid book: {_describe(e)}")
            return
        self.write("Book added!")

    def add_member(self) -> None:
        name = self.read("Enter name: ")
        member_id = self.read("Enter member ID: ")
        try:
            self.catalog.add_member(name, member_id)
        except ValidationError as e:
            self.write(f"Invalid member: {_describe(e)}")
            return
        self.write("Member added!")

    def borrow_book(self) -> None:
        member_id = self.read("Enter member ID: ")
        isbn = self.read("Enter ISBN of the book to borrow: ")
        self._report(self.catalog.borrow(member_id, isbn), "Book borrowed!")

    def return_book(self) -> None:
        member_id = self.read("Enter member ID: ")
        isbn = self.read("Enter ISBN of the book to return: ")
        self._report(self.catalog.return_book(member_id, isbn), "Book returned!")

    def display_books(self) -> None:
        self.write("Books in Library:")
        for book in self.catalog.list_books():
            self.write(f"  {book}")

    def display_members(self) -> None:
        self.write("Members in Library:")
        for member in self.catalog.list_members():
            self.write(f"  {member}")

    def _report(self, result: LoanResult, success: str) -> None:
        if result.outcome == LoanOutcome.MEMBER_NOT_FOUND:
            self.write("Member not found!")
        elif result.outcome == LoanOutcome.BOOK_NOT_FOUND:
            self.write("Book not found!")
        else:
            self.write(success)


def _describe(error: ValueError) -> str:
    if isinstance(error, ValidationError):
        return "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in error.errors())
    return str(error)


def main() -> None:
    """Entry point: ``library-catalog``."""
    config = get_config()
    configure_logging(config)
    CatalogShell(Catalog.from_config(config)).run()


if __name__ == "__main__":
    main()
