"""
Tests for the interactive menu.

The shell is driven with scripted input; its output lines are collected
and inspected.
"""

from library_catalog.catalog import Catalog
from library_catalog.cli import CatalogShell


def run_shell(catalog: Catalog, *lines: str) -> list[str]:
    """Run the menu over ``lines`` and return everything it wrote."""
    inputs = iter(lines)
    output: list[str] = []

    def read(_prompt: str) -> str:
        try:
            return next(inputs)
        except StopIteration:
            raise EOFError from None

    CatalogShell(catalog, read=read, write=output.append).run()
    return output


class TestCatalogShell:
    """Menu flow over a file-backed catalog."""

    def test_add_borrow_return_and_save(self, catalog, file_store):
        output = run_shell(
            catalog,
            "1", "Dune", "Frank Herbert", "111", "1965",
            "2", "Ann", "M1",
            "3", "M1", "111",
            "4", "M1", "111",
            "7",
        )

        assert "Book added!" in output
        assert "Member added!" in output
        assert "Book borrowed!" in output
        assert "Book returned!" in output
        assert output[-1] == "Libraries saved successfully."

        restarted = Catalog(file_store)
        restarted.load_all()
        assert restarted.find_book_by_isbn("111").title == "Dune"
        assert restarted.find_member_by_id("M1").borrowed_books == []

    def test_not_found_messages(self, catalog):
        output = run_shell(catalog, "2", "Ann", "M1", "3", "M9", "111", "4", "M1", "111", "7")

        assert "Member not found!" in output
        assert "Book not found!" in output

    def test_invalid_choice_and_year(self, catalog):
        output = run_shell(catalog, "9", "1", "Dune", "Frank Herbert", "111", "nineteen", "7")

        assert "Invalid choice!" in output
        assert any(line.startswith("Invalid book:") for line in output)
        assert catalog.list_books() == []

    def test_display_lists(self, catalog):
        output = run_shell(catalog, "1", "Dune", "Frank Herbert", "111", "1965", "5", "6", "7")

        assert "Books in Library:" in output
        assert "  Dune by Frank Herbert (ISBN 111, 1965)" in output
        assert "Members in Library:" in output

    def test_end_of_input_saves(self, catalog, data_dir):
        output = run_shell(catalog, "2", "Ann", "M1")

        assert output[-1] == "Libraries saved successfully."
        assert (data_dir / "members.json").is_file()

    def test_load_errors_reported(self, catalog, file_store):
        file_store.write("books.json", b"garbage")

        output = run_shell(catalog, "7")

        assert any(line.startswith("Error loading books:") for line in output)

    def test_corrupt_store_survives_exit(self, catalog, file_store):
        valid = (
            b'[{"title": "Dune", "author": "Frank Herbert", "isbn": "111", "publication_year": 1965}, '
            b'{"title": "Solaris", "author": "Stanislaw Lem", "isbn": "333", "publication_year": 1961}, '
            b'{"title": "Emma", "author": "Jane Austen", "isbn": "444", "publication_year": 1815}, '
            b'{"title": "Ulysses", "author": "James Joyce", "isbn": "555", "publication_year": 1922, '
            b'"genre": "Modernist"}]'
        )
        file_store.write("books.json", valid)

        output = run_shell(catalog, "7")

        assert "Not saving books: its saved copy could not be loaded and was kept." in output
        assert file_store.read("books.json") == valid
