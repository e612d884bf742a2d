"""
Catalog tools for the Library Catalog MCP server.

Each tool is a descriptor dictionary (name, description, input schema,
handler) built around one Catalog instance. Handlers:

1. Validate the raw arguments with a pydantic input model
2. Call the catalog
3. Return ``{"content": [...], "data": {...}}`` on success, or the same
   shape with ``"isError": True``; they never raise
"""

import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from ..catalog import Catalog, LoanOutcome, LoanResult
from ..storage import StorageException

logger = logging.getLogger(__name__)


class AddBookInput(BaseModel):
    """Input schema for the add_book tool."""

    title: str = Field(..., description="Title of the book", examples=["Dune"])
    author: str = Field(..., description="Author of the book", examples=["Frank Herbert"])
    isbn: str = Field(..., description="ISBN used to look the book up", examples=["9780441013593"])
    publication_year: int = Field(..., description="Year of publication", examples=[1965])


class AddMemberInput(BaseModel):
    """Input schema for the add_member tool."""

    name: str = Field(..., description="Full name of the member", examples=["Ann Smith"])
    member_id: str = Field(..., description="Identifier of the member", examples=["M1"])


class LoanInput(BaseModel):
    """Input schema for the borrow_book and return_book tools."""

    member_id: str = Field(..., description="Identifier of the member", examples=["M1"])
    isbn: str = Field(..., description="ISBN of the book", examples=["9780441013593"])


class ListBooksInput(BaseModel):
    """Input schema for the list_books tool."""

    sort_by_title: bool = Field(default=False, description="Sort books alphabetically by title")


def _text(message: str, data: dict[str, Any] | None = None) -> dict[str, Any]:
    response: dict[str, Any] = {"content": [{"type": "text", "text": message}]}
    if data is not None:
        response["data"] = data
    return response


def _error(message: str) -> dict[str, Any]:
    return {"isError": True, "content": [{"type": "text", "text": message}]}


def _loan_response(result: LoanResult, member_id: str, isbn: str, verb: str) -> dict[str, Any]:
    if result.outcome == LoanOutcome.MEMBER_NOT_FOUND:
        return _error(f"Member not found: {member_id}")
    if result.outcome == LoanOutcome.BOOK_NOT_FOUND:
        return _error(f"Book not found: {isbn}")

    if result.changed:
        message = f"Member '{member_id}' {verb} '{result.book.title}'"
    else:
        message = f"Member '{member_id}' does not hold '{result.book.title}'; nothing returned"

    data: dict[str, Any] = {
        "outcome": result.outcome.value,
        "changed": result.changed,
        "member": result.member.model_dump(mode="json"),
    }
    if result.transaction is not None:
        data["transaction"] = result.transaction.model_dump(mode="json", exclude={"member"})
    return _text(message, data)


def build_catalog_tools(catalog: Catalog) -> list[dict[str, Any]]:
    """
    Build the tool descriptors for ``catalog``.

    Returns:
        List of dictionaries with ``name``, ``description``, ``inputSchema``
        and ``handler`` keys, ready for server registration
    """

    async def add_book_handler(arguments: dict[str, Any]) -> dict[str, Any]:
        try:
            params = AddBookInput.model_validate(arguments)
            book = catalog.add_book(
                params.title, params.author, params.isbn, params.publication_year
            )
        except ValidationError as e:
            logger.warning("Invalid add_book parameters: %s", e)
            return _error(f"Invalid book: {e}")
        return _text(f"Added book '{book.title}'", {"book": book.model_dump(mode="json")})

    async def add_member_handler(arguments: dict[str, Any]) -> dict[str, Any]:
        try:
            params = AddMemberInput.model_validate(arguments)
            member = catalog.add_member(params.name, params.member_id)
        except ValidationError as e:
            logger.warning("Invalid add_member parameters: %s", e)
            return _error(f"Invalid member: {e}")
        return _text(f"Added member '{member.name}'", {"member": member.model_dump(mode="json")})

    async def borrow_book_handler(arguments: dict[str, Any]) -> dict[str, Any]:
        try:
            params = LoanInput.model_validate(arguments)
        except ValidationError as e:
            logger.warning("Invalid borrow_book parameters: %s", e)
            return _error(f"Invalid borrow parameters: {e}")
        result = catalog.borrow(params.member_id, params.isbn)
        return _loan_response(result, params.member_id, params.isbn, "borrowed")

    async def return_book_handler(arguments: dict[str, Any]) -> dict[str, Any]:
        try:
            params = LoanInput.model_validate(arguments)
        except ValidationError as e:
            logger.warning("Invalid return_book parameters: %s", e)
            return _error(f"Invalid return parameters: {e}")
        result = catalog.return_book(params.member_id, params.isbn)
        return _loan_response(result, params.member_id, params.isbn, "returned")

    async def list_books_handler(arguments: dict[str, Any]) -> dict[str, Any]:
        try:
            params = ListBooksInput.model_validate(arguments or {})
        except ValidationError as e:
            return _error(f"Invalid list parameters: {e}")
        books = catalog.list_books(sort_by_title=params.sort_by_title)
        lines = [str(book) for book in books] or ["No books in the catalog"]
        return _text("\n".join(lines), {"books": [book.model_dump(mode="json") for book in books]})

    async def list_members_handler(arguments: dict[str, Any]) -> dict[str, Any]:  # noqa: ARG001
        members = catalog.list_members()
        lines = [str(member) for member in members] or ["No members registered"]
        return _text(
            "\n".join(lines), {"members": [member.model_dump(mode="json") for member in members]}
        )

    async def save_catalog_handler(arguments: dict[str, Any]) -> dict[str, Any]:  # noqa: ARG001
        try:
            report = catalog.save_all()
        except StorageException as e:
            return _error(f"Saving the catalog failed: {e}")
        message = "Catalog saved"
        if report.skipped:
            message += f"; kept unreadable stores for: {', '.join(report.skipped)}"
        return _text(
            message,
            {
                "books": len(catalog.books),
                "members": len(catalog.members),
                "skipped": report.skipped,
            },
        )

    return [
        {
            "name": "add_book",
            "description": "Add a book to the catalog. Duplicate ISBNs are accepted.",
            "inputSchema": AddBookInput.model_json_schema(),
            "handler": add_book_handler,
        },
        {
            "name": "add_member",
            "description": "Register a library member. Duplicate member ids are accepted.",
            "inputSchema": AddMemberInput.model_json_schema(),
            "handler": add_member_handler,
        },
        {
            "name": "borrow_book",
            "description": (
                "Lend a book, found by ISBN, to a member, found by id. "
                "The book's availability is not checked."
            ),
            "inputSchema": LoanInput.model_json_schema(),
            "handler": borrow_book_handler,
        },
        {
            "name": "return_book",
            "description": (
                "Return a book, found by ISBN, from a member, found by id. "
                "Returning a book the member does not hold changes nothing."
            ),
            "inputSchema": LoanInput.model_json_schema(),
            "handler": return_book_handler,
        },
        {
            "name": "list_books",
            "description": "List every book in the catalog, optionally sorted by title.",
            "inputSchema": ListBooksInput.model_json_schema(),
            "handler": list_books_handler,
        },
        {
            "name": "list_members",
            "description": "List every member with the books they have borrowed.",
            "inputSchema": {"type": "object", "properties": {}},
            "handler": list_members_handler,
        },
        {
            "name": "save_catalog",
            "description": "Persist books, members and transactions to storage.",
            "inputSchema": {"type": "object", "properties": {}},
            "handler": save_catalog_handler,
        },
    ]
