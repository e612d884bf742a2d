"""
Transaction model for the Library Catalog.

A transaction records one borrow episode: which member took which book,
when, and when it came back. It is created open (no return date) and
closed exactly once.

The member is held by reference in memory, but only their name and id are
serialized; their borrowed list belongs to the members collection.
"""

from datetime import date
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializationInfo,
    field_serializer,
    model_validator,
)

from .book import Book
from .member import Member


class Transaction(BaseModel):
    """Represents a single borrow of a book by a member."""

    book: Book = Field(..., description="The borrowed book")

    member: Member = Field(..., description="The member who borrowed the book")

    borrow_date: date = Field(
        default_factory=date.today,
        description="Date the book was borrowed",
    )

    return_date: date | None = Field(
        None,
        description="Date the book was returned, unset while the loan is open",
    )

    @field_serializer("member")
    def serialize_member(self, member: Member, info: SerializationInfo) -> dict[str, Any]:
        """Serialize the member's identity only, without their borrowed books."""
        return member.model_dump(mode=info.mode, exclude={"borrowed_books"})

    @model_validator(mode="after")
    def validate_dates(self) -> "Transaction":
        """Ensure the return date does not precede the borrow date."""
        if self.return_date is not None and self.return_date < self.borrow_date:
            raise ValueError("Return date cannot be before borrow date")
        return self

    @property
    def is_open(self) -> bool:
        """True while the book has not been returned."""
        return self.return_date is None

    def close(self, on: date | None = None) -> None:
        """
        Record the return of the book.

        Args:
            on: Return date, defaults to today

        Raises:
            ValueError: If the transaction was already closed or the date
                precedes the borrow date
        """
        if not self.is_open:
            raise ValueError(f"Transaction for '{self.book.title}' is already closed")
        returned = on or date.today()
        if returned < self.borrow_date:
            raise ValueError("Return date cannot be before borrow date")
        self.return_date = returned

    def matches(self, member_id: str, book: Book) -> bool:
        """Check whether this transaction is for ``member_id`` borrowing ``book``."""
        return self.member.member_id == member_id and self.book == book

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )
