"""
Member model for the Library Catalog.

A member holds an ordered list of the books they have borrowed. The list
is a multiset: borrowing the same book twice records it twice, and a
return removes a single entry.
"""

from pydantic import BaseModel, ConfigDict, Field

from .book import Book


class Member(BaseModel):
    """
    Represents a library member who can borrow books.

    Member ids are the lookup key but are not required to be unique.
    """

    name: str = Field(
        ...,
        description="Full name of the member",
        min_length=1,
        max_length=200,
        examples=["Ann Smith", "Jane Doe"],
    )

    member_id: str = Field(
        ...,
        description="Identifier used to look the member up",
        min_length=1,
        max_length=64,
        examples=["M1", "member-0042"],
    )

    borrowed_books: list[Book] = Field(
        default_factory=list,
        description="Books currently borrowed, in the order they were borrowed",
    )

    def borrow_book(self, book: Book) -> None:
        """Record that the member borrowed ``book``."""
        self.borrowed_books.append(book)

    def return_book(self, book: Book) -> bool:
        """
        Remove the first borrowed entry equal to ``book``.

        Returns:
            True if an entry was removed, False if the member did not hold
            the book (the borrowed list is left unchanged).
        """
        for index, held in enumerate(self.borrowed_books):
            if held == book:
                del self.borrowed_books[index]
                return True
        return False

    def borrowed_count(self, book: Book) -> int:
        """Number of entries in the borrowed list equal to ``book``."""
        return sum(1 for held in self.borrowed_books if held == book)

    def __str__(self) -> str:
        titles = ", ".join(book.title for book in self.borrowed_books) or "none"
        return f"{self.name} ({self.member_id}) - borrowed: {titles}"

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "name": "Ann Smith",
                "member_id": "M1",
                "borrowed_books": [],
            }
        },
    )
