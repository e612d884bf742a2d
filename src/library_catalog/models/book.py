"""
Book model for the Library Catalog.

A book is identified by its ISBN for lookups, but equality is structural:
two books are equal only when every field matches. The catalog relies on
this when a member returns a book, since the returned book must equal the
one that was borrowed.

Books sort by title, so ``sorted(catalog.list_books())`` yields the
catalog in alphabetical order.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Book(BaseModel):
    """
    Represents a book in the library catalog.

    The ISBN is the lookup key but is not required to be unique; a catalog
    may hold two books with the same ISBN, and lookups return the first.
    """

    title: str = Field(
        ...,
        description="The title of the book",
        min_length=1,
        max_length=500,
        examples=["Dune", "The Left Hand of Darkness"],
    )

    author: str = Field(
        ...,
        description="Name of the book's author",
        min_length=1,
        max_length=200,
        examples=["Frank Herbert", "Ursula K. Le Guin"],
    )

    isbn: str = Field(
        ...,
        description="International Standard Book Number, used as the lookup key",
        min_length=1,
        max_length=32,
        examples=["9780441013593", "111"],
    )

    publication_year: int = Field(
        ...,
        description="Year the book was published",
        le=datetime.now().year + 1,  # Allow pre-publication for upcoming books
        examples=[1965, 1969],
    )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Book):
            return NotImplemented
        return self.title < other.title

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Book):
            return NotImplemented
        return self.title > other.title

    def __str__(self) -> str:
        return f"{self.title} by {self.author} (ISBN {self.isbn}, {self.publication_year})"

    model_config = ConfigDict(
        # Setters validate like the constructor does
        validate_assignment=True,
        extra="forbid",
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "title": "Dune",
                "author": "Frank Herbert",
                "isbn": "9780441013593",
                "publication_year": 1965,
            }
        },
    )
