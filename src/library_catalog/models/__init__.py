"""
Library Catalog Models.

Pydantic models for the records the catalog stores. These provide:

1. Data validation using Pydantic v2
2. Structural (field-by-field) equality used for lookups and removal
3. JSON serialization used by the persistent collections

The models represent:
- Book: Catalog items, naturally ordered by title
- Member: Library members and the books they currently hold
- Transaction: One borrow episode with its borrow and return dates
"""

from .book import Book
from .member import Member
from .transaction import Transaction

__all__ = [
    "Book",
    "Member",
    "Transaction",
]
