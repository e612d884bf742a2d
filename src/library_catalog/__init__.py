"""
Library Catalog Package.

Tracks a small library's books and members and the borrowing of books,
persisting state between runs.

Key Components:
- models: Pydantic records (Book, Member, Transaction)
- storage: PersistentCollection and the blob stores it saves to
- catalog: Borrow/return orchestration over the collections
- config: Configuration management with pydantic-settings
- tools: MCP tools exposing the catalog
- cli: Interactive text menu
"""

__version__ = "0.1.0"

from .catalog import Catalog, LoadReport, LoanOutcome, LoanResult, SaveReport
from .models import Book, Member, Transaction
from .storage import PersistentCollection

__all__ = [
    "Book",
    "Catalog",
    "LoadReport",
    "LoanOutcome",
    "LoanResult",
    "Member",
    "PersistentCollection",
    "SaveReport",
    "Transaction",
    "__version__",
]
