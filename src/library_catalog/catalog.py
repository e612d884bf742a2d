"""
Catalog: borrow/return orchestration over the persistent collections.

The catalog owns one collection each of books, members and transactions,
and implements the operations that span them. It is the single long-lived
object the CLI and the MCP server hold; nothing here is process-global.

Lookups are linear scans returning the first match, and a miss is a value
(``None`` or a LoanResult outcome), never an exception. The model is
deliberately permissive:

- duplicate ISBNs and member ids are accepted
- a book may be borrowed by any number of members at once
- returning a book the member does not hold succeeds without change
"""

import logging
from enum import Enum

from pydantic import BaseModel, Field

from .config import CatalogConfig, get_config
from .models import Book, Member, Transaction
from .storage import (
    BlobStore,
    DatabaseManager,
    FileBlobStore,
    PersistentCollection,
    SQLiteBlobStore,
    StorageException,
    StoreDecodeError,
    StoreNotFoundError,
)

logger = logging.getLogger(__name__)


class LoanOutcome(str, Enum):
    """Outcome of a borrow or return request."""

    SUCCESS = "success"
    MEMBER_NOT_FOUND = "member_not_found"
    BOOK_NOT_FOUND = "book_not_found"


class LoanResult(BaseModel):
    """Result of ``Catalog.borrow`` and ``Catalog.return_book``."""

    outcome: LoanOutcome = Field(..., description="Whether the request succeeded")
    member: Member | None = Field(None, description="The member, when found")
    book: Book | None = Field(None, description="The book, when found")
    changed: bool = Field(
        default=False,
        description="Whether the member's borrowed list changed (False for a no-op return)",
    )
    transaction: Transaction | None = Field(
        None,
        description="Transaction opened by a borrow or closed by a return",
    )

    @property
    def ok(self) -> bool:
        return self.outcome == LoanOutcome.SUCCESS


class CollectionLoadStatus(str, Enum):
    """What happened to one collection during ``Catalog.load_all``."""

    LOADED = "loaded"
    MISSING = "missing"
    IO_ERROR = "io_error"
    DECODE_ERROR = "decode_error"


class LoadReport(BaseModel):
    """Per-collection outcome of ``Catalog.load_all``."""

    statuses: dict[str, CollectionLoadStatus] = Field(default_factory=dict)
    errors: dict[str, str] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """True when every collection either loaded or started empty."""
        return all(
            status in (CollectionLoadStatus.LOADED, CollectionLoadStatus.MISSING)
            for status in self.statuses.values()
        )


class SaveReport(BaseModel):
    """Outcome of ``Catalog.save_all``."""

    saved: list[str] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)

    @property
    def complete(self) -> bool:
        """True when no collection was skipped."""
        return not self.skipped


class Catalog:
    """
    Books, members and the borrowing of books between them.

    Collections are only persisted by ``save_all`` and restored by
    ``load_all``; callers load once at startup and save at shutdown.
    """

    def __init__(
        self,
        store: BlobStore,
        *,
        books_store: str = "books.json",
        members_store: str = "members.json",
        transactions_store: str = "transactions.json",
        record_transactions: bool = True,
    ):
        self.books: PersistentCollection[Book] = PersistentCollection(Book, store)
        self.members: PersistentCollection[Member] = PersistentCollection(Member, store)
        self.transactions: PersistentCollection[Transaction] = PersistentCollection(
            Transaction, store
        )
        self.record_transactions = record_transactions
        self._stores: dict[str, tuple[PersistentCollection, str]] = {
            "books": (self.books, books_store),
            "members": (self.members, members_store),
            "transactions": (self.transactions, transactions_store),
        }
        # Collections whose last load failed; their stores are kept intact on save
        self._unsaveable: set[str] = set()

    @classmethod
    def from_config(cls, config: CatalogConfig | None = None) -> "Catalog":
        """Build a catalog on the storage backend named by the configuration."""
        config = config or get_config()
        if config.storage_backend == "sqlite":
            manager = DatabaseManager(config.get_database_url(), database_path=config.database_path)
            store: BlobStore = SQLiteBlobStore(manager)
        else:
            store = FileBlobStore(config.data_dir)
        logger.debug("Catalog using %s storage backend", config.storage_backend)
        return cls(
            store,
            books_store=config.books_store,
            members_store=config.members_store,
            transactions_store=config.transactions_store,
            record_transactions=config.record_transactions,
        )

    # === Lookups ===

    def find_book_by_isbn(self, isbn: str) -> Book | None:
        """First book with ``isbn`` in insertion order, or None."""
        return next((book for book in self.books if book.isbn == isbn), None)

    def find_member_by_id(self, member_id: str) -> Member | None:
        """First member with ``member_id`` in insertion order, or None."""
        return next((member for member in self.members if member.member_id == member_id), None)

    def list_books(self, sort_by_title: bool = False) -> list[Book]:
        books = self.books.all_items()
        return sorted(books) if sort_by_title else books

    def list_members(self) -> list[Member]:
        return self.members.all_items()

    def list_transactions(self) -> list[Transaction]:
        return self.transactions.all_items()

    def open_transactions(self, member_id: str | None = None) -> list[Transaction]:
        """Transactions not yet returned, optionally for one member."""
        return [
            transaction
            for transaction in self.transactions
            if transaction.is_open
            and (member_id is None or transaction.member.member_id == member_id)
        ]

    # === Catalog maintenance ===

    def add_book(self, title: str, author: str, isbn: str, publication_year: int) -> Book:
        """
        Create a book and append it to the catalog.

        No duplicate-ISBN check is made.

        Raises:
            pydantic.ValidationError: If a field is invalid
        """
        book = Book(title=title, author=author, isbn=isbn, publication_year=publication_year)
        self.books.add(book)
        logger.info("Added book %r (ISBN %s)", book.title, book.isbn)
        return book

    def add_member(self, name: str, member_id: str) -> Member:
        """
        Create a member and append it to the catalog.

        No duplicate-id check is made.

        Raises:
            pydantic.ValidationError: If a field is invalid
        """
        member = Member(name=name, member_id=member_id)
        self.members.add(member)
        logger.info("Added member %r (%s)", member.name, member.member_id)
        return member

    def remove_book(self, isbn: str) -> Book | None:
        """
        Remove the first book with ``isbn`` from the catalog.

        Members who borrowed it keep their copy in their borrowed list.

        Returns:
            The removed book, or None if no book has that ISBN
        """
        book = self.find_book_by_isbn(isbn)
        if book is None:
            logger.info("Remove failed - no book with ISBN %s", isbn)
            return None
        self.books.remove(book)
        logger.info("Removed book %r (ISBN %s)", book.title, book.isbn)
        return book

    # === Circulation ===

    def _lookup(self, member_id: str, isbn: str) -> LoanResult | tuple[Member, Book]:
        member = self.find_member_by_id(member_id)
        if member is None:
            logger.info("Member not found: %s", member_id)
            return LoanResult(outcome=LoanOutcome.MEMBER_NOT_FOUND)

        book = self.find_book_by_isbn(isbn)
        if book is None:
            logger.info("Book not found: %s", isbn)
            return LoanResult(outcome=LoanOutcome.BOOK_NOT_FOUND, member=member)

        return member, book

    def borrow(self, member_id: str, isbn: str) -> LoanResult:
        """
        Lend the book with ``isbn`` to the member with ``member_id``.

        Availability is not checked: the book is appended to the member's
        borrowed list even if it is already out.
        """
        found = self._lookup(member_id, isbn)
        if isinstance(found, LoanResult):
            return found
        member, book = found

        member.borrow_book(book)
        transaction = None
        if self.record_transactions:
            transaction = Transaction(book=book, member=member)
            self.transactions.add(transaction)

        logger.info("Member %s borrowed %r", member.member_id, book.title)
        return LoanResult(
            outcome=LoanOutcome.SUCCESS,
            member=member,
            book=book,
            changed=True,
            transaction=transaction,
        )

    def return_book(self, member_id: str, isbn: str) -> LoanResult:
        """
        Take back the book with ``isbn`` from the member with ``member_id``.

        If the member does not hold the book the request still succeeds,
        with ``changed`` False and no transaction touched.
        """
        found = self._lookup(member_id, isbn)
        if isinstance(found, LoanResult):
            return found
        member, book = found

        if not member.return_book(book):
            logger.info("Member %s does not hold %r; nothing to return", member.member_id, book.title)
            return LoanResult(outcome=LoanOutcome.SUCCESS, member=member, book=book)

        transaction = None
        if self.record_transactions:
            transaction = next(
                (t for t in self.open_transactions() if t.matches(member.member_id, book)),
                None,
            )
            if transaction is not None:
                transaction.close()

        logger.info("Member %s returned %r", member.member_id, book.title)
        return LoanResult(
            outcome=LoanOutcome.SUCCESS,
            member=member,
            book=book,
            changed=True,
            transaction=transaction,
        )

    # === Persistence ===

    def save_all(self, force: bool = False) -> SaveReport:
        """
        Save every collection to its store.

        A collection whose last ``load_all`` failed is skipped, so a store that
        could not be read or decoded is not overwritten with partial in-memory
        state. Pass ``force=True`` to save it anyway.

        Returns:
            Which collections were saved and which were skipped

        Raises:
            StorageException: The first save failure, after logging it
        """
        report = SaveReport()
        for label, (collection, store_name) in self._stores.items():
            if label in self._unsaveable and not force:
                logger.warning(
                    "Not saving %s: its store failed to load and would be overwritten", label
                )
                report.skipped.append(label)
                continue
            try:
                collection.save(store_name)
            except StorageException:
                logger.exception("Failed to save %s", label)
                raise
            self._unsaveable.discard(label)
            report.saved.append(label)
        return report

    def load_all(self) -> LoadReport:
        """
        Load every collection from its store.

        A missing store leaves that collection empty-started; any other
        failure is logged and reported, the collection keeps its current
        contents, and ``save_all`` skips it until a later load succeeds.
        Never raises for storage failures.
        """
        report = LoadReport()
        for label, (collection, store_name) in self._stores.items():
            try:
                collection.load(store_name)
            except StoreNotFoundError:
                logger.info("No saved %s found, starting empty", label)
                self._unsaveable.discard(label)
                report.statuses[label] = CollectionLoadStatus.MISSING
            except StoreDecodeError as e:
                logger.warning("Saved %s could not be decoded: %s", label, e)
                report.statuses[label] = CollectionLoadStatus.DECODE_ERROR
                report.errors[label] = str(e)
                self._unsaveable.add(label)
            except StorageException as e:
                logger.warning("Saved %s could not be read: %s", label, e)
                report.statuses[label] = CollectionLoadStatus.IO_ERROR
                report.errors[label] = str(e)
                self._unsaveable.add(label)
            else:
                report.statuses[label] = CollectionLoadStatus.LOADED
                self._unsaveable.discard(label)
        return report
