"""
Tests for the Member model.

These tests verify that the Member model correctly:
1. Validates its identity fields
2. Records borrows in order, duplicates included
3. Removes only the first matching entry on return
"""

import pytest
from pydantic import ValidationError

from library_catalog.models import Book, Member


class TestMemberModel:
    """Test suite for the Member model."""

    def test_create_valid_member(self):
        """Test a new member holds no books."""
        member = Member(name="Ann", member_id="M1")

        assert member.name == "Ann"
        assert member.member_id == "M1"
        assert member.borrowed_books == []

    def test_identity_fields_required(self):
        """Test blank name or id is rejected."""
        with pytest.raises(ValidationError):
            Member(name="", member_id="M1")
        with pytest.raises(ValidationError):
            Member(name="Ann", member_id="  ")

    def test_borrowed_lists_not_shared(self):
        """Test each member gets its own borrowed list."""
        first = Member(name="Ann", member_id="M1")
        second = Member(name="Bob", member_id="M2")

        first.borrow_book(Book(title="Dune", author="A", isbn="1", publication_year=1965))

        assert second.borrowed_books == []


class TestBorrowAndReturn:
    """Borrowed books behave as an ordered multiset."""

    def test_borrow_appends_in_order(self, ann, sample_books):
        for book in sample_books:
            ann.borrow_book(book)

        assert ann.borrowed_books == sample_books

    def test_borrow_same_book_twice(self, ann, dune):
        ann.borrow_book(dune)
        ann.borrow_book(dune)

        assert ann.borrowed_count(dune) == 2

    def test_return_removes_first_match_only(self, ann, dune, sample_books):
        solaris = sample_books[0]
        ann.borrow_book(dune)
        ann.borrow_book(solaris)
        ann.borrow_book(dune)

        assert ann.return_book(dune) is True
        assert ann.borrowed_books == [solaris, dune]

    def test_return_matches_structurally(self, ann, dune):
        ann.borrow_book(dune)
        copy = Book(title="Dune", author="Frank Herbert", isbn="111", publication_year=1965)

        assert ann.return_book(copy) is True
        assert ann.borrowed_books == []

    def test_return_unborrowed_book_is_noop(self, ann, dune, sample_books):
        ann.borrow_book(sample_books[0])

        assert ann.return_book(dune) is False
        assert ann.borrowed_books == [sample_books[0]]

    def test_str_lists_titles(self, ann, dune):
        assert str(ann) == "Ann (M1) - borrowed: none"
        ann.borrow_book(dune)
        assert str(ann) == "Ann (M1) - borrowed: Dune"
