"""
Generic persistent collection for the Library Catalog.

A PersistentCollection holds an ordered, duplicate-permitting list of
records of one pydantic model type and saves or restores the whole list
as a unit. Memory and the store are only synchronized at explicit
``save``/``load`` calls; mutations are never written through.

The payload is a JSON array produced and validated by a pydantic
TypeAdapter for ``list[T]``, so a payload saved by a books collection
fails validation when loaded into a members collection.
"""

import logging
from collections.abc import Iterator
from typing import Generic, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from .backends import BlobStore
from .errors import StoreDecodeError

logger = logging.getLogger(__name__)

ItemType = TypeVar("ItemType", bound=BaseModel)


class PersistentCollection(Generic[ItemType]):
    """
    Ordered collection of records of a single type with whole-list persistence.

    ```python
    books = PersistentCollection(Book, FileBlobStore("data"))
    books.add(Book(title="Dune", author="Frank Herbert", isbn="111", publication_year=1965))
    books.save("books.json")
    ```
    """

    def __init__(self, item_type: type[ItemType], store: BlobStore):
        """
        Initialize an empty collection.

        Args:
            item_type: Pydantic model class of the stored records
            store: Blob store used by save and load
        """
        self.item_type = item_type
        self.store = store
        self._items: list[ItemType] = []
        self._adapter = TypeAdapter(list[item_type])

    def add(self, item: ItemType) -> None:
        """Append ``item``. Duplicates are allowed."""
        self._items.append(item)

    def remove(self, item: ItemType) -> bool:
        """
        Remove the first element equal to ``item``.

        Returns:
            True if an element was removed, False if none matched (the
            collection is left unchanged)
        """
        for index, existing in enumerate(self._items):
            if existing == item:
                del self._items[index]
                return True
        return False

    def all_items(self) -> list[ItemType]:
        """Snapshot of the items in insertion order."""
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()

    def save(self, destination: str) -> None:
        """
        Serialize the whole collection to ``destination``, replacing its content.

        Raises:
            StoreIOError: If the store cannot be written
        """
        payload = self._adapter.dump_json(self._items, indent=2)
        self.store.write(destination, payload)
        logger.info(
            "Saved %d %s record(s) to %s",
            len(self._items),
            self.item_type.__name__,
            self.store.describe(destination),
        )

    def load(self, source: str) -> None:
        """
        Replace the in-memory items with those saved in ``source``.

        The items are only replaced once the whole payload has decoded, so a
        failure leaves the collection as it was.

        Raises:
            StoreNotFoundError: If ``source`` does not exist
            StoreIOError: If ``source`` cannot be read
            StoreDecodeError: If ``source`` does not hold a list of ``item_type``
        """
        payload = self.store.read(source)
        try:
            items = self._adapter.validate_json(payload)
        except ValidationError as e:
            raise StoreDecodeError(
                f"{self.store.describe(source)} is not a valid list of "
                f"{self.item_type.__name__}: {e.error_count()} error(s)"
            ) from e

        self._items = items
        logger.info(
            "Loaded %d %s record(s) from %s",
            len(items),
            self.item_type.__name__,
            self.store.describe(source),
        )

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ItemType]:
        return iter(self._items)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __repr__(self) -> str:
        return f"PersistentCollection[{self.item_type.__name__}]({self._items!r})"
