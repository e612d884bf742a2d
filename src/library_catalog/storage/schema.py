"""
SQLAlchemy schema for the SQLite blob store.

Each persistent collection is saved whole, so the table holds one opaque
payload per store name rather than one row per record.
"""

from sqlalchemy import Column, DateTime, Integer, LargeBinary, String
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class CollectionBlob(Base):
    """
    Collection blobs table - one serialized collection per row.

    The payload is replaced as a unit on every save.
    """

    __tablename__ = "collection_blobs"

    name = Column(String(255), primary_key=True)
    payload = Column(LargeBinary, nullable=False)
    size = Column(Integer, nullable=False, default=0)

    saved_at = Column(DateTime, nullable=False, default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<CollectionBlob(name='{self.name}', size={self.size})>"
