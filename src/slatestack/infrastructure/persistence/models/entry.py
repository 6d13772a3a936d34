"""SQLAlchemy model for the entries table."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from slatestack.infrastructure.persistence.database import Base


class EntryModel(Base):
    """SQLAlchemy model for the entries table.

    The ``(collection_id, slug)`` unique constraint is the authority on slug
    uniqueness; the service-level slug check only picks a candidate.

    Attributes:
        id: Primary key.
        collection_id: Owning collection.
        slug: URL-safe identifier, unique per collection.
        data: JSON-encoded entry data.
        status: 'draft' or 'published'.
        position: Manual ordering index.
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.
    """

    __tablename__ = "entries"
    __table_args__ = (
        UniqueConstraint("collection_id", "slug", name="uq_entries_collection_slug"),
        Index("ix_entries_collection_position", "collection_id", "position"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    collection_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("collections.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    data: Mapped[str] = mapped_column(Text, nullable=False, default="{}")
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="draft", index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return f"<Entry(id={self.id}, collection_id={self.collection_id}, slug={self.slug})>"
