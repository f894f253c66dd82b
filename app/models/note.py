import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, Uuid

from app.core.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuthorKind(enum.Enum):
    EMAIL = "email"
    WALLET = "wallet"


class Note(Base):
    """A short text note owned by an email or wallet-address author."""

    __tablename__ = "notes"

    # Core identity
    id = Column(Integer, primary_key=True, index=True)
    uuid = Column(Uuid(), unique=True, nullable=False, default=uuid.uuid4, index=True)

    # Content
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)

    # Ownership, frozen after creation
    author_kind = Column(String(10), nullable=False, index=True)
    author_identity = Column(String(255), nullable=False, index=True)
    author_name = Column(String(150), nullable=False)

    # Blockchain metadata, never checked against a ledger
    blockchain_tx_hash = Column(String(66), nullable=True, index=True)
    blockchain_note_id = Column(Integer, nullable=True)
    is_blockchain_note = Column(Boolean, default=False, nullable=False)

    # Audit timestamps
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    def touch(self) -> None:
        """Refresh the modification timestamp."""
        self.updated_at = _utcnow()

    def __repr__(self):
        return (
            f"<Note(id={self.id}, uuid='{self.uuid}', title='{self.title}', "
            f"author='{self.author_kind}:{self.author_identity}')>"
        )
