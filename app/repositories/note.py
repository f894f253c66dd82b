from typing import List, Optional, Protocol
from uuid import UUID

import structlog
from sqlalchemy import and_, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.note import AuthorKind, Note
from app.services.identity import AuthorIdentity

logger = structlog.get_logger(__name__)


class NoteStore(Protocol):
    """Persistence contract the note service depends on.

    Lists come back in insertion order. Writes are last-write-wins; the store
    does no locking of its own.
    """

    async def get_by_uuid(self, note_uuid: UUID) -> Optional[Note]: ...

    async def list_notes(
        self, author: Optional[AuthorIdentity] = None, blockchain_only: bool = False
    ) -> List[Note]: ...

    async def list_by_tx_hash(self, tx_hash: str) -> List[Note]: ...

    async def add(self, note: Note) -> Note: ...

    async def save(self, note: Note) -> Note: ...

    async def delete(self, note: Note) -> None: ...


class NoteRepository:
    """SQLAlchemy-backed note store bound to one session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_uuid(self, note_uuid: UUID) -> Optional[Note]:
        try:
            result = await self.db.execute(select(Note).where(Note.uuid == note_uuid))
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error("Failed to get note", note_uuid=str(note_uuid), error=str(e))
            raise

    async def list_notes(
        self, author: Optional[AuthorIdentity] = None, blockchain_only: bool = False
    ) -> List[Note]:
        try:
            query = select(Note)

            if author is not None:
                query = query.where(_author_clause(author))
            if blockchain_only:
                query = query.where(Note.is_blockchain_note.is_(True))

            result = await self.db.execute(query.order_by(Note.id.asc()))
            return list(result.scalars().all())
        except Exception as e:
            logger.error(
                "Failed to list notes",
                author=str(author) if author else None,
                error=str(e),
            )
            raise

    async def list_by_tx_hash(self, tx_hash: str) -> List[Note]:
        try:
            result = await self.db.execute(
                select(Note)
                .where(Note.blockchain_tx_hash == tx_hash)
                .order_by(Note.id.asc())
            )
            return list(result.scalars().all())
        except Exception as e:
            logger.error("Failed to look up transaction", tx_hash=tx_hash, error=str(e))
            raise

    async def add(self, note: Note) -> Note:
        try:
            self.db.add(note)
            await self.db.commit()
            await self.db.refresh(note)
            return note
        except IntegrityError as e:
            await self.db.rollback()
            logger.error(
                "Failed to store note due to integrity constraint", error=str(e)
            )
            raise ValueError("Note could not be stored: constraint violation")
        except Exception as e:
            await self.db.rollback()
            logger.error("Failed to store note", error=str(e))
            raise

    async def save(self, note: Note) -> Note:
        try:
            await self.db.commit()
            await self.db.refresh(note)
            return note
        except Exception as e:
            await self.db.rollback()
            logger.error("Failed to save note", note_uuid=str(note.uuid), error=str(e))
            raise

    async def delete(self, note: Note) -> None:
        try:
            await self.db.delete(note)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(
                "Failed to delete note", note_uuid=str(note.uuid), error=str(e)
            )
            raise


def _author_clause(author: AuthorIdentity):
    if author.kind == AuthorKind.EMAIL:
        return and_(
            Note.author_kind == AuthorKind.EMAIL.value,
            func.lower(Note.author_identity) == author.value.lower(),
        )
    return and_(
        Note.author_kind == AuthorKind.WALLET.value,
        Note.author_identity == author.value,
    )
