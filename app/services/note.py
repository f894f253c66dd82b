import enum
from dataclasses import dataclass
from typing import List, Optional, Union
from uuid import UUID

import structlog

from app.models.note import Note
from app.repositories.note import NoteStore
from app.schemas.note import NoteCreate, NoteUpdate, TransactionVerification, NoteResponse
from app.services.authorization import NoteOperation, authorize
from app.services.identity import AuthorIdentity, resolve_author_name
from app.utils.validation import normalize_tx_hash

logger = structlog.get_logger(__name__)


class NoteErrorCode(str, enum.Enum):
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    MISSING_ACTOR = "missing_actor"


@dataclass(frozen=True)
class NoteError:
    """Domain failure returned (not raised) by the note service."""

    code: NoteErrorCode
    detail: str

    @classmethod
    def not_found(cls, detail: str = "Note not found") -> "NoteError":
        return cls(NoteErrorCode.NOT_FOUND, detail)


NoteResult = Union[Note, NoteError]


class NoteService:
    """Note lifecycle: create, read, update, delete.

    Notes exist until deleted; there is no intermediate state. Update and
    delete look the note up first and only then check ownership, so an
    unknown id is always reported as not found.
    """

    def __init__(self, store: NoteStore):
        self.store = store

    async def create_note(self, note_data: NoteCreate) -> Note:
        """Create a note owned by the email or wallet in ``note_data``."""
        if note_data.author_email is not None:
            author = AuthorIdentity.email(note_data.author_email)
        else:
            author = AuthorIdentity.wallet(note_data.wallet_address)

        note = Note(
            title=note_data.title.strip(),
            content=note_data.content,
            author_kind=author.kind.value,
            author_identity=author.value,
            author_name=resolve_author_name(
                author, note_data.author_name, raw_email=note_data.author_email
            ),
            blockchain_tx_hash=note_data.blockchain_tx_hash,
            blockchain_note_id=note_data.blockchain_note_id,
            is_blockchain_note=note_data.is_blockchain_note,
        )
        note = await self.store.add(note)

        logger.info(
            "Note created successfully",
            note_uuid=str(note.uuid),
            author=str(author),
            is_blockchain_note=note.is_blockchain_note,
        )
        return note

    async def create_blockchain_note(self, note_data: NoteCreate) -> Note:
        """Store a note that carries a transaction hash of its on-chain copy."""
        if not note_data.blockchain_tx_hash or not note_data.blockchain_tx_hash.strip():
            raise ValueError("blockchain_tx_hash is required for blockchain notes")

        return await self.create_note(
            note_data.model_copy(update={"is_blockchain_note": True})
        )

    async def get_note(self, note_uuid: UUID) -> NoteResult:
        note = await self.store.get_by_uuid(note_uuid)
        if not note:
            logger.warning("Note not found", note_uuid=str(note_uuid))
            return NoteError.not_found()
        return note

    async def list_notes(self, author: Optional[AuthorIdentity] = None) -> List[Note]:
        """All notes, or only those owned by ``author``, oldest first."""
        notes = await self.store.list_notes(author=author)
        logger.info(
            "Retrieved notes",
            count=len(notes),
            author=str(author) if author else None,
        )
        return notes

    async def list_blockchain_notes(self, author: AuthorIdentity) -> List[Note]:
        notes = await self.store.list_notes(author=author, blockchain_only=True)
        logger.info("Retrieved blockchain notes", count=len(notes), author=str(author))
        return notes

    async def update_note(
        self,
        note_uuid: UUID,
        actor: Optional[AuthorIdentity],
        note_update: NoteUpdate,
    ) -> NoteResult:
        """Overwrite title/content if ``actor`` owns the note."""
        note = await self.store.get_by_uuid(note_uuid)
        if not note:
            logger.warning("Note not found for update", note_uuid=str(note_uuid))
            return NoteError.not_found()

        denied = self._check(note, actor, NoteOperation.UPDATE)
        if denied:
            return denied

        update_data = note_update.model_dump(exclude_unset=True, exclude_none=True)
        if "title" in update_data:
            note.title = update_data["title"].strip()
        if "content" in update_data:
            note.content = update_data["content"]
        note.touch()

        note = await self.store.save(note)
        logger.info(
            "Note updated successfully",
            note_uuid=str(note.uuid),
            updated_fields=list(update_data.keys()),
        )
        return note

    async def delete_note(
        self, note_uuid: UUID, actor: Optional[AuthorIdentity]
    ) -> Optional[NoteError]:
        """Remove the note if ``actor`` owns it. Returns None on success."""
        note = await self.store.get_by_uuid(note_uuid)
        if not note:
            logger.warning("Note not found for delete", note_uuid=str(note_uuid))
            return NoteError.not_found()

        denied = self._check(note, actor, NoteOperation.DELETE)
        if denied:
            return denied

        await self.store.delete(note)
        logger.info("Note deleted", note_uuid=str(note_uuid))
        return None

    async def verify_transaction(
        self, tx_hash: str
    ) -> Union[TransactionVerification, NoteError]:
        """Look up notes carrying ``tx_hash`` in local storage.

        This never queries a blockchain; "verified" only means at least one
        stored note references the hash. Hex digits match regardless of case.
        """
        tx_hash = normalize_tx_hash(tx_hash)
        notes = await self.store.list_by_tx_hash(tx_hash)
        if not notes:
            logger.warning("No notes for transaction", tx_hash=tx_hash)
            return NoteError.not_found("No notes found for transaction")

        return TransactionVerification(
            verified=True,
            transaction_hash=tx_hash,
            note_count=len(notes),
            notes=[NoteResponse.model_validate(note) for note in notes],
        )

    @staticmethod
    def _check(
        note: Note, actor: Optional[AuthorIdentity], operation: NoteOperation
    ) -> Optional[NoteError]:
        decision = authorize(note, actor, operation)
        if decision.allowed:
            return None
        if decision.missing_actor:
            return NoteError(NoteErrorCode.MISSING_ACTOR, "Actor identity is required")
        return NoteError(
            NoteErrorCode.FORBIDDEN,
            f"Only the author may {operation.value} this note",
        )
