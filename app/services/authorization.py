import enum
from dataclasses import dataclass
from typing import Optional

import structlog

from app.models.note import Note
from app.services.identity import AuthorIdentity, identity_of

logger = structlog.get_logger(__name__)

MISSING_ACTOR = "missing actor identity"
NOT_OWNER = "not the owner"


class NoteOperation(str, enum.Enum):
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class AuthorizationDecision:
    allowed: bool
    reason: Optional[str] = None

    @classmethod
    def allow(cls) -> "AuthorizationDecision":
        return cls(True)

    @classmethod
    def deny(cls, reason: str) -> "AuthorizationDecision":
        return cls(False, reason)

    @property
    def missing_actor(self) -> bool:
        return not self.allowed and self.reason == MISSING_ACTOR


def authorize(
    note: Note, actor: Optional[AuthorIdentity], operation: NoteOperation
) -> AuthorizationDecision:
    """Decide whether ``actor`` may perform ``operation`` on ``note``.

    Only the original author may update or delete a note. The check is plain
    identity equality: wallet addresses are not signature-verified and emails
    are not tied to a login session, so anyone who knows the owner's identity
    string passes.
    """
    if actor is None or actor.is_blank:
        logger.warning(
            "Note mutation denied",
            note_uuid=str(note.uuid),
            operation=operation.value,
            reason=MISSING_ACTOR,
        )
        return AuthorizationDecision.deny(MISSING_ACTOR)

    if not identity_of(note).matches(actor):
        logger.warning(
            "Note mutation denied",
            note_uuid=str(note.uuid),
            operation=operation.value,
            actor=str(actor),
            reason=NOT_OWNER,
        )
        return AuthorizationDecision.deny(NOT_OWNER)

    logger.debug(
        "Note mutation allowed",
        note_uuid=str(note.uuid),
        operation=operation.value,
        actor=str(actor),
    )
    return AuthorizationDecision.allow()
