from typing import List

import structlog
from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.api.deps.services import get_note_service
from app.api.errors import http_error
from app.core.config import settings
from app.schemas.note import BlockchainNoteCreate, NoteResponse, TransactionVerification
from app.services.identity import AuthorIdentity
from app.services.note import NoteError, NoteService

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post(
    "/notes", response_model=NoteResponse, status_code=status.HTTP_201_CREATED
)
async def store_blockchain_note(
    note_data: BlockchainNoteCreate,
    response: Response,
    note_service: NoteService = Depends(get_note_service),
):
    """Store a note together with the hash of its on-chain transaction."""
    try:
        note = await note_service.create_blockchain_note(note_data)
        response.headers["Location"] = f"{settings.API_V1_STR}/notes/{note.uuid}"
        return NoteResponse.model_validate(note)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error("Failed to store blockchain note", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to store blockchain note")


@router.get("/notes/user/{identity}", response_model=List[NoteResponse])
async def get_user_blockchain_notes(
    identity: str,
    note_service: NoteService = Depends(get_note_service),
):
    """Blockchain notes by one author (email or wallet address)."""
    try:
        notes = await note_service.list_blockchain_notes(AuthorIdentity.parse(identity))
        return [NoteResponse.model_validate(note) for note in notes]
    except Exception as e:
        logger.error("Failed to retrieve blockchain notes", error=str(e))
        raise HTTPException(
            status_code=500, detail="Failed to retrieve blockchain notes"
        )


@router.get("/verify/{tx_hash}", response_model=TransactionVerification)
async def verify_transaction(
    tx_hash: str,
    note_service: NoteService = Depends(get_note_service),
):
    """
    Report which stored notes reference a transaction hash.

    Stub: the hash is looked up in local storage only. No blockchain node is
    queried, so "verified" does not mean the transaction exists on-chain.
    Hex digits in the hash match regardless of case.
    """
    try:
        result = await note_service.verify_transaction(tx_hash)
        if isinstance(result, NoteError):
            raise http_error(result)
        return result
    except HTTPException:
        raise
    except Exception as e:
        logger.error("Failed to verify transaction", tx_hash=tx_hash, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to verify transaction")
