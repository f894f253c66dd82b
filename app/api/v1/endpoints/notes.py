from typing import List, Optional
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.api.deps.actor import get_actor_identity
from app.api.deps.services import get_note_service
from app.api.errors import http_error
from app.core.config import settings
from app.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from app.services.identity import AuthorIdentity
from app.services.note import NoteError, NoteService

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    note_data: NoteCreate,
    response: Response,
    note_service: NoteService = Depends(get_note_service),
):
    """Create a new note."""
    try:
        note = await note_service.create_note(note_data)
        response.headers["Location"] = f"{settings.API_V1_STR}/notes/{note.uuid}"
        return NoteResponse.model_validate(note)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error("Failed to create note", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to create note")


@router.get("/", response_model=List[NoteResponse])
async def list_notes(
    author: Optional[str] = Query(
        None, description="Only notes by this email or wallet address"
    ),
    note_service: NoteService = Depends(get_note_service),
):
    """List notes in creation order, optionally for one author."""
    try:
        author_identity = (
            AuthorIdentity.parse(author) if author and author.strip() else None
        )
        notes = await note_service.list_notes(author=author_identity)
        return [NoteResponse.model_validate(note) for note in notes]
    except Exception as e:
        logger.error("Failed to retrieve notes", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to retrieve notes")


@router.get("/{note_uuid}", response_model=NoteResponse)
async def get_note(
    note_uuid: UUID,
    note_service: NoteService = Depends(get_note_service),
):
    """Get specific note by UUID."""
    try:
        result = await note_service.get_note(note_uuid)
        if isinstance(result, NoteError):
            raise http_error(result)
        return NoteResponse.model_validate(result)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("Failed to retrieve note", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to retrieve note")


@router.put("/{note_uuid}", response_model=NoteResponse)
async def update_note(
    note_uuid: UUID,
    note_update: NoteUpdate,
    actor: Optional[AuthorIdentity] = Depends(get_actor_identity),
    note_service: NoteService = Depends(get_note_service),
):
    """Update a note's title and/or content. Only the author may do this."""
    try:
        result = await note_service.update_note(note_uuid, actor, note_update)
        if isinstance(result, NoteError):
            raise http_error(result)
        return NoteResponse.model_validate(result)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("Failed to update note", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to update note")


@router.delete("/{note_uuid}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    note_uuid: UUID,
    actor: Optional[AuthorIdentity] = Depends(get_actor_identity),
    note_service: NoteService = Depends(get_note_service),
):
    """Delete a note. Only the author may do this."""
    try:
        error = await note_service.delete_note(note_uuid, actor)
        if error is not None:
            raise http_error(error)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("Failed to delete note", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to delete note")
