from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps.database import get_db
from app.repositories.note import NoteRepository
from app.services.auth import AuthService
from app.services.note import NoteService


async def get_note_service(db: AsyncSession = Depends(get_db)) -> NoteService:
    """Note service bound to the request's database session."""
    return NoteService(NoteRepository(db))


async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)
