from fastapi import HTTPException, status

from app.services.note import NoteError, NoteErrorCode

NOTE_ERROR_STATUS = {
    NoteErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    NoteErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    NoteErrorCode.MISSING_ACTOR: status.HTTP_401_UNAUTHORIZED,
}


def http_error(error: NoteError) -> HTTPException:
    """Translate a note service error value into an HTTP error."""
    return HTTPException(status_code=NOTE_ERROR_STATUS[error.code], detail=error.detail)
