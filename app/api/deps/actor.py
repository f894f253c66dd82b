from typing import Optional

import structlog
from fastapi import Header, HTTPException, status

from app.services.identity import AuthorIdentity

logger = structlog.get_logger(__name__)


async def get_actor_identity(
    x_author_email: Optional[str] = Header(
        None, description="Email of the author performing the change"
    ),
    x_wallet_address: Optional[str] = Header(
        None, description="Wallet address of the author performing the change"
    ),
) -> Optional[AuthorIdentity]:
    """
    Read the claimed actor identity from request headers.

    Returns None when no identity was supplied; the note service turns that
    into a missing-actor error for mutating calls. Blank headers count as
    absent. The value is taken at face value: no token or signature backs it.
    """
    email = (x_author_email or "").strip()
    wallet = (x_wallet_address or "").strip()

    if email and wallet:
        logger.warning("Both actor identity headers supplied")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Supply only one of X-Author-Email or X-Wallet-Address",
        )

    if email:
        return AuthorIdentity.email(email)
    if wallet:
        return AuthorIdentity.wallet(wallet)
    return None
